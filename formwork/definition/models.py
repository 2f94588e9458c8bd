"""Pydantic models for form definitions.

Definitions are immutable: models are frozen and every mapping they expose
is a read-only ``MappingProxyType``.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from formwork.errors import ConfigurationError

if TYPE_CHECKING:
    from formwork.model.base import FormModel


class FormMethod(str, Enum):
    """HTTP method a form submits with."""

    GET = "GET"
    POST = "POST"


class InputType(str, Enum):
    """Closed set of input element types."""

    TEXT = "text"
    HIDDEN = "hidden"
    PASSWORD = "password"
    TEXTAREA = "textarea"
    FILE = "file"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    LISTBOX = "listbox"
    DROPDOWNLIST = "dropdownlist"
    CHECKBOXLIST = "checkboxlist"
    RADIOLIST = "radiolist"
    URL = "url"
    EMAIL = "email"
    NUMBER = "number"
    RANGE = "range"
    DATE = "date"

    @property
    def is_list(self) -> bool:
        """Whether this type renders a choice set from ``items``."""
        return self in LIST_INPUT_TYPES


LIST_INPUT_TYPES = frozenset(
    {
        InputType.LISTBOX,
        InputType.DROPDOWNLIST,
        InputType.CHECKBOXLIST,
        InputType.RADIOLIST,
    }
)


class ButtonType(str, Enum):
    """Closed set of button element types."""

    HTML_BUTTON = "htmlButton"
    HTML_RESET = "htmlReset"
    HTML_SUBMIT = "htmlSubmit"
    SUBMIT = "submit"
    BUTTON = "button"
    IMAGE = "image"
    RESET = "reset"
    LINK = "link"


MULTI_VALUE_SUFFIX = "[]"


def read_only(value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Wrap a validated mapping in a read-only proxy."""
    if value is None or isinstance(value, MappingProxyType):
        return value
    return MappingProxyType(dict(value))


class InputElement(BaseModel):
    """A named input element of a form."""

    name: str
    type: InputType = InputType.TEXT
    label: str | None = None
    hint: str | None = None
    items: Mapping[str, str] | None = None
    extra_attributes: Mapping[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    @field_validator("items", "extra_attributes", mode="after")
    @classmethod
    def freeze_mappings(cls, value: Mapping[str, str] | None) -> Mapping[str, str] | None:
        return read_only(value)

    @property
    def is_multi_valued(self) -> bool:
        """Whether the element posts a list of values."""
        if self.type == InputType.CHECKBOXLIST:
            return True
        return self.type == InputType.LISTBOX and "multiple" in self.extra_attributes

    @property
    def param_name(self) -> str:
        """Request parameter the element posts under (``tags[]`` for lists)."""
        if self.is_multi_valued:
            return self.name + MULTI_VALUE_SUFFIX
        return self.name

    @model_validator(mode="after")
    def validate_list_items(self) -> "InputElement":
        """List-typed inputs must declare their choice set."""
        if self.type.is_list and self.items is None:
            raise ValueError(
                f"Element '{self.name}' of type '{self.type.value}' requires 'items'"
            )
        return self


class ButtonElement(BaseModel):
    """A named button element of a form."""

    name: str
    type: ButtonType = ButtonType.SUBMIT
    label: str | None = None
    extra_attributes: Mapping[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    @field_validator("extra_attributes", mode="after")
    @classmethod
    def freeze_mappings(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only(value)


class FormDefinition(BaseModel):
    """Immutable structural description of a form.

    Element and button order is the display order.
    """

    form_id: str | None = None
    version: str | None = None
    title: str | None = None
    description: str | None = None
    method: FormMethod = FormMethod.POST
    action: str | None = None
    elements: Mapping[str, InputElement] = Field(default_factory=dict)
    buttons: Mapping[str, ButtonElement] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    @field_validator("elements", "buttons", mode="after")
    @classmethod
    def freeze_mappings(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return read_only(value)

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    def get_element(self, name: str) -> InputElement | None:
        """Get an input element by name."""
        return self.elements.get(name)

    def get_button(self, name: str) -> ButtonElement | None:
        """Get a button element by name."""
        return self.buttons.get(name)

    @property
    def element_names(self) -> list[str]:
        """Element names in display order."""
        return list(self.elements.keys())

    @property
    def button_names(self) -> list[str]:
        """Button names in display order."""
        return list(self.buttons.keys())

    def validate_against(self, model: "FormModel") -> None:
        """Check that every element corresponds to a field on the model.

        Args:
            model: The model this definition is about to be bound to.

        Raises:
            ConfigurationError: If any element name has no model field.
        """
        missing = [name for name in self.elements if name not in model.fields]
        if missing:
            raise ConfigurationError(
                f"Form elements have no corresponding model field: {', '.join(missing)}"
            )
