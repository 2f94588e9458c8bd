"""Validation rules attached to form models.

Rules never raise on invalid data. Each rule appends messages onto the
model's ``errors`` for the fields it covers; ``validate()`` then reports
whether any field collected an error.

Rules can be declared in Python or parsed from configuration with
``parse_rules``, which dispatches on the ``kind`` key.
"""

import re
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

if TYPE_CHECKING:
    from formwork.model.base import BaseFormModel

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9!#$%&'*+\/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+\/=?^_`{|}~-]+)*"
    r"@(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$"
)
URL_PATTERN = re.compile(
    r"^(?P<scheme>[a-z][a-z0-9+.-]*)://(([A-Z0-9][A-Z0-9_-]*)(\.[A-Z0-9][A-Z0-9_-]*)+)"
    r"(?::\d{1,5})?(?:$|[?/#])",
    re.IGNORECASE,
)
INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")
NUMBER_PATTERN = re.compile(r"^\s*[-+]?([0-9]*\.)?[0-9]+([eE][-+]?[0-9]+)?\s*$")


def is_empty(value: Any, trim: bool = False) -> bool:
    """Whether a field value counts as not provided."""
    if value is None or value == [] or value == ():
        return True
    if isinstance(value, str):
        return (value.strip() if trim else value) == ""
    return False


class BaseRule(BaseModel):
    """Common rule settings.

    Attributes:
        fields: Names of the fields this rule checks.
        message: Custom error message; ``{attribute}`` is the field label.
        on: Scenarios the rule applies in. Empty means every scenario.
        allow_empty: Skip the check when the value is empty.
    """

    fields: list[str]
    message: str | None = None
    on: list[str] = Field(default_factory=list)
    allow_empty: bool = True

    model_config = {"extra": "forbid"}

    def applies_to(self, scenario: str) -> bool:
        """Whether the rule is active in a scenario."""
        return not self.on or scenario in self.on

    def check(self, model: "BaseFormModel", name: str) -> None:
        """Check one field of the model, adding errors on failure."""
        value = model.fields.get(name)
        if self.allow_empty and is_empty(value):
            return
        self.check_value(model, name, value)

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        raise NotImplementedError

    def add_error(
        self,
        model: "BaseFormModel",
        name: str,
        default: str,
        params: dict[str, Any] | None = None,
    ) -> None:
        params = {"attribute": model.label_for(name), **(params or {})}
        model.add_error(name, model.translate(self.message or default, params))


class RequiredRule(BaseRule):
    """Field must not be empty (whitespace-only strings are empty)."""

    kind: Literal["required"] = "required"
    allow_empty: bool = False

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        if is_empty(value, trim=True):
            self.add_error(model, name, "{attribute} cannot be blank.")


class LengthRule(BaseRule):
    """String length bounds."""

    kind: Literal["length"] = "length"
    min: int | None = None
    max: int | None = None
    exact: int | None = None

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        length = len(str(value))
        if self.min is not None and length < self.min:
            self.add_error(
                model, name,
                "{attribute} is too short (minimum is {min} characters).",
                {"min": self.min},
            )
        if self.max is not None and length > self.max:
            self.add_error(
                model, name,
                "{attribute} is too long (maximum is {max} characters).",
                {"max": self.max},
            )
        if self.exact is not None and length != self.exact:
            self.add_error(
                model, name,
                "{attribute} is of the wrong length (should be {length} characters).",
                {"length": self.exact},
            )


class EmailRule(BaseRule):
    """Value must look like an email address."""

    kind: Literal["email"] = "email"

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
            self.add_error(model, name, "{attribute} is not a valid email address.")


class UrlRule(BaseRule):
    """Value must be an absolute URL with an accepted scheme."""

    kind: Literal["url"] = "url"
    valid_schemes: list[str] = Field(default_factory=lambda: ["http", "https"])

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        match = URL_PATTERN.match(value) if isinstance(value, str) else None
        if match is None or match.group("scheme").lower() not in self.valid_schemes:
            self.add_error(model, name, "{attribute} is not a valid URL.")


class NumberRule(BaseRule):
    """Value must be numeric, optionally an integer within bounds."""

    kind: Literal["number"] = "number"
    integer_only: bool = False
    min: float | None = None
    max: float | None = None

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        if isinstance(value, bool):
            self.add_error(model, name, "{attribute} must be a number.")
            return
        if isinstance(value, (int, float)):
            if self.integer_only and not float(value).is_integer():
                self.add_error(model, name, "{attribute} must be an integer.")
                return
            number = float(value)
        else:
            text = str(value)
            if self.integer_only and not INTEGER_PATTERN.match(text):
                self.add_error(model, name, "{attribute} must be an integer.")
                return
            if not NUMBER_PATTERN.match(text):
                self.add_error(model, name, "{attribute} must be a number.")
                return
            number = float(text)

        if self.min is not None and number < self.min:
            self.add_error(
                model, name, "{attribute} is too small (minimum is {min}).", {"min": _format(self.min)}
            )
        if self.max is not None and number > self.max:
            self.add_error(
                model, name, "{attribute} is too big (maximum is {max}).", {"max": _format(self.max)}
            )


class BooleanRule(BaseRule):
    """Value must be the true or false value (Python booleans always pass)."""

    kind: Literal["boolean"] = "boolean"
    true_value: str = "1"
    false_value: str = "0"

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        if isinstance(value, bool):
            return
        if str(value) not in (self.true_value, self.false_value):
            self.add_error(
                model, name,
                "{attribute} must be either {true} or {false}.",
                {"true": self.true_value, "false": self.false_value},
            )


class InRule(BaseRule):
    """Value (or every value of a list) must be one of ``values``."""

    kind: Literal["in"] = "in"
    values: list[str]
    negate: bool = False

    @field_validator("values", mode="before")
    @classmethod
    def stringify_values(cls, values: Any) -> Any:
        if isinstance(values, (list, tuple)):
            return [str(value) for value in values]
        return values

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        candidates = value if isinstance(value, (list, tuple)) else [value]
        found = all(str(candidate) in self.values for candidate in candidates)
        if found == self.negate:
            if self.negate:
                self.add_error(model, name, "{attribute} is in the list.")
            else:
                self.add_error(model, name, "{attribute} is not in the list.")


class MatchRule(BaseRule):
    """Value must (or must not, with ``negate``) match a regular expression."""

    kind: Literal["match"] = "match"
    pattern: str
    negate: bool = False

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        matched = isinstance(value, str) and re.search(self.pattern, value) is not None
        if matched == self.negate:
            self.add_error(model, name, "{attribute} is invalid.")


COMPARE_MESSAGES = {
    "==": "{attribute} must be repeated exactly.",
    "!=": '{attribute} must not be equal to "{compare_value}".',
    ">": '{attribute} must be greater than "{compare_value}".',
    ">=": '{attribute} must be greater than or equal to "{compare_value}".',
    "<": '{attribute} must be less than "{compare_value}".',
    "<=": '{attribute} must be less than or equal to "{compare_value}".',
}


class CompareRule(BaseRule):
    """Compare a field with another field or a constant.

    Without ``compare_field`` or ``compare_value`` the field is compared with
    ``<name>_repeat``.
    """

    kind: Literal["compare"] = "compare"
    compare_field: str | None = None
    compare_value: str | None = None
    operator: Literal["==", "!=", ">", ">=", "<", "<="] = "=="

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        if self.compare_value is not None:
            other = self.compare_value
            shown = self.compare_value
        else:
            other_name = self.compare_field or f"{name}_repeat"
            other = model.fields.get(other_name)
            shown = model.label_for(other_name)

        if not _compare(value, other, self.operator):
            self.add_error(
                model, name, COMPARE_MESSAGES[self.operator], {"compare_value": shown}
            )


class DateRule(BaseRule):
    """Value must parse with a ``strptime`` format."""

    kind: Literal["date"] = "date"
    format: str = "%Y-%m-%d"

    def check_value(self, model: "BaseFormModel", name: str, value: Any) -> None:
        try:
            datetime.strptime(str(value), self.format)
        except ValueError:
            self.add_error(model, name, "The format of {attribute} is invalid.")


Rule = Annotated[
    Union[
        RequiredRule,
        LengthRule,
        EmailRule,
        UrlRule,
        NumberRule,
        BooleanRule,
        InRule,
        MatchRule,
        CompareRule,
        DateRule,
    ],
    Field(discriminator="kind"),
]

_rules_adapter = TypeAdapter(list[Rule])


def parse_rules(data: list[dict[str, Any]]) -> list[BaseRule]:
    """Parse rule declarations such as ``{"kind": "required", "fields": ["name"]}``.

    Raises:
        pydantic.ValidationError: If a declaration is malformed.
    """
    return _rules_adapter.validate_python(data)


def _compare(value: Any, other: Any, operator: str) -> bool:
    if operator == "==":
        return str(value) == str(other)
    if operator == "!=":
        return str(value) != str(other)
    try:
        left, right = float(value), float(other)
    except (TypeError, ValueError):
        left, right = str(value), str(other)
    if operator == ">":
        return left > right
    if operator == ">=":
        return left >= right
    if operator == "<":
        return left < right
    return left <= right


def _format(number: float) -> str:
    return str(int(number)) if number.is_integer() else str(number)
