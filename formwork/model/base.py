"""Data-holding form models.

A form definition describes how a form looks; a form model holds the values
and knows how to validate them. Any object satisfying the ``FormModel``
protocol can be bound to a definition. ``BaseFormModel`` is the reference
implementation driven by declarative rules.
"""

import copy
import re
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from formwork.definition.models import FormDefinition, InputType
from formwork.model.rules import BaseRule
from formwork.translation import Translator, identity_translate


@runtime_checkable
class FormModel(Protocol):
    """Capability set a model must provide to be bound to a form."""

    fields: dict[str, Any]
    errors: dict[str, list[str]]

    def validate(self) -> bool:
        """Run validation rules, populate ``errors`` and report success."""
        ...

    def label_for(self, name: str) -> str:
        """Return the display label of a field."""
        ...

    def rules_for(self, name: str) -> list[Any]:
        """Return the validation rules active for a field."""
        ...


def generate_label(name: str) -> str:
    """Generate a label from a field name.

    ``first_name``, ``first-name`` and ``firstName`` all become ``First Name``.
    """
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    words = re.sub(r"[-_.]+", " ", words)
    return " ".join(word.capitalize() for word in words.split())


class BaseFormModel:
    """Form model declared with class attributes.

    Subclasses declare:
        defaults: Field names and their initial values.
        rules: Validation rules, run in declaration order.
        labels: Explicit field labels; other labels are generated.

    Example:
        class LoginForm(BaseFormModel):
            defaults = {"username": "", "password": "", "remember": False}
            rules = [RequiredRule(fields=["username", "password"])]
            labels = {"remember": "Remember me next time"}
    """

    defaults: ClassVar[dict[str, Any]] = {}
    rules: ClassVar[list[BaseRule]] = []
    labels: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        scenario: str = "",
        translate: Translator | None = None,
        **values: Any,
    ) -> None:
        """Initialize the model with default field values.

        Args:
            scenario: Active scenario; rules with ``on`` only run in theirs.
            translate: Translator for labels and error messages.
            **values: Initial values overriding the defaults.

        Raises:
            TypeError: If a value is given for an undeclared field.
        """
        self.scenario = scenario
        self.translate = translate or identity_translate
        self.fields: dict[str, Any] = copy.deepcopy(dict(self.defaults))
        self.errors: dict[str, list[str]] = {}

        unknown = set(values) - set(self.fields)
        if unknown:
            raise TypeError(f"Unknown fields for {type(self).__name__}: {', '.join(sorted(unknown))}")
        self.fields.update(values)

    def __getattr__(self, name: str) -> Any:
        fields = self.__dict__.get("fields")
        if fields is not None and name in fields:
            return fields[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fields!r})"

    def label_for(self, name: str) -> str:
        """Return the explicit label of a field, or one generated from its name."""
        label = self.labels.get(name)
        if label is None:
            label = generate_label(name)
        return self.translate(label)

    def rules_for(self, name: str) -> list[BaseRule]:
        """Return the rules checking a field in the current scenario."""
        return [
            rule for rule in self.rules
            if name in rule.fields and rule.applies_to(self.scenario)
        ]

    def is_required(self, name: str) -> bool:
        """Whether a required rule applies to a field."""
        return any(getattr(rule, "kind", None) == "required" for rule in self.rules_for(name))

    def safe_fields(self) -> list[str]:
        """Fields checked by at least one rule in the current scenario."""
        return [name for name in self.fields if self.rules_for(name)]

    def set_values(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
        """Mass-assign field values. Undeclared keys are ignored.

        Args:
            values: Field name to value.
            safe_only: Only assign fields returned by ``safe_fields()``, so
                fields without rules in this scenario cannot be set from
                request data.
        """
        allowed = set(self.safe_fields()) if safe_only else set(self.fields)
        for name, value in values.items():
            if name in allowed:
                self.fields[name] = value

    def add_error(self, name: str, message: str) -> None:
        """Record an error message for a field."""
        self.errors.setdefault(name, []).append(message)

    def add_errors(self, errors: Mapping[str, Iterable[str]]) -> None:
        """Record several error messages per field."""
        for name, messages in errors.items():
            for message in messages:
                self.add_error(name, message)

    def clear_errors(self, name: str | None = None) -> None:
        """Remove errors of one field, or of every field."""
        if name is None:
            self.errors.clear()
        else:
            self.errors.pop(name, None)

    def has_errors(self, name: str | None = None) -> bool:
        """Whether a field (or any field) has errors."""
        if name is None:
            return any(self.errors.values())
        return bool(self.errors.get(name))

    def error_for(self, name: str) -> str | None:
        """Return the first error of a field, if any."""
        messages = self.errors.get(name)
        return messages[0] if messages else None

    def validate(self, names: Iterable[str] | None = None, clear: bool = True) -> bool:
        """Run validation rules.

        Args:
            names: Only validate these fields. Defaults to every field.
            clear: Clear previous errors first.

        Returns:
            True if no field has errors afterwards.
        """
        selected = set(names) if names is not None else None
        if clear:
            if selected is None:
                self.clear_errors()
            else:
                for name in selected:
                    self.clear_errors(name)

        for rule in self.rules:
            if not rule.applies_to(self.scenario):
                continue
            for name in rule.fields:
                if selected is None or name in selected:
                    rule.check(self, name)

        return not self.has_errors()


class DynamicFormModel(BaseFormModel):
    """Form model whose fields, rules and labels are given per instance."""

    def __init__(
        self,
        defaults: Mapping[str, Any],
        rules: Iterable[BaseRule] = (),
        labels: Mapping[str, str] | None = None,
        scenario: str = "",
        translate: Translator | None = None,
    ) -> None:
        self.defaults = dict(defaults)
        self.rules = list(rules)
        self.labels = dict(labels or {})
        super().__init__(scenario=scenario, translate=translate)

    @classmethod
    def for_definition(cls, definition: FormDefinition, **kwargs: Any) -> "DynamicFormModel":
        """Build a model with one empty field per element of a definition.

        Checkbox elements default to False, multi-valued lists to ``[]``.
        """
        defaults: dict[str, Any] = {}
        for name, element in definition.elements.items():
            if element.type == InputType.CHECKBOX:
                defaults[name] = False
            elif element.type == InputType.CHECKBOXLIST or "multiple" in element.extra_attributes:
                defaults[name] = []
            else:
                defaults[name] = ""
        return cls(defaults, **kwargs)
