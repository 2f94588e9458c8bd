"""Form models and their validation rules."""

from formwork.model.base import BaseFormModel, DynamicFormModel, FormModel, generate_label
from formwork.model.rules import (
    BaseRule,
    BooleanRule,
    CompareRule,
    DateRule,
    EmailRule,
    InRule,
    LengthRule,
    MatchRule,
    NumberRule,
    RequiredRule,
    Rule,
    UrlRule,
    parse_rules,
)

__all__ = [
    "BaseFormModel",
    "BaseRule",
    "BooleanRule",
    "CompareRule",
    "DateRule",
    "DynamicFormModel",
    "EmailRule",
    "FormModel",
    "InRule",
    "LengthRule",
    "MatchRule",
    "NumberRule",
    "RequiredRule",
    "Rule",
    "UrlRule",
    "generate_label",
    "parse_rules",
]
