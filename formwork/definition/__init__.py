"""Form definitions: models, the configuration loader and the file registry."""

from formwork.definition.loader import load, load_file
from formwork.definition.models import (
    ButtonElement,
    ButtonType,
    FormDefinition,
    FormMethod,
    InputElement,
    InputType,
)
from formwork.definition.registry import FormRegistry

__all__ = [
    "ButtonElement",
    "ButtonType",
    "FormDefinition",
    "FormMethod",
    "FormRegistry",
    "InputElement",
    "InputType",
    "load",
    "load_file",
]
