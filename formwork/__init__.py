"""formwork: Declarative form definitions, submission detection and type-dispatched rendering."""

__version__ = "0.1.0"

from formwork.definition import (
    ButtonElement,
    ButtonType,
    FormDefinition,
    FormMethod,
    FormRegistry,
    InputElement,
    InputType,
    load,
    load_file,
)
from formwork.errors import ConfigurationError, FormNotFoundError, FormworkError, UsageError
from formwork.model import BaseFormModel, DynamicFormModel, FormModel
from formwork.rendering import RenderDispatcher
from formwork.submission import Form, FormRequest, InMemoryTokenStore, SubmissionState, TokenStore
from formwork.translation import CatalogTranslator, Translator, identity_translate

__all__ = [
    "__version__",
    "BaseFormModel",
    "ButtonElement",
    "ButtonType",
    "CatalogTranslator",
    "ConfigurationError",
    "DynamicFormModel",
    "Form",
    "FormDefinition",
    "FormMethod",
    "FormModel",
    "FormNotFoundError",
    "FormRegistry",
    "FormRequest",
    "FormworkError",
    "InMemoryTokenStore",
    "InputElement",
    "InputType",
    "RenderDispatcher",
    "SubmissionState",
    "TokenStore",
    "Translator",
    "UsageError",
    "identity_translate",
    "load",
    "load_file",
]
