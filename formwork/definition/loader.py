"""Loader for declarative form configuration.

Parses a nested mapping (as read from JSON or YAML) into an immutable
FormDefinition. The loader is model-agnostic: whether element names match
model fields is checked later, when the definition is bound.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from formwork.definition.models import (
    ButtonElement,
    ButtonType,
    FormDefinition,
    FormMethod,
    InputElement,
    InputType,
)
from formwork.errors import ConfigurationError
from formwork.translation import Translator, identity_translate

TOP_LEVEL_KEYS = frozenset(
    {"form_id", "version", "title", "description", "method", "action", "elements", "buttons"}
)
# Keys ignored at the top level (document metadata).
IGNORED_KEYS = frozenset({"$schema", "type"})

INPUT_KEYS = frozenset({"type", "label", "hint", "items"})
BUTTON_KEYS = frozenset({"type", "label"})
# The request parameter name is the element name
RESERVED_ATTRIBUTES = frozenset({"name"})


def load(config: Mapping[str, Any], translate: Translator | None = None) -> FormDefinition:
    """Build a FormDefinition from a configuration mapping.

    Args:
        config: Mapping with keys ``title``, ``description``, ``method``,
            ``action``, ``elements`` and ``buttons``.
        translate: Optional translator applied to every human-readable string.

    Returns:
        The immutable FormDefinition.

    Raises:
        ConfigurationError: If the configuration is malformed, a list-typed
            element lacks ``items``, or ``method`` is neither GET nor POST.
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError("Form configuration must be a mapping")

    translate = translate or identity_translate

    unknown = set(config) - TOP_LEVEL_KEYS - IGNORED_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown form configuration keys: {', '.join(sorted(unknown))}"
        )

    method = config.get("method", FormMethod.POST.value)
    if not isinstance(method, str) or method.upper() not in FormMethod.__members__:
        raise ConfigurationError(f"Form method must be GET or POST, got {method!r}")

    elements = {
        str(name): _parse_input(str(name), entry, translate)
        for name, entry in _as_mapping(config.get("elements"), "elements").items()
    }
    buttons = {
        str(name): _parse_button(str(name), entry, translate)
        for name, entry in _as_mapping(config.get("buttons"), "buttons").items()
    }

    try:
        return FormDefinition(
            form_id=config.get("form_id"),
            version=config.get("version"),
            title=_translated(config.get("title"), translate),
            description=_translated(config.get("description"), translate),
            method=method,
            action=config.get("action"),
            elements=elements,
            buttons=buttons,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid form configuration: {e}") from e


def load_file(path: Path | str, translate: Translator | None = None) -> FormDefinition:
    """Load a form definition from a JSON or YAML file."""
    return load(read_document(path), translate=translate)


def read_document(path: Path | str) -> dict[str, Any]:
    """Read a JSON or YAML configuration document.

    Raises:
        ConfigurationError: If the file cannot be parsed.
    """
    path = Path(path)
    try:
        with open(path) as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot parse form configuration {path}: {e}") from e


def _parse_input(name: str, entry: Any, translate: Translator) -> InputElement:
    entry = _normalize_entry(name, entry)

    raw_type = entry.get("type", InputType.TEXT.value)
    try:
        input_type = InputType(raw_type)
    except ValueError:
        raise ConfigurationError(
            f"Unknown input type {raw_type!r} for element '{name}'"
        ) from None

    items = entry.get("items")
    if items is not None:
        items = _parse_items(name, items, translate)
    elif input_type.is_list:
        raise ConfigurationError(
            f"Element '{name}' of type '{input_type.value}' requires 'items'"
        )

    return InputElement(
        name=name,
        type=input_type,
        label=_translated(entry.get("label"), translate),
        hint=_translated(entry.get("hint"), translate),
        items=items,
        extra_attributes=_extra_attributes(name, entry, INPUT_KEYS),
    )


def _parse_button(name: str, entry: Any, translate: Translator) -> ButtonElement:
    entry = _normalize_entry(name, entry)

    raw_type = entry.get("type", ButtonType.SUBMIT.value)
    try:
        button_type = ButtonType(raw_type)
    except ValueError:
        raise ConfigurationError(
            f"Unknown button type {raw_type!r} for button '{name}'"
        ) from None

    return ButtonElement(
        name=name,
        type=button_type,
        label=_translated(entry.get("label"), translate),
        extra_attributes=_extra_attributes(name, entry, BUTTON_KEYS),
    )


def _normalize_entry(name: str, entry: Any) -> Mapping[str, Any]:
    # A bare string is shorthand for the type
    if isinstance(entry, str):
        return {"type": entry}
    if entry is None:
        return {}
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"Configuration for '{name}' must be a mapping or a type name")
    return entry


def _parse_items(name: str, items: Any, translate: Translator) -> dict[str, str]:
    if isinstance(items, Mapping):
        return {str(value): translate(str(text)) for value, text in items.items()}
    if isinstance(items, (list, tuple)):
        return {str(value): translate(str(value)) for value in items}
    raise ConfigurationError(f"'items' of element '{name}' must be a mapping or a list")


def _extra_attributes(name: str, entry: Mapping[str, Any], known: frozenset[str]) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for key, value in entry.items():
        if key in RESERVED_ATTRIBUTES:
            raise ConfigurationError(f"Attribute '{key}' of '{name}' is reserved")
        if key in known or value is None or value is False:
            continue
        if value is True:
            attributes[str(key)] = str(key)
        elif isinstance(value, (str, int, float)):
            attributes[str(key)] = str(value)
        else:
            raise ConfigurationError(
                f"Attribute '{key}' of '{name}' must be a scalar, got {type(value).__name__}"
            )
    return attributes


def _as_mapping(value: Any, key: str) -> Mapping[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"'{key}' must be a mapping of name to configuration")
    return value


def _translated(value: Any, translate: Translator) -> str | None:
    if value is None:
        return None
    return translate(str(value))
