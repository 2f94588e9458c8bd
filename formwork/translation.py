"""Injected translation capability.

Human-readable strings (titles, labels, hints, validation messages) pass
through a translator callable. There is no process-wide translator: callers
hand one to the loader, the model and the dispatcher explicitly.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import yaml


class Translator(Protocol):
    """Callable translating a source message, substituting ``{key}`` params."""

    def __call__(self, message: str, params: Mapping[str, Any] | None = None) -> str:
        ...


def substitute(message: str, params: Mapping[str, Any] | None) -> str:
    """Replace ``{key}`` placeholders in a message.

    Placeholders without a matching param are left as-is, so literal braces
    in messages survive.
    """
    if not params:
        return message
    for key, value in params.items():
        message = message.replace("{" + str(key) + "}", str(value))
    return message


def identity_translate(message: str, params: Mapping[str, Any] | None = None) -> str:
    """Default translator: returns the source message with params substituted."""
    return substitute(message, params)


class CatalogTranslator:
    """Translator backed by a flat message catalog.

    The catalog maps source messages to translated messages. Messages missing
    from the catalog fall back to the source text.
    """

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self.messages: dict[str, str] = dict(messages or {})

    @classmethod
    def from_file(cls, path: Path | str) -> "CatalogTranslator":
        """Load a catalog from a YAML or JSON file."""
        path = Path(path)
        with open(path) as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        return cls(data or {})

    def __call__(self, message: str, params: Mapping[str, Any] | None = None) -> str:
        return substitute(self.messages.get(message, message), params)
