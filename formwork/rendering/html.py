"""Small HTML building helpers. Every text and attribute value is escaped."""

import html
from collections.abc import Mapping
from typing import Any

VOID_ELEMENTS = frozenset({"input", "br", "hr", "img", "meta", "link"})


def escape(value: Any) -> str:
    """Escape a value for use in HTML text or attribute content."""
    return html.escape(str(value), quote=True)


def render_attributes(attributes: Mapping[str, Any] | None) -> str:
    """Render attributes in insertion order. None values are skipped."""
    if not attributes:
        return ""
    return "".join(
        f' {escape(name)}="{escape(value)}"'
        for name, value in attributes.items()
        if value is not None
    )


def open_tag(name: str, attributes: Mapping[str, Any] | None = None) -> str:
    return f"<{name}{render_attributes(attributes)}>"


def close_tag(name: str) -> str:
    return f"</{name}>"


def tag(name: str, attributes: Mapping[str, Any] | None = None, content: str | None = None) -> str:
    """Render an element.

    ``content`` is inserted as-is (it is expected to be markup already);
    escape plain text with ``escape()`` first. Void elements ignore content.
    """
    if name in VOID_ELEMENTS:
        return f"<{name}{render_attributes(attributes)} />"
    return f"{open_tag(name, attributes)}{content or ''}{close_tag(name)}"


def add_class(attributes: dict[str, str], css_class: str) -> None:
    """Append a CSS class to an attribute dict in place."""
    existing = attributes.get("class")
    attributes["class"] = f"{existing} {css_class}" if existing else css_class
