"""Rendering strategies, one per button type."""

from collections.abc import Callable

from formwork.definition.models import ButtonElement, ButtonType
from formwork.rendering.html import escape, tag

ButtonRenderer = Callable[[ButtonElement, str, dict[str, str]], str]


def _html_button(button_type: str) -> ButtonRenderer:
    def render(button: ButtonElement, label: str, attributes: dict[str, str]) -> str:
        return tag("button", {"type": button_type, **attributes}, escape(label))

    render.__name__ = f"render_html_{button_type}"
    return render


def _input_button(input_type: str) -> ButtonRenderer:
    def render(button: ButtonElement, label: str, attributes: dict[str, str]) -> str:
        attrs = {"type": input_type, **attributes}
        attrs.setdefault("value", label)
        return tag("input", attrs)

    render.__name__ = f"render_{input_type}"
    return render


def render_image(button: ButtonElement, label: str, attributes: dict[str, str]) -> str:
    attrs = {"type": "image", **attributes}
    attrs.setdefault("alt", label)
    attrs.setdefault("value", label)
    return tag("input", attrs)


def render_link(button: ButtonElement, label: str, attributes: dict[str, str]) -> str:
    attrs = {"href": "#", **attributes}
    attrs.setdefault("data-submit", attributes.get("name", button.name))
    attrs.pop("name", None)
    return tag("a", attrs, escape(label))


BUTTON_RENDERERS: dict[ButtonType, ButtonRenderer] = {
    ButtonType.HTML_BUTTON: _html_button("button"),
    ButtonType.HTML_RESET: _html_button("reset"),
    ButtonType.HTML_SUBMIT: _html_button("submit"),
    ButtonType.SUBMIT: _input_button("submit"),
    ButtonType.BUTTON: _input_button("button"),
    ButtonType.IMAGE: render_image,
    ButtonType.RESET: _input_button("reset"),
    ButtonType.LINK: render_link,
}

_missing = set(ButtonType) - set(BUTTON_RENDERERS)
if _missing:
    raise RuntimeError(f"No button renderer for: {', '.join(sorted(t.value for t in _missing))}")
