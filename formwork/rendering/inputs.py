"""Rendering strategies, one per input type.

Each strategy receives the element, the model's current value for it, and
the prepared attributes (``id``, ``name``, pass-through attributes and error
CSS class). ``INPUT_RENDERERS`` maps every ``InputType`` to its strategy;
a missing type fails at import time.
"""

from collections.abc import Callable
from typing import Any

from formwork.definition.models import InputElement, InputType
from formwork.rendering.html import escape, tag

InputRenderer = Callable[[InputElement, Any, dict[str, str]], str]

LIST_SEPARATOR = "<br />\n"
UNCHECK_VALUE = "0"
LISTBOX_SIZE = "4"


def is_selected(value: Any, key: str, multiple: bool = False) -> bool:
    """Whether an item key matches the current value.

    List values only select items of multi-valued elements; a single-valued
    element with a list value selects nothing.
    """
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, frozenset)):
        return multiple and key in {str(v) for v in value}
    if isinstance(value, bool):
        return key == ("1" if value else "0")
    return str(value) == key


def _field(input_type: str, with_value: bool = True) -> InputRenderer:
    def render(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
        attrs = {"type": input_type, **attributes}
        if with_value and value is not None and "value" not in attributes:
            attrs["value"] = str(value)
        return tag("input", attrs)

    render.__name__ = f"render_{input_type}"
    return render


def render_textarea(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
    text = "" if value is None else escape(value)
    return tag("textarea", attributes, text)


def _toggle(input_type: str) -> InputRenderer:
    # A hidden input posts the uncheck value when the box is left unchecked
    def render(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
        attrs = {"type": input_type, **attributes}
        attrs.setdefault("value", "1")
        if value and str(value) != UNCHECK_VALUE:
            attrs["checked"] = "checked"
        hidden = tag("input", {"type": "hidden", "value": UNCHECK_VALUE, "name": attributes.get("name")})
        return hidden + tag("input", attrs)

    render.__name__ = f"render_{input_type}"
    return render


def _options(element: InputElement, value: Any) -> str:
    options = []
    for key, text in (element.items or {}).items():
        attrs = {"value": key}
        if is_selected(value, key, element.is_multi_valued):
            attrs["selected"] = "selected"
        options.append(tag("option", attrs, escape(text)))
    return "\n".join(options)


def render_dropdownlist(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
    return tag("select", attributes, "\n" + _options(element, value) + "\n")


def render_listbox(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
    attrs = {**attributes}
    attrs.setdefault("size", LISTBOX_SIZE)
    if element.is_multi_valued:
        attrs["name"] = element.param_name
    return tag("select", attrs, "\n" + _options(element, value) + "\n")


def _choice_list(input_type: str) -> InputRenderer:
    def render(element: InputElement, value: Any, attributes: dict[str, str]) -> str:
        base_id = attributes.get("id", element.name)
        common = {k: v for k, v in attributes.items() if k != "id"}
        common["name"] = element.param_name
        choices = []
        for index, (key, text) in enumerate((element.items or {}).items()):
            choice_id = f"{base_id}_{index}"
            attrs = {"type": input_type, **common, "id": choice_id, "value": key}
            if is_selected(value, key, element.is_multi_valued):
                attrs["checked"] = "checked"
            choices.append(tag("input", attrs) + " " + tag("label", {"for": choice_id}, escape(text)))
        # Posts an empty value when nothing is chosen
        hidden = tag("input", {"type": "hidden", "value": "", "name": attributes.get("name")})
        return hidden + tag("span", {"id": base_id}, LIST_SEPARATOR.join(choices))

    render.__name__ = f"render_{input_type}list"
    return render


INPUT_RENDERERS: dict[InputType, InputRenderer] = {
    InputType.TEXT: _field("text"),
    InputType.HIDDEN: _field("hidden"),
    InputType.PASSWORD: _field("password"),
    InputType.TEXTAREA: render_textarea,
    InputType.FILE: _field("file", with_value=False),
    InputType.RADIO: _toggle("radio"),
    InputType.CHECKBOX: _toggle("checkbox"),
    InputType.LISTBOX: render_listbox,
    InputType.DROPDOWNLIST: render_dropdownlist,
    InputType.CHECKBOXLIST: _choice_list("checkbox"),
    InputType.RADIOLIST: _choice_list("radio"),
    InputType.URL: _field("url"),
    InputType.EMAIL: _field("email"),
    InputType.NUMBER: _field("number"),
    InputType.RANGE: _field("range"),
    InputType.DATE: _field("date"),
}

_missing = set(InputType) - set(INPUT_RENDERERS)
if _missing:
    raise RuntimeError(f"No input renderer for: {', '.join(sorted(t.value for t in _missing))}")
