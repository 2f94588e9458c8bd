"""Render dispatcher for type-based strategy selection.

Views ask for "the input for ``username``" without knowing whether it is a
text box or a checkbox: the declared element type selects the rendering
strategy. Labels, required markers and errors come from the bound model;
types, hints, items and pass-through attributes come from the definition.
"""

from formwork.config import GlobalConfig
from formwork.definition.models import (
    ButtonElement,
    ButtonType,
    InputElement,
    InputType,
)
from formwork.model.base import generate_label
from formwork.rendering.buttons import BUTTON_RENDERERS, ButtonRenderer
from formwork.rendering.html import add_class, close_tag, escape, open_tag, tag
from formwork.rendering.inputs import INPUT_RENDERERS, InputRenderer
from formwork.submission.form import Form
from formwork.translation import Translator, identity_translate

ERROR_SUMMARY_HEADER = "Please fix the following input errors:"


class RenderDispatcher:
    """Renders form parts by dispatching on declared element types.

    The dispatcher starts with the default strategy for every input and
    button type; ``register_input``/``register_button`` replace the strategy
    for one type.
    """

    def __init__(
        self,
        form: Form,
        translate: Translator | None = None,
        config: GlobalConfig | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            form: The bound form to render.
            translate: Translator for built-in texts (summary header, button
                labels generated from names).
            config: CSS classes and required marker. Defaults to GlobalConfig().
        """
        self.form = form
        self.translate = translate or identity_translate
        self.config = config or GlobalConfig()
        self._input_renderers: dict[InputType, InputRenderer] = dict(INPUT_RENDERERS)
        self._button_renderers: dict[ButtonType, ButtonRenderer] = dict(BUTTON_RENDERERS)

    def register_input(self, input_type: InputType, renderer: InputRenderer) -> None:
        """Replace the rendering strategy for an input type."""
        self._input_renderers[input_type] = renderer

    def register_button(self, button_type: ButtonType, renderer: ButtonRenderer) -> None:
        """Replace the rendering strategy for a button type."""
        self._button_renderers[button_type] = renderer

    def get_input_renderer(self, input_type: InputType) -> InputRenderer:
        return self._input_renderers[input_type]

    def get_button_renderer(self, button_type: ButtonType) -> ButtonRenderer:
        return self._button_renderers[button_type]

    def _element(self, name: str) -> InputElement:
        element = self.form.definition.get_element(name)
        if element is None:
            raise KeyError(f"Unknown form element: {name}")
        return element

    def _button(self, name: str) -> ButtonElement:
        button = self.form.definition.get_button(name)
        if button is None:
            raise KeyError(f"Unknown form button: {name}")
        return button

    def element_id(self, name: str) -> str:
        """HTML id of an element: ``<form_id>_<name>``, or the name alone."""
        form_id = self.form.definition.form_id
        return f"{form_id}_{name}" if form_id else name

    def is_required(self, name: str) -> bool:
        """Whether the model attaches a required rule to a field."""
        return any(
            getattr(rule, "kind", None) == "required"
            for rule in self.form.model.rules_for(name)
        )

    def has_error(self, name: str) -> bool:
        return bool(self.form.model.errors.get(name))

    def render_label(self, name: str, required_marker: bool = True) -> str:
        """Render the label of an element.

        Uses the element's configured label, else the model's label. A
        required marker is appended when requested and the model requires
        the field.
        """
        element = self._element(name)
        text = element.label if element.label is not None else self.form.model.label_for(name)
        content = escape(text)

        attributes = {"for": self.element_id(name)}
        if self.is_required(name):
            add_class(attributes, "required")
            if required_marker:
                content += " " + self.config.required_marker
        if self.has_error(name):
            add_class(attributes, self.config.error_css_class)

        return tag("label", attributes, content)

    def render_input(self, name: str) -> str:
        """Render the input of an element with the strategy for its type."""
        element = self._element(name)
        attributes = {"id": self.element_id(name), "name": name, **element.extra_attributes}
        attributes["name"] = name
        if self.has_error(name):
            add_class(attributes, self.config.error_css_class)

        renderer = self.get_input_renderer(element.type)
        return renderer(element, self.form.model.fields.get(name), attributes)

    def render_error(self, name: str) -> str:
        """Render every error of a field in the order added, or ``""``."""
        self._element(name)
        messages = self.form.model.errors.get(name)
        if not messages:
            return ""
        return tag(
            "div",
            {"class": self.config.error_message_css_class},
            "<br />".join(escape(message) for message in messages),
        )

    def render_error_summary(self, header: str | None = None, footer: str | None = None) -> str:
        """Render a list of every error across every field, or ``""``.

        ``header`` and ``footer`` are markup fragments placed around the list.
        """
        messages = [
            message
            for field_messages in self.form.model.errors.values()
            for message in field_messages
        ]
        if not messages:
            return ""

        if header is None:
            header = tag("p", None, escape(self.translate(ERROR_SUMMARY_HEADER)))
        items = "\n".join(tag("li", None, escape(message)) for message in messages)
        content = "\n".join([header, tag("ul", None, f"\n{items}\n"), footer or ""])
        return tag("div", {"class": self.config.error_summary_css_class}, content)

    def render_hint(self, name: str, wrapper_tag: str | None = None) -> str:
        """Render the hint of an element, optionally wrapped, or ``""``."""
        element = self._element(name)
        if not element.hint:
            return ""
        if wrapper_tag is None:
            return escape(element.hint)
        return tag(wrapper_tag, {"class": self.config.hint_css_class}, escape(element.hint))

    def render_button(self, name: str) -> str:
        """Render a button with the strategy for its type."""
        button = self._button(name)
        label = button.label if button.label is not None else self.translate(generate_label(name))
        attributes = {"name": name, **button.extra_attributes}
        attributes["name"] = name

        renderer = self.get_button_renderer(button.type)
        return renderer(button, label, attributes)

    def render_begin(self) -> str:
        """Open the form and embed a freshly issued integrity token."""
        definition = self.form.definition
        attributes = {
            "id": definition.form_id,
            "action": self.form.action,
            "method": definition.method.value.lower(),
        }
        if any(element.type == InputType.FILE for element in definition.elements.values()):
            attributes["enctype"] = "multipart/form-data"

        parts = [open_tag("form", attributes)]
        if self.form.check_token:
            token = self.form.issue_token()
            hidden = tag("input", {"type": "hidden", "name": self.form.token_name, "value": token})
            parts.append(tag("div", {"style": "display:none"}, hidden))
        return "\n".join(parts)

    def render_end(self) -> str:
        return close_tag("form")

    def render_row(self, name: str) -> str:
        """Render label, input, hint and error of one element.

        Hidden inputs render without a row. Checkboxes and radios put the
        label after the input.
        """
        element = self._element(name)
        if element.type == InputType.HIDDEN:
            return self.render_input(name)

        if element.type in (InputType.CHECKBOX, InputType.RADIO):
            parts = [self.render_input(name), self.render_label(name)]
        else:
            parts = [self.render_label(name), self.render_input(name)]
        parts.append(self.render_hint(name, "div"))
        parts.append(self.render_error(name))

        content = "\n".join(part for part in parts if part)
        return tag("div", {"class": "row"}, "\n" + content + "\n")

    def render_buttons(self) -> str:
        """Render every button in declaration order, or ``""`` if none."""
        buttons = [self.render_button(name) for name in self.form.definition.buttons]
        if not buttons:
            return ""
        return tag("div", {"class": "row buttons"}, "\n" + "\n".join(buttons) + "\n")

    def render(self) -> str:
        """Render the whole form: title, description, error summary, rows, buttons."""
        definition = self.form.definition
        body = []
        if definition.description:
            body.append(tag("div", {"class": "description"}, escape(definition.description)))
        body.append(self.render_error_summary())
        body.extend(self.render_row(name) for name in definition.elements)
        body.append(self.render_buttons())
        content = "\n".join(part for part in body if part)

        if definition.title:
            legend = tag("legend", None, escape(definition.title))
            content = tag("fieldset", None, f"\n{legend}\n{content}\n")

        return "\n".join([self.render_begin(), content, self.render_end()])

