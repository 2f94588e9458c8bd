"""Tests for the form definition loader and models."""

import pytest
from pydantic import ValidationError

from formwork.definition import (
    ButtonType,
    FormDefinition,
    FormMethod,
    InputElement,
    InputType,
    load,
    load_file,
)
from formwork.errors import ConfigurationError
from formwork.model import DynamicFormModel
from formwork.translation import CatalogTranslator


class TestLoad:
    """Tests for load()."""

    def test_load_login(self, login_definition: FormDefinition) -> None:
        """Test loading a complete configuration."""
        assert login_definition.title == "Login"
        assert login_definition.method == FormMethod.POST
        assert login_definition.action is None
        assert login_definition.element_names == ["username", "password", "remember"]
        assert login_definition.button_names == ["submit"]

        username = login_definition.get_element("username")
        assert username is not None
        assert username.type == InputType.TEXT
        assert username.extra_attributes == {"maxlength": "32"}

        assert login_definition.get_element("remember").label == "Remember me next time"
        assert login_definition.get_button("submit").type == ButtonType.SUBMIT

    def test_element_order_preserved(self) -> None:
        """Test that elements keep configuration order."""
        names = ["zeta", "alpha", "mid", "beta"]
        definition = load({"elements": {name: "text" for name in names}})
        assert definition.element_names == names

    def test_defaults(self) -> None:
        """Test defaults for an empty configuration."""
        definition = load({})
        assert definition.method == FormMethod.POST
        assert definition.title is None
        assert definition.elements == {}
        assert definition.buttons == {}

    def test_string_shorthand(self) -> None:
        """Test that a bare string entry is the element type."""
        definition = load({"elements": {"secret": "password"}, "buttons": {"go": "htmlSubmit"}})
        assert definition.get_element("secret").type == InputType.PASSWORD
        assert definition.get_button("go").type == ButtonType.HTML_SUBMIT

    def test_missing_type_defaults(self) -> None:
        """Test default types: text for inputs, submit for buttons."""
        definition = load({"elements": {"name": {"label": "Name"}}, "buttons": {"ok": {}}})
        assert definition.get_element("name").type == InputType.TEXT
        assert definition.get_button("ok").type == ButtonType.SUBMIT

    @pytest.mark.parametrize("method", ["get", "GET", "Post", "post"])
    def test_method_case_insensitive(self, method: str) -> None:
        """Test that method is accepted in any case."""
        definition = load({"method": method})
        assert definition.method.value == method.upper()

    @pytest.mark.parametrize("method", ["PUT", "delete", "", 1])
    def test_unknown_method(self, method) -> None:
        """Test that methods other than GET/POST are rejected."""
        with pytest.raises(ConfigurationError, match="GET or POST"):
            load({"method": method})

    @pytest.mark.parametrize("input_type", ["listbox", "dropdownlist", "checkboxlist", "radiolist"])
    def test_list_type_requires_items(self, input_type: str) -> None:
        """Test that list-typed elements without items are rejected."""
        with pytest.raises(ConfigurationError, match="requires 'items'"):
            load({"elements": {"choice": {"type": input_type}}})

    def test_list_type_shorthand_requires_items(self) -> None:
        """Test that the string shorthand cannot declare a list type."""
        with pytest.raises(ConfigurationError):
            load({"elements": {"choice": "dropdownlist"}})

    def test_items_order_and_stringified_keys(self) -> None:
        """Test that items keep order and keys become strings."""
        definition = load({
            "elements": {
                "rating": {"type": "radiolist", "items": {3: "Good", 1: "Bad", 2: "OK"}},
            }
        })
        items = definition.get_element("rating").items
        assert list(items.items()) == [("3", "Good"), ("1", "Bad"), ("2", "OK")]

    def test_items_list(self) -> None:
        """Test that a list of items uses each value as its own text."""
        definition = load({"elements": {"tag": {"type": "listbox", "items": ["a", "b"]}}})
        assert definition.get_element("tag").items == {"a": "a", "b": "b"}

    def test_items_invalid(self) -> None:
        """Test that items must be a mapping or a list."""
        with pytest.raises(ConfigurationError, match="must be a mapping or a list"):
            load({"elements": {"tag": {"type": "listbox", "items": "abc"}}})

    def test_extra_attributes(self) -> None:
        """Test that unknown keys become pass-through attributes."""
        definition = load({
            "elements": {
                "title": {
                    "type": "text",
                    "maxlength": 128,
                    "placeholder": "Title",
                    "autofocus": True,
                    "disabled": False,
                    "size": None,
                },
            }
        })
        assert definition.get_element("title").extra_attributes == {
            "maxlength": "128",
            "placeholder": "Title",
            "autofocus": "autofocus",
        }

    def test_extra_attribute_not_scalar(self) -> None:
        """Test that nested attribute values are rejected."""
        with pytest.raises(ConfigurationError, match="must be a scalar"):
            load({"elements": {"title": {"type": "text", "data": {"x": 1}}}})

    @pytest.mark.parametrize("section", ["elements", "buttons"])
    def test_name_attribute_reserved(self, section: str) -> None:
        """Test that the request parameter name cannot be overridden."""
        with pytest.raises(ConfigurationError, match="'name' of 'title' is reserved"):
            load({section: {"title": {"name": "other"}}})

    def test_button_extra_attributes(self) -> None:
        """Test pass-through attributes on buttons."""
        definition = load({"buttons": {"delete": {"type": "submit", "class": "danger"}}})
        assert definition.get_button("delete").extra_attributes == {"class": "danger"}

    def test_unknown_input_type(self) -> None:
        """Test that unknown input types are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown input type 'color'"):
            load({"elements": {"shade": "color"}})

    def test_unknown_button_type(self) -> None:
        """Test that unknown button types are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown button type"):
            load({"buttons": {"go": {"type": "submitButton"}}})

    def test_unknown_top_level_key(self) -> None:
        """Test that unknown top-level keys are rejected."""
        with pytest.raises(ConfigurationError, match="layout"):
            load({"layout": "horizontal"})

    def test_metadata_keys_ignored(self) -> None:
        """Test that document metadata keys are accepted."""
        definition = load({"$schema": "x", "type": "form_definition", "form_id": "f", "version": "1.0.0"})
        assert definition.form_id == "f"
        assert definition.version == "1.0.0"

    def test_not_a_mapping(self) -> None:
        """Test that a non-mapping document is rejected."""
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load(["title"])

    def test_elements_not_a_mapping(self) -> None:
        """Test that elements must be a mapping."""
        with pytest.raises(ConfigurationError, match="'elements' must be a mapping"):
            load({"elements": ["username"]})

    def test_translate_applied(self) -> None:
        """Test that human-readable strings pass through the translator."""
        translate = CatalogTranslator({
            "Login": "Anmelden",
            "Remember me": "Angemeldet bleiben",
            "Case sensitive": "Groß/Kleinschreibung beachten",
            "Red": "Rot",
            "Go": "Los",
        })
        definition = load(
            {
                "title": "Login",
                "elements": {
                    "remember": {"type": "checkbox", "label": "Remember me"},
                    "password": {"type": "password", "hint": "Case sensitive"},
                    "color": {"type": "dropdownlist", "items": {"r": "Red"}},
                },
                "buttons": {"go": {"label": "Go"}},
            },
            translate=translate,
        )
        assert definition.title == "Anmelden"
        assert definition.get_element("remember").label == "Angemeldet bleiben"
        assert definition.get_element("password").hint == "Groß/Kleinschreibung beachten"
        assert definition.get_element("color").items == {"r": "Rot"}
        assert definition.get_button("go").label == "Los"


class TestDefinitionModels:
    """Tests for definition model behaviour."""

    def test_definition_is_immutable(self, login_definition: FormDefinition) -> None:
        """Test that definitions cannot be modified after construction."""
        with pytest.raises(ValidationError):
            login_definition.title = "Other"

    def test_nested_mappings_are_read_only(self, login_definition: FormDefinition) -> None:
        """Test that element, button, item and attribute mappings reject changes."""
        username = login_definition.get_element("username")
        with pytest.raises(TypeError):
            login_definition.elements["injected"] = username
        with pytest.raises(TypeError):
            del login_definition.buttons["submit"]
        with pytest.raises(TypeError):
            username.extra_attributes["onclick"] = "steal()"
        with pytest.raises(TypeError):
            login_definition.get_button("submit").extra_attributes["formaction"] = "/x"

        assert "injected" not in login_definition.elements
        assert username.extra_attributes == {"maxlength": "32"}

    def test_items_are_read_only(self) -> None:
        definition = load({"elements": {"size": {"type": "dropdownlist", "items": ["s", "m"]}}})
        with pytest.raises(TypeError):
            definition.get_element("size").items["xl"] = "XL"

    def test_source_config_changes_do_not_leak(self) -> None:
        """Test that the definition does not share mappings with its input."""
        attributes = {"maxlength": "8"}
        element = InputElement(name="code", extra_attributes=attributes)
        attributes["onclick"] = "x"
        assert "onclick" not in element.extra_attributes

    def test_element_requires_items_directly(self) -> None:
        """Test the list items check when constructing elements directly."""
        with pytest.raises(ValidationError):
            InputElement(name="choice", type=InputType.DROPDOWNLIST)

    def test_is_list(self) -> None:
        """Test InputType.is_list."""
        assert InputType.CHECKBOXLIST.is_list
        assert InputType.LISTBOX.is_list
        assert not InputType.CHECKBOX.is_list
        assert not InputType.RADIO.is_list

    def test_param_name(self) -> None:
        """Test the request parameter of single and multi-valued elements."""
        definition = load({
            "elements": {
                "q": "text",
                "colors": {"type": "checkboxlist", "items": ["red"]},
                "tags": {"type": "listbox", "items": ["a"], "multiple": True},
                "tag": {"type": "listbox", "items": ["a"]},
            }
        })
        assert definition.get_element("q").param_name == "q"
        assert definition.get_element("colors").param_name == "colors[]"
        assert definition.get_element("tags").param_name == "tags[]"
        assert definition.get_element("tag").param_name == "tag"

    def test_validate_against_matching_model(self, login_definition: FormDefinition) -> None:
        """Test binding check passes when every element has a field."""
        model = DynamicFormModel({"username": "", "password": "", "remember": False, "extra": 1})
        login_definition.validate_against(model)

    def test_validate_against_missing_field(self, login_definition: FormDefinition) -> None:
        """Test binding check fails for elements without a field."""
        model = DynamicFormModel({"username": ""})
        with pytest.raises(ConfigurationError, match="password, remember"):
            login_definition.validate_against(model)


class TestLoadFile:
    """Tests for load_file()."""

    def test_load_json(self, tmp_path) -> None:
        """Test loading a JSON document."""
        path = tmp_path / "form.json"
        path.write_text('{"title": "T", "elements": {"a": "text"}}')
        assert load_file(path).title == "T"

    def test_load_yaml(self, tmp_path) -> None:
        """Test loading a YAML document."""
        path = tmp_path / "form.yaml"
        path.write_text("title: T\nelements:\n  a: email\n")
        assert load_file(path).get_element("a").type == InputType.EMAIL

    def test_invalid_json(self, tmp_path) -> None:
        """Test that unparseable documents raise ConfigurationError."""
        path = tmp_path / "form.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            load_file(path)
