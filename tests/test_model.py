"""Tests for form models."""

import pytest

from formwork.definition import load
from formwork.model import (
    BaseFormModel,
    DynamicFormModel,
    FormModel,
    LengthRule,
    RequiredRule,
    generate_label,
)
from formwork.translation import CatalogTranslator


class ProfileForm(BaseFormModel):
    defaults = {"first_name": "", "email": "", "tags": []}
    rules = [
        RequiredRule(fields=["first_name"]),
        RequiredRule(fields=["email"], on=["register"]),
        LengthRule(fields=["first_name"], min=2, max=5),
    ]
    labels = {"email": "E-mail address"}


class TestGenerateLabel:
    """Tests for generate_label()."""

    @pytest.mark.parametrize(
        "name,label",
        [
            ("first_name", "First Name"),
            ("firstName", "First Name"),
            ("first-name", "First Name"),
            ("email", "Email"),
            ("postCode2", "Post Code2"),
        ],
    )
    def test_generate_label(self, name: str, label: str) -> None:
        """Test label generation from field names."""
        assert generate_label(name) == label


class TestBaseFormModel:
    """Tests for BaseFormModel."""

    def test_satisfies_protocol(self) -> None:
        """Test that the reference model satisfies the FormModel protocol."""
        assert isinstance(ProfileForm(), FormModel)

    def test_defaults_are_copied(self) -> None:
        """Test that instances do not share mutable defaults."""
        first = ProfileForm()
        first.fields["tags"].append("x")
        assert ProfileForm().fields["tags"] == []

    def test_initial_values(self) -> None:
        """Test overriding defaults through the constructor."""
        model = ProfileForm(first_name="Ann")
        assert model.first_name == "Ann"
        assert model.email == ""

    def test_unknown_initial_value(self) -> None:
        """Test that undeclared fields are rejected at construction."""
        with pytest.raises(TypeError, match="nickname"):
            ProfileForm(nickname="x")

    def test_attribute_access_unknown(self) -> None:
        """Test that unknown attributes still raise AttributeError."""
        with pytest.raises(AttributeError):
            ProfileForm().nickname

    def test_label_for(self) -> None:
        """Test explicit and generated labels."""
        model = ProfileForm()
        assert model.label_for("email") == "E-mail address"
        assert model.label_for("first_name") == "First Name"

    def test_label_translated(self) -> None:
        """Test that labels pass through the model's translator."""
        model = ProfileForm(translate=CatalogTranslator({"First Name": "Vorname"}))
        assert model.label_for("first_name") == "Vorname"

    def test_rules_for_scenario(self) -> None:
        """Test that scenario-bound rules only apply in their scenario."""
        assert ProfileForm().rules_for("email") == []
        assert len(ProfileForm(scenario="register").rules_for("email")) == 1
        assert len(ProfileForm().rules_for("first_name")) == 2

    def test_is_required(self) -> None:
        """Test required detection from rules."""
        model = ProfileForm()
        assert model.is_required("first_name")
        assert not model.is_required("email")
        assert ProfileForm(scenario="register").is_required("email")

    def test_set_values_ignores_unknown(self) -> None:
        """Test mass assignment ignores undeclared keys."""
        model = ProfileForm()
        model.set_values({"first_name": "Bob", "is_admin": True})
        assert model.first_name == "Bob"
        assert "is_admin" not in model.fields

    def test_set_values_safe_only(self) -> None:
        """Test that fields without rules in the scenario are not mass-assigned."""
        model = ProfileForm()
        assert model.safe_fields() == ["first_name"]
        model.set_values({"first_name": "Bob", "email": "b@example.com", "tags": ["x"]})
        assert model.first_name == "Bob"
        assert model.email == ""
        assert model.tags == []

    def test_set_values_safe_in_scenario(self) -> None:
        """Test that scenario-bound rules make their fields safe."""
        model = ProfileForm(scenario="register")
        model.set_values({"email": "b@example.com"})
        assert model.email == "b@example.com"

    def test_set_values_unsafe(self) -> None:
        """Test assigning every declared field with safe_only=False."""
        model = ProfileForm()
        model.set_values({"email": "b@example.com", "tags": ["x"], "is_admin": True}, safe_only=False)
        assert model.email == "b@example.com"
        assert model.tags == ["x"]
        assert "is_admin" not in model.fields

    def test_validate_success(self) -> None:
        """Test validation of valid values."""
        model = ProfileForm(first_name="Ann")
        assert model.validate() is True
        assert model.errors == {}
        assert not model.has_errors()

    def test_validate_collects_errors_in_order(self) -> None:
        """Test that errors accumulate in rule order."""
        model = ProfileForm(first_name=" ")
        assert model.validate() is False
        assert model.errors["first_name"] == [
            "First Name cannot be blank.",
            "First Name is too short (minimum is 2 characters).",
        ]
        assert model.error_for("first_name") == "First Name cannot be blank."

    def test_validate_clears_previous_errors(self) -> None:
        """Test that a second validation starts from a clean slate."""
        model = ProfileForm()
        assert not model.validate()
        model.set_values({"first_name": "Ann"})
        assert model.validate()
        assert model.errors == {}

    def test_validate_selected_fields(self) -> None:
        """Test validating only some fields."""
        model = ProfileForm(scenario="register")
        assert model.validate(names=["email"]) is False
        assert list(model.errors) == ["email"]

    def test_validate_keep_errors(self) -> None:
        """Test validation with clear=False keeps manual errors."""
        model = ProfileForm(first_name="Ann")
        model.add_error("email", "Already taken.")
        assert model.validate(clear=False) is False
        assert model.errors == {"email": ["Already taken."]}

    def test_error_helpers(self) -> None:
        """Test add_errors, has_errors and clear_errors."""
        model = ProfileForm()
        model.add_errors({"first_name": ["a", "b"], "email": ["c"]})
        assert model.has_errors("first_name")
        model.clear_errors("first_name")
        assert not model.has_errors("first_name")
        assert model.has_errors()
        model.clear_errors()
        assert not model.has_errors()
        assert model.error_for("email") is None


class TestDynamicFormModel:
    """Tests for DynamicFormModel."""

    def test_instance_configuration(self) -> None:
        """Test fields, rules and labels given per instance."""
        model = DynamicFormModel(
            {"code": ""},
            rules=[RequiredRule(fields=["code"])],
            labels={"code": "Access code"},
        )
        assert not model.validate()
        assert model.errors == {"code": ["Access code cannot be blank."]}

    def test_instances_do_not_share_rules(self) -> None:
        """Test that per-instance rules do not leak into the class."""
        DynamicFormModel({"a": ""}, rules=[RequiredRule(fields=["a"])])
        assert DynamicFormModel({"a": ""}).validate()
        assert BaseFormModel.rules == []

    def test_for_definition(self) -> None:
        """Test building a model from a definition."""
        definition = load({
            "elements": {
                "name": "text",
                "agree": "checkbox",
                "colors": {"type": "checkboxlist", "items": ["red"]},
                "tags": {"type": "listbox", "items": ["a"], "multiple": True},
                "size": {"type": "dropdownlist", "items": ["s", "m"]},
            }
        })
        model = DynamicFormModel.for_definition(definition)
        assert model.fields == {"name": "", "agree": False, "colors": [], "tags": [], "size": ""}
        definition.validate_against(model)
