"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from formwork.definition import FormDefinition, load
from formwork.model import BaseFormModel, BooleanRule, LengthRule, RequiredRule
from formwork.submission import Form, FormRequest, InMemoryTokenStore

SESSION_ID = "session-1"


class LoginForm(BaseFormModel):
    """Model used by the login form tests."""

    defaults = {"username": "", "password": "", "remember": False}
    rules = [
        RequiredRule(fields=["username", "password"]),
        LengthRule(fields=["username"], max=32),
        BooleanRule(fields=["remember"]),
    ]
    labels = {"remember": "Remember me next time"}


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def schemas_dir(project_root: Path) -> Path:
    """Return the schemas directory."""
    return project_root / "schemas"


@pytest.fixture
def form_registry_path(project_root: Path) -> Path:
    """Return the form registry path."""
    return project_root / "form-registry"


@pytest.fixture
def form_schema_path(schemas_dir: Path) -> Path:
    """Return the form definition schema path."""
    return schemas_dir / "form_definition.schema.json"


@pytest.fixture
def login_config() -> dict:
    """Configuration of a login form with one submit button."""
    return {
        "form_id": "login",
        "title": "Login",
        "elements": {
            "username": {"type": "text", "maxlength": 32},
            "password": {"type": "password", "hint": "Passwords are case sensitive."},
            "remember": {"type": "checkbox", "label": "Remember me next time"},
        },
        "buttons": {
            "submit": {"type": "submit", "label": "Login"},
        },
    }


@pytest.fixture
def login_definition(login_config: dict) -> FormDefinition:
    """Load the login form definition."""
    return load(login_config)


@pytest.fixture
def login_form_class() -> type[LoginForm]:
    """The login model class."""
    return LoginForm


@pytest.fixture
def login_model() -> LoginForm:
    """A fresh login model."""
    return LoginForm()


@pytest.fixture
def session_id() -> str:
    """Session the test requests belong to."""
    return SESSION_ID


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    """An empty in-memory token store."""
    return InMemoryTokenStore()


@pytest.fixture
def make_form(token_store: InMemoryTokenStore):
    """Factory binding a definition and model to a POST payload.

    When ``token`` is True, a token is issued first (as rendering would) and
    added to the payload under the default token name.
    """

    def _make(
        definition: FormDefinition,
        model: BaseFormModel,
        payload: dict | None = None,
        token: bool | str = True,
    ) -> Form:
        payload = dict(payload or {})
        request = FormRequest(method="POST", post=payload, session_id=SESSION_ID, url="/login")
        form = Form(definition, model, request, token_store)
        if token is True:
            payload["_csrf_token"] = form.issue_token()
        elif token:
            form.issue_token()
            payload["_csrf_token"] = token
        request.post.update(payload)
        return form

    return _make
