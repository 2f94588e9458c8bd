"""Form: a definition bound to a model and the current request.

The submission protocol decides whether the form was posted, based on which
button was sent and on the integrity token, and copies posted values onto
the model before validation.
"""

import logging
from enum import Enum
from typing import Any

from formwork.config import DEFAULT_TOKEN_NAME
from formwork.definition.models import FormDefinition
from formwork.errors import UsageError
from formwork.model.base import FormModel
from formwork.submission.request import FormRequest
from formwork.submission.tokens import TokenStore, tokens_match

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    """Where a form is in its submit/validate lifecycle."""

    UNSUBMITTED = "unsubmitted"
    SUBMITTED_INVALID = "submitted_invalid"  # submitted, not (yet) valid
    SUBMITTED_VALID = "submitted_valid"


class Form:
    """A form definition bound to a model, a request and a token store.

    Typical use inside a request handler:

        form = Form(definition, LoginForm(), request, token_store)
        if form.submitted() and form.validate():
            ...  # act on form.model
        html = RenderDispatcher(form).render()
    """

    def __init__(
        self,
        definition: FormDefinition,
        model: FormModel,
        request: FormRequest,
        token_store: TokenStore,
        token_name: str = DEFAULT_TOKEN_NAME,
        check_token: bool = True,
    ) -> None:
        """Bind a definition to a model.

        Args:
            definition: The form definition.
            model: The model holding field values and validation rules.
            request: The current request.
            token_store: Session-scoped integrity token storage.
            token_name: Parameter name of the integrity token.
            check_token: Require a matching integrity token on submission.

        Raises:
            ConfigurationError: If an element has no corresponding model field.
        """
        definition.validate_against(model)

        self.definition = definition
        self.model = model
        self.request = request
        self.token_store = token_store
        self.token_name = token_name
        self.check_token = check_token

        self.state = SubmissionState.UNSUBMITTED
        self.clicked: str | None = None
        self.values: dict[str, Any] = {}
        self._is_submitted = False

    @property
    def token_key(self) -> str:
        """Key the token is stored under within the session.

        The form id, or for forms without one, a key built from the element
        and button names so that unrelated forms on one page keep separate
        tokens.
        """
        if self.definition.form_id:
            return self.definition.form_id
        names = [*self.definition.element_names, *self.definition.button_names]
        return "form:" + ",".join(names)

    @property
    def action(self) -> str:
        """Submission URL: the configured action, else the current URL."""
        return self.definition.action or self.request.url

    @property
    def params(self) -> dict[str, Any]:
        """Request parameters matching the form's method."""
        return self.request.params_for(self.definition.method)

    def issue_token(self) -> str:
        """Generate a fresh integrity token for this render."""
        return self.token_store.issue(self.request.session_id, self.token_key)

    def token_valid(self) -> bool:
        """Whether the submitted integrity token matches the expected one."""
        if not self.check_token:
            return True
        expected = self.token_store.expected(self.request.session_id, self.token_key)
        return tokens_match(self.params.get(self.token_name), expected)

    def _posted_values(self, params: dict[str, Any]) -> dict[str, Any]:
        # Multi-valued elements post under "name[]"; a bare "name" (the
        # empty companion input) is used when nothing was chosen
        values = {}
        for name, element in self.definition.elements.items():
            if element.param_name in params:
                values[name] = params[element.param_name]
            elif name in params:
                values[name] = params[name]
        return values

    def submitted(self, button: str | None = None) -> bool:
        """Check whether the form was submitted.

        Args:
            button: Name of the button that must have been posted. When
                omitted, any declared button counts. A form without
                buttons counts as submitted when any element was posted.

        Returns:
            True if the form was submitted with a valid integrity token.
            Posted element values are then copied onto the model.
        """
        params = self.params

        if button is not None:
            clicked = button if button in params else None
            found = clicked is not None
        elif self.definition.buttons:
            clicked = next((name for name in self.definition.buttons if name in params), None)
            found = clicked is not None
        else:
            clicked = None
            found = bool(self._posted_values(params))

        if not found:
            logger.debug("Form %s not submitted (button=%s)", self.token_key, button)
            return False

        if not self.token_valid():
            logger.warning(
                "Rejected submission of form %s: integrity token missing or mismatched",
                self.token_key,
            )
            return False

        self.clicked = clicked
        self.values = self._posted_values(params)
        self.model.fields.update(self.values)
        self._is_submitted = True
        self.state = SubmissionState.SUBMITTED_INVALID
        logger.debug(
            "Form %s submitted via %s with fields %s",
            self.token_key, clicked, sorted(self.values),
        )
        return True

    def validate(self) -> bool:
        """Validate the bound model.

        Returns:
            True if no field has errors.

        Raises:
            UsageError: If ``submitted()`` has not returned True beforehand.
        """
        if not self._is_submitted:
            raise UsageError("validate() called before submitted() returned True")

        valid = self.model.validate()
        self.state = SubmissionState.SUBMITTED_VALID if valid else SubmissionState.SUBMITTED_INVALID
        return valid

    def process(self, button: str | None = None) -> SubmissionState:
        """Run ``submitted()`` then, if submitted, ``validate()``."""
        if self.submitted(button):
            self.validate()
        return self.state
