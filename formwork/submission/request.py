"""Incoming request data as seen by a form."""

from typing import Any

from pydantic import BaseModel, Field

from formwork.definition.models import FormMethod


class FormRequest(BaseModel):
    """The parts of an HTTP request the submission protocol reads.

    Attributes:
        method: The request's HTTP method.
        query: Query-string parameters (the GET bag).
        post: Body parameters (the POST bag).
        session_id: Identifier of the client session, used to look up the
            expected integrity token.
        url: The request URL, used as the default form action.

    Multi-valued elements (checkbox lists, multiple list boxes) post under
    ``name[]``; the HTTP layer is expected to collect repeated keys into a
    list under that key.
    """

    method: FormMethod = FormMethod.GET
    query: dict[str, Any] = Field(default_factory=dict)
    post: dict[str, Any] = Field(default_factory=dict)
    session_id: str = ""
    url: str = ""

    def params_for(self, method: FormMethod) -> dict[str, Any]:
        """Return the parameter bag matching a form method."""
        if method == FormMethod.POST:
            return self.post
        return self.query

    @property
    def is_post(self) -> bool:
        return self.method == FormMethod.POST
