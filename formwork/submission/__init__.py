"""Submission protocol: binding, button detection and integrity tokens."""

from formwork.submission.form import Form, SubmissionState
from formwork.submission.request import FormRequest
from formwork.submission.tokens import InMemoryTokenStore, TokenStore, tokens_match

__all__ = [
    "Form",
    "FormRequest",
    "InMemoryTokenStore",
    "SubmissionState",
    "TokenStore",
    "tokens_match",
]
