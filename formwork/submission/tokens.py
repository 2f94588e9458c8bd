"""Integrity tokens guarding form submissions.

A token is issued each time a form is rendered and must come back with the
submission. Storage belongs to the session layer; ``TokenStore`` is the
contract the submission protocol relies on.
"""

import secrets
import threading
from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Session-scoped integrity token storage."""

    def issue(self, session_id: str, key: str) -> str:
        """Generate, store and return a fresh token, replacing any previous one."""
        ...

    def expected(self, session_id: str, key: str) -> str | None:
        """Return the token currently expected, or None if none was issued."""
        ...


class InMemoryTokenStore:
    """Process-local token store keyed by ``(session_id, key)``.

    Suitable for tests and single-process deployments.
    """

    def __init__(self, nbytes: int = 32) -> None:
        self.nbytes = nbytes
        self._tokens: dict[tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def issue(self, session_id: str, key: str) -> str:
        token = secrets.token_urlsafe(self.nbytes)
        with self._lock:
            self._tokens[(session_id, key)] = token
        return token

    def expected(self, session_id: str, key: str) -> str | None:
        with self._lock:
            return self._tokens.get((session_id, key))

    def revoke(self, session_id: str, key: str) -> None:
        """Forget the token of a session."""
        with self._lock:
            self._tokens.pop((session_id, key), None)


def tokens_match(submitted: object, expected: str | None) -> bool:
    """Constant-time comparison of a submitted token with the expected one."""
    if expected is None or not isinstance(submitted, str) or not submitted:
        return False
    return secrets.compare_digest(submitted.encode(), expected.encode())
