"""Exception types raised by formwork.

Per-field validation failures are never raised; they accumulate on the
bound model's ``errors`` mapping and ``validate()`` returns False.
"""


class FormworkError(Exception):
    """Base class for all formwork errors."""

    pass


class ConfigurationError(FormworkError):
    """Raised when a form definition is malformed or cannot be bound.

    Surfaced at load time (missing list items, unknown method or type) and
    at bind time (element with no corresponding model field).
    """

    pass


class UsageError(FormworkError):
    """Raised when form operations are called out of sequence.

    For example, calling ``Form.validate()`` before ``Form.submitted()``
    has returned True.
    """

    pass


class FormNotFoundError(FormworkError):
    """Raised when a form definition is not found in a registry."""

    pass
