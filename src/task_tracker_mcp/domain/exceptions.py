"""
Domain exceptions.

Raised by aggregates and value objects when an invariant would be broken.
Handlers recover them into failed ``DomainResult`` values; they never reach
transport layers.
"""


class DomainException(Exception):
    """Base class for domain rule violations."""


class TaskValidationError(DomainException):
    """A task field failed validation."""


class TaskDeletedError(DomainException):
    """A mutation was attempted on a soft-deleted task."""


class InvalidEmailError(DomainException):
    """An email address is empty or malformed."""


class RequestCancelledError(Exception):
    """The caller cancelled the request before it finished."""
