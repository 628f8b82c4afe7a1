"""Email value object."""

import re
from typing import Any, Iterable

from task_tracker_mcp.domain.entities.value_object import value_object
from task_tracker_mcp.domain.exceptions import InvalidEmailError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", re.IGNORECASE)
MAX_EMAIL_LENGTH = 254


@value_object
class Email:
    """A normalized (trimmed, lower-cased) email address."""

    __slots__ = ("_value",)

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def create(cls, value: str) -> "Email":
        """Validate and normalize ``value``.

        Raises:
            InvalidEmailError: If the address is blank, too long or malformed.
        """
        if not value or not value.strip():
            raise InvalidEmailError("Email cannot be empty")

        normalized = value.strip().lower()
        if len(normalized) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(f"Invalid email format: {value}")

        return cls(normalized)

    @property
    def value(self) -> str:
        return self._value

    def equality_components(self) -> Iterable[Any]:
        yield self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Email({self._value!r})"
