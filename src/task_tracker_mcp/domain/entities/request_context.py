"""
Request context.

Everything a handler needs to know about who is calling and whether the call
is still wanted. The context is built by the transport layer from verified
configuration and passed explicitly into every handler; request payloads never
contribute to it.
"""

import threading
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from task_tracker_mcp.domain.entities.email import Email
from task_tracker_mcp.domain.entities.enums import UserRole
from task_tracker_mcp.domain.exceptions import RequestCancelledError


@dataclass(frozen=True)
class CurrentUser:
    """Identity and roles of the authenticated caller."""

    id: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    email: Optional[Email] = None

    @classmethod
    def create(
        cls, user_id: str, roles: Iterable[str] = (), email: Optional[str] = None
    ) -> "CurrentUser":
        return cls(
            id=user_id,
            roles=frozenset(role.strip() for role in roles if role and role.strip()),
            email=Email.create(email) if email else None,
        )

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN.value)


class CancellationToken:
    """Cooperative cancellation signal shared by one request's call chain."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError("Request was cancelled")


def raise_if_cancelled(token: Optional[CancellationToken]) -> None:
    """Raise RequestCancelledError when ``token`` has been cancelled."""
    if token is not None:
        token.raise_if_cancelled()


@dataclass(frozen=True)
class RequestContext:
    """Per-request input context for handlers."""

    user: CurrentUser
    cancellation: CancellationToken = field(default_factory=CancellationToken)
