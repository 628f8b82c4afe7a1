"""
Database Models Base Classes and Utilities.

Shared base classes, utilities, and common functionality for all database models.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""

    # Models annotate plain Column attributes rather than Mapped[]
    __allow_unmapped__ = True


def get_current_timestamp() -> datetime:
    """Get current timestamp in UTC.

    Returns:
        datetime: Current UTC timestamp for record creation/updates.
    """
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


# Common check constraints
PRIORITY_CONSTRAINT = CheckConstraint(
    "priority IN ('low', 'medium', 'high')", name="check_priority"
)

TASK_STATUS_CONSTRAINT = CheckConstraint(
    "status IN ('pending', 'in-progress', 'completed')",
    name="check_task_status",
)
