"""
Task Aggregate.

The Task is the single aggregate of the tracker: it owns its invariants and is
the unit of load and save. It is created through ``Task.create`` and mutated
field by field through explicit operations, each re-validating its own field.
``delete`` flips the soft-delete tombstone; it is the only destructive
transition and there is no way back.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.exceptions import TaskDeletedError, TaskValidationError


def utc_now() -> datetime:
    """Current timestamp in UTC."""
    return datetime.now(timezone.utc)


def _normalize_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise TaskValidationError("Task title cannot be empty")
    return title.strip()


def _normalize_description(description: Optional[str]) -> Optional[str]:
    if description is None or not description.strip():
        return None
    return description.strip()


def _normalize_due_date(due_date: Optional[datetime]) -> Optional[datetime]:
    # Naive values are taken as UTC; aware values are converted
    if due_date is None:
        return None
    if due_date.tzinfo is None:
        return due_date.replace(tzinfo=timezone.utc)
    return due_date.astimezone(timezone.utc)


class Task:
    """
    Task aggregate root.

    Attributes:
        id: Unique task identifier (UUID4 string)
        title: Non-empty, trimmed title
        description: Optional trimmed description
        due_date: Optional deadline
        priority: TaskPriority, defaults to medium
        status: TaskStatus, starts as pending
        owner_id: Id of the creating user, fixed at construction
        created_at: Creation timestamp, never mutated
        updated_at: Timestamp of the last mutation
        is_deleted: Soft-delete flag
        deleted_at: When the task was soft-deleted
        version: Optimistic concurrency counter maintained by storage
    """

    def __init__(
        self,
        *,
        id: str,
        title: str,
        owner_id: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.PENDING,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        is_deleted: bool = False,
        deleted_at: Optional[datetime] = None,
        version: Optional[int] = None,
    ):
        self.id = id
        self.title = title
        self.description = description
        self.due_date = due_date
        self.priority = TaskPriority(priority)
        self.status = TaskStatus(status)
        self._owner_id = owner_id
        self.created_at = created_at or utc_now()
        self.updated_at = updated_at or self.created_at
        self.is_deleted = is_deleted
        self.deleted_at = deleted_at
        self.version = version

    @classmethod
    def create(
        cls,
        title: str,
        description: Optional[str],
        owner_id: str,
        due_date: Optional[datetime] = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> "Task":
        """
        Create a new pending task owned by ``owner_id``.

        Raises:
            TaskValidationError: If the title is blank or the owner id is missing.
        """
        normalized_title = _normalize_title(title)
        if not owner_id:
            raise TaskValidationError("Task must have a valid user ID")

        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            title=normalized_title,
            description=_normalize_description(description),
            owner_id=owner_id,
            due_date=_normalize_due_date(due_date),
            priority=priority,
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def owner_id(self) -> str:
        return self._owner_id

    def is_owned_by(self, user_id: str) -> bool:
        return self._owner_id == user_id

    # --- Mutators ---

    def _ensure_mutable(self) -> None:
        if self.is_deleted:
            raise TaskDeletedError(f"Task '{self.id}' has been deleted")

    def _touch(self) -> None:
        self.updated_at = utc_now()

    def update_title(self, title: str) -> None:
        self._ensure_mutable()
        self.title = _normalize_title(title)
        self._touch()

    def update_description(self, description: Optional[str]) -> None:
        self._ensure_mutable()
        self.description = _normalize_description(description)
        self._touch()

    def update_due_date(self, due_date: Optional[datetime]) -> None:
        self._ensure_mutable()
        self.due_date = _normalize_due_date(due_date)
        self._touch()

    def update_priority(self, priority: TaskPriority) -> None:
        self._ensure_mutable()
        self.priority = TaskPriority(priority)
        self._touch()

    def update_status(self, status: TaskStatus) -> None:
        self._ensure_mutable()
        self.status = TaskStatus(status)
        self._touch()

    def start(self) -> None:
        self.update_status(TaskStatus.IN_PROGRESS)

    def complete(self) -> None:
        self.update_status(TaskStatus.COMPLETED)

    def reopen(self) -> None:
        self.update_status(TaskStatus.PENDING)

    def delete(self) -> None:
        """Soft-delete the task. Terminal: a deleted task cannot be deleted again."""
        self._ensure_mutable()
        now = utc_now()
        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<Task(id={self.id!r}, title={self.title!r}, status={self.status.value!r})>"
