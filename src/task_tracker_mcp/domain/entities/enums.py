"""Enumerations shared by the task domain."""

from enum import Enum


class TaskPriority(str, Enum):
    """Priority of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Workflow state of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class UserRole(str, Enum):
    """Roles a user can hold."""

    USER = "User"
    ADMIN = "Admin"
