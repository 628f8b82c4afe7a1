"""
Task Data Transfer Object.

Read-only projection of the Task aggregate handed to transport layers.
Mapping is pure: building a DTO never touches storage.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.task import Task


@dataclass(frozen=True)
class TaskDTO:
    """
    Task Data Transfer Object.

    Attributes:
        id: Task identifier
        title: Task title
        description: Task description
        due_date: Optional deadline
        priority: 'low', 'medium' or 'high'
        status: 'pending', 'in-progress' or 'completed'
        owner_id: Id of the owning user
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    id: str
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    priority: TaskPriority
    status: TaskStatus
    owner_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskDTO":
        """Project a Task aggregate to its DTO."""
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            priority=task.priority,
            status=task.status,
            owner_id=task.owner_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "priority": self.priority.value,
            "status": self.status.value,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
