"""Task Repository Interface."""

from typing import Optional, Protocol

from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.pagination import PageSource
from task_tracker_mcp.domain.entities.request_context import CancellationToken
from task_tracker_mcp.domain.entities.result_types import DomainResult
from task_tracker_mcp.domain.entities.task import Task


class ITaskRepository(Protocol):
    """
    Protocol for task storage as seen by the handlers.

    One repository instance is one unit of work: aggregates loaded or added
    through it are written by a single ``commit``. Every call raises
    RequestCancelledError if ``cancellation`` has fired.
    """

    def find_by_id(
        self, task_id: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[Task]:
        """Load a task by ID, including soft-deleted ones."""
        ...

    def add(self, task: Task, cancellation: Optional[CancellationToken] = None) -> None:
        """Track a new task for insertion at commit."""
        ...

    def query(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> PageSource[Task]:
        """Non-deleted tasks of ``owner_id`` matching the filters, newest first."""
        ...

    def commit(self, cancellation: Optional[CancellationToken] = None) -> DomainResult[None]:
        """Persist tracked changes."""
        ...

    def close(self) -> None:
        """Release the unit of work, discarding uncommitted changes."""
        ...
