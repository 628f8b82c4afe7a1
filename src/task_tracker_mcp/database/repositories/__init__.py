"""Database repositories."""

from task_tracker_mcp.database.repositories.task_repository import TaskQuery, TaskRepository

__all__ = [
    "TaskQuery",
    "TaskRepository",
]
