"""Database models."""

from task_tracker_mcp.database.models.base import Base, as_utc, get_current_timestamp
from task_tracker_mcp.database.models.task import TaskRecord

__all__ = [
    "Base",
    "as_utc",
    "get_current_timestamp",
    "TaskRecord",
]
