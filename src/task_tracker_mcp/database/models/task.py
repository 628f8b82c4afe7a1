"""
Task SQLAlchemy Model.

Persistent shape of the Task aggregate. Soft-deleted rows stay in the table
with ``is_deleted`` set.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from task_tracker_mcp.database.models.base import (
    PRIORITY_CONSTRAINT,
    TASK_STATUS_CONSTRAINT,
    Base,
    get_current_timestamp,
)


class TaskRecord(Base):
    """Row in the ``tasks`` table."""

    __tablename__ = "tasks"

    id: str = Column(String(36), primary_key=True)
    title: str = Column(String(200), nullable=False)
    description: Optional[str] = Column(Text, nullable=True)
    due_date: Optional[datetime] = Column(DateTime, nullable=True)
    priority: str = Column(String(20), nullable=False, default="medium")
    status: str = Column(String(20), nullable=False, default="pending")
    owner_id: str = Column(String(36), nullable=False, index=True)
    created_at: datetime = Column(DateTime, nullable=False, default=get_current_timestamp)
    updated_at: datetime = Column(DateTime, nullable=False, default=get_current_timestamp)
    is_deleted: bool = Column(Boolean, nullable=False, default=False)
    deleted_at: Optional[datetime] = Column(DateTime, nullable=True)
    version: int = Column(Integer, nullable=False)

    # Table-level constraints
    __table_args__ = (
        TASK_STATUS_CONSTRAINT,
        PRIORITY_CONSTRAINT,
        Index("ix_tasks_owner_listing", "owner_id", "is_deleted", "created_at"),
    )

    # UPDATE ... WHERE version = <loaded version>; a stale write raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<TaskRecord(id={self.id!r}, title={self.title!r}, status={self.status!r})>"
