"""
Task Repository.

SQLAlchemy ORM-based unit of work for the Task aggregate. Each instance holds
one session; aggregates loaded or added through it are written back by a
single ``commit``.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from task_tracker_mcp.database.models.base import as_utc
from task_tracker_mcp.database.models.task import TaskRecord
from task_tracker_mcp.database.orm_manager import ORMManager, get_orm_manager
from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.request_context import (
    CancellationToken,
    raise_if_cancelled,
)
from task_tracker_mcp.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker_mcp.domain.entities.task import Task

logger = logging.getLogger(__name__)


class TaskQuery:
    """Page source over a filtered, ordered task select."""

    def __init__(
        self,
        session: Session,
        statement: Select,
        to_entity: Callable[[TaskRecord], Task],
        cancellation: Optional[CancellationToken] = None,
    ):
        self._session = session
        self._statement = statement
        self._to_entity = to_entity
        self._cancellation = cancellation

    def count(self) -> int:
        raise_if_cancelled(self._cancellation)
        count_stmt = select(func.count()).select_from(self._statement.order_by(None).subquery())
        return self._session.execute(count_stmt).scalar_one()

    def fetch(self, offset: int, limit: int) -> List[Task]:
        raise_if_cancelled(self._cancellation)
        records = self._session.execute(self._statement.offset(offset).limit(limit)).scalars()
        return [self._to_entity(record) for record in records]


class TaskRepository:
    """
    Task repository using SQLAlchemy ORM.

    Loads and stores Task aggregates. Read failures propagate as SQLAlchemy
    exceptions; commit failures come back as a failed DomainResult.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize repository with ORM manager.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self.orm_manager = orm_manager or get_orm_manager()
        self._session = self.orm_manager.create_session()
        self._tracked: Dict[str, Tuple[Task, TaskRecord]] = {}

    def __enter__(self) -> "TaskRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _to_entity(record: TaskRecord) -> Task:
        """Convert a TaskRecord row to a Task aggregate."""
        return Task(
            id=record.id,
            title=record.title,
            description=record.description,
            due_date=as_utc(record.due_date),
            priority=TaskPriority(record.priority),
            status=TaskStatus(record.status),
            owner_id=record.owner_id,
            created_at=as_utc(record.created_at),
            updated_at=as_utc(record.updated_at),
            is_deleted=record.is_deleted,
            deleted_at=as_utc(record.deleted_at),
            version=record.version,
        )

    @staticmethod
    def _apply(task: Task, record: TaskRecord) -> None:
        """Copy aggregate state onto its row. Owner and creation time are written once."""
        if record.owner_id is None:
            record.owner_id = task.owner_id
            record.created_at = task.created_at
        record.title = task.title
        record.description = task.description
        record.due_date = task.due_date
        record.priority = task.priority.value
        record.status = task.status.value
        record.updated_at = task.updated_at
        record.is_deleted = task.is_deleted
        record.deleted_at = task.deleted_at

    def find_by_id(
        self, task_id: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[Task]:
        """
        Get task by ID, tombstoned or not.

        Args:
            task_id: Task UUID.
            cancellation: Request cancellation token.

        Returns:
            Task aggregate, or None if no row exists.
        """
        raise_if_cancelled(cancellation)
        record = self._session.get(TaskRecord, task_id)
        if record is None:
            return None

        task = self._to_entity(record)
        self._tracked[task.id] = (task, record)
        return task

    def add(self, task: Task, cancellation: Optional[CancellationToken] = None) -> None:
        """Track a new task for insertion at commit."""
        raise_if_cancelled(cancellation)
        record = TaskRecord(id=task.id)
        self._apply(task, record)
        self._session.add(record)
        self._tracked[task.id] = (task, record)

    def query(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> TaskQuery:
        """
        Build a page source of one owner's live tasks.

        Args:
            owner_id: Only tasks owned by this user are matched.
            status: Optional status filter.
            priority: Optional priority filter.
            cancellation: Request cancellation token.

        Returns:
            TaskQuery ordered by creation time, newest first.
        """
        raise_if_cancelled(cancellation)
        statement = select(TaskRecord).where(
            TaskRecord.owner_id == owner_id,
            TaskRecord.is_deleted.is_(False),
        )
        if status is not None:
            statement = statement.where(TaskRecord.status == TaskStatus(status).value)
        if priority is not None:
            statement = statement.where(TaskRecord.priority == TaskPriority(priority).value)

        statement = statement.order_by(TaskRecord.created_at.desc(), TaskRecord.id.desc())
        return TaskQuery(self._session, statement, self._to_entity, cancellation)

    def commit(self, cancellation: Optional[CancellationToken] = None) -> DomainResult[None]:
        """
        Write every tracked aggregate in one transaction.

        Returns:
            DomainResult, failed with ``conflict`` when another request changed
            a task since it was loaded, or ``operation_failed`` on database errors.
        """
        raise_if_cancelled(cancellation)
        try:
            for task, record in self._tracked.values():
                self._apply(task, record)
            self._session.commit()
        except StaleDataError as e:
            self._session.rollback()
            logger.warning("Concurrent modification detected: %s", e)
            return DomainError.conflict("Task was modified by another request, reload and retry")
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Failed to commit tasks: %s", e, exc_info=True)
            return DomainError.operation_failed("commit", str(e))

        for task, record in self._tracked.values():
            task.version = record.version
        return DomainSuccess.create()

    def close(self) -> None:
        """Close the session, discarding anything not committed."""
        self._tracked.clear()
        self._session.close()
