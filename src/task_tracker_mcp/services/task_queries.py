"""
Task Queries - Read-only handlers.

GetTaskById lets an Admin view any live task. GetTasks always lists only the
caller's own live tasks, Admin included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.pagination import PaginatedList, paginate
from task_tracker_mcp.domain.entities.request_context import RequestContext
from task_tracker_mcp.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker_mcp.domain.entities.task_dto import TaskDTO
from task_tracker_mcp.domain.interfaces.task_repository import ITaskRepository
from task_tracker_mcp.services.pipeline import RequestHandler, can_access
from task_tracker_mcp.services.validators import validate_get_tasks, validate_task_id

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class GetTaskByIdQuery:
    task_id: str


@dataclass(frozen=True)
class GetTasksQuery:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None


class GetTaskByIdHandler(RequestHandler[GetTaskByIdQuery, TaskDTO]):
    """Returns one live task the caller owns, or any live task for an Admin."""

    operation = "get_task"
    validator = validate_task_id

    def _handle(
        self,
        request: GetTaskByIdQuery,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[TaskDTO]:
        task = repository.find_by_id(request.task_id, context.cancellation)
        if task is None or task.is_deleted:
            return DomainError.not_found("Task", request.task_id)
        if not can_access(task, context.user):
            return DomainError.forbidden("Task", "view")

        return DomainSuccess.create(data=TaskDTO.from_task(task))


class GetTasksHandler(RequestHandler[GetTasksQuery, PaginatedList[TaskDTO]]):
    """Pages through the caller's own tasks, newest first."""

    operation = "list_tasks"
    validator = validate_get_tasks

    def _handle(
        self,
        request: GetTasksQuery,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[PaginatedList[TaskDTO]]:
        source = repository.query(
            owner_id=context.user.id,
            status=request.status,
            priority=request.priority,
            cancellation=context.cancellation,
        )
        page = paginate(source, request.page, request.page_size, project=TaskDTO.from_task)
        return DomainSuccess.create(data=page)
