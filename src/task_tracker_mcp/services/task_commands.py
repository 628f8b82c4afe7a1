"""
Task Commands - Handlers that change tasks.

Every command resolves the caller from the request context, loads or builds
the aggregate, checks ownership, mutates, commits once and returns the
projected TaskDTO.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.request_context import RequestContext
from task_tracker_mcp.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker_mcp.domain.entities.task import Task
from task_tracker_mcp.domain.entities.task_dto import TaskDTO
from task_tracker_mcp.domain.interfaces.task_repository import ITaskRepository
from task_tracker_mcp.services.pipeline import RequestHandler, can_access
from task_tracker_mcp.services.validators import (
    validate_create_task,
    validate_task_id,
    validate_update_task,
)


@dataclass(frozen=True)
class CreateTaskCommand:
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: TaskPriority = TaskPriority.MEDIUM


@dataclass(frozen=True)
class UpdateTaskCommand:
    """Partial update: ``None`` leaves a field unchanged.

    An empty ``description`` clears it; ``clear_due_date`` removes the deadline.
    """

    task_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    clear_due_date: bool = False
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None


@dataclass(frozen=True)
class DeleteTaskCommand:
    task_id: str


@dataclass(frozen=True)
class CompleteTaskCommand:
    task_id: str


class CreateTaskHandler(RequestHandler[CreateTaskCommand, TaskDTO]):
    """Creates a task owned by the caller."""

    operation = "create_task"
    validator = validate_create_task

    def _handle(
        self,
        request: CreateTaskCommand,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[TaskDTO]:
        # Owner always comes from the context, never from the request.
        task = Task.create(
            title=request.title,
            description=request.description,
            owner_id=context.user.id,
            due_date=request.due_date,
            priority=request.priority,
        )
        repository.add(task, context.cancellation)

        commit_result = repository.commit(context.cancellation)
        if commit_result.is_failure:
            return commit_result

        return DomainSuccess.create(data=TaskDTO.from_task(task))


class _OwnedTaskCommandHandler(RequestHandler):
    """Loads a live task and applies the owner-or-Admin rule before mutating."""

    action = "modify"

    def _load_authorized(
        self, task_id: str, context: RequestContext, repository: ITaskRepository
    ) -> DomainResult[Task]:
        task = repository.find_by_id(task_id, context.cancellation)
        if task is None or task.is_deleted:
            return DomainError.not_found("Task", task_id)
        if not can_access(task, context.user):
            return DomainError.forbidden("Task", self.action)
        return DomainSuccess.create(data=task)

    def _commit_and_project(
        self, task: Task, context: RequestContext, repository: ITaskRepository
    ) -> DomainResult[TaskDTO]:
        commit_result = repository.commit(context.cancellation)
        if commit_result.is_failure:
            return commit_result
        return DomainSuccess.create(data=TaskDTO.from_task(task))


class UpdateTaskHandler(_OwnedTaskCommandHandler):
    """Applies a partial update to a task the caller may modify."""

    operation = "update_task"
    action = "update"
    validator = validate_update_task

    def _handle(
        self,
        request: UpdateTaskCommand,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[TaskDTO]:
        loaded = self._load_authorized(request.task_id, context, repository)
        if loaded.is_failure:
            return loaded
        task = loaded.value

        if request.title is not None:
            task.update_title(request.title)
        if request.description is not None:
            task.update_description(request.description)
        if request.clear_due_date:
            task.update_due_date(None)
        elif request.due_date is not None:
            task.update_due_date(request.due_date)
        if request.priority is not None:
            task.update_priority(request.priority)
        if request.status is not None:
            task.update_status(request.status)

        return self._commit_and_project(task, context, repository)


class CompleteTaskHandler(_OwnedTaskCommandHandler):
    """Marks a task as completed."""

    operation = "complete_task"
    action = "update"
    validator = validate_task_id

    def _handle(
        self,
        request: CompleteTaskCommand,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[TaskDTO]:
        loaded = self._load_authorized(request.task_id, context, repository)
        if loaded.is_failure:
            return loaded
        task = loaded.value

        task.complete()
        return self._commit_and_project(task, context, repository)


class DeleteTaskHandler(_OwnedTaskCommandHandler):
    """Soft-deletes a task. Deleting an already deleted task is NotFound."""

    operation = "delete_task"
    action = "delete"
    validator = validate_task_id

    def _handle(
        self,
        request: DeleteTaskCommand,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[Dict[str, str]]:
        loaded = self._load_authorized(request.task_id, context, repository)
        if loaded.is_failure:
            return loaded
        task = loaded.value

        task.delete()
        commit_result = repository.commit(context.cancellation)
        if commit_result.is_failure:
            return commit_result

        return DomainSuccess.create(
            data={
                "task_id": task.id,
                "message": f"Task '{task.id}' deleted successfully",
            }
        )
