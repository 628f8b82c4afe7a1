"""
Request Validators - Input checks run before a handler touches storage.

Each validator returns the list of problems found in a request; an empty list
means the request may proceed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from task_tracker_mcp.services.task_commands import (
        CreateTaskCommand,
        DeleteTaskCommand,
        UpdateTaskCommand,
    )
    from task_tracker_mcp.services.task_queries import GetTaskByIdQuery, GetTasksQuery

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_PAGE_SIZE = 100


def _validate_title(title: Optional[str], errors: List[str]) -> None:
    if title is None or not title.strip():
        errors.append("Title is required")
    elif len(title.strip()) > MAX_TITLE_LENGTH:
        errors.append(f"Title must not exceed {MAX_TITLE_LENGTH} characters")


def _validate_description(description: Optional[str], errors: List[str]) -> None:
    if description and len(description.strip()) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description must not exceed {MAX_DESCRIPTION_LENGTH} characters")


def _validate_due_date(due_date: Optional[datetime], errors: List[str]) -> None:
    if due_date is None:
        return
    if due_date.tzinfo is None:
        due_date = due_date.replace(tzinfo=timezone.utc)
    if due_date <= datetime.now(timezone.utc):
        errors.append("Due date must be in the future")


def _validate_task_id(task_id: Optional[str], errors: List[str]) -> None:
    if not task_id or not task_id.strip():
        errors.append("Task ID is required")


def validate_create_task(command: "CreateTaskCommand") -> List[str]:
    errors: List[str] = []
    _validate_title(command.title, errors)
    _validate_description(command.description, errors)
    _validate_due_date(command.due_date, errors)
    return errors


def validate_update_task(command: "UpdateTaskCommand") -> List[str]:
    errors: List[str] = []
    _validate_task_id(command.task_id, errors)
    if command.title is not None:
        _validate_title(command.title, errors)
    _validate_description(command.description, errors)
    _validate_due_date(command.due_date, errors)
    if command.clear_due_date and command.due_date is not None:
        errors.append("Cannot set and clear the due date at the same time")
    return errors


def validate_task_id(request: "DeleteTaskCommand | GetTaskByIdQuery") -> List[str]:
    errors: List[str] = []
    _validate_task_id(request.task_id, errors)
    return errors


def validate_get_tasks(query: "GetTasksQuery") -> List[str]:
    errors: List[str] = []
    if query.page < 1:
        errors.append("Page must be at least 1")
    if query.page_size < 1:
        errors.append("Page size must be at least 1")
    elif query.page_size > MAX_PAGE_SIZE:
        errors.append(f"Page size must not exceed {MAX_PAGE_SIZE}")
    return errors
