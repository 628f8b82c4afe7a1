"""Domain entities - aggregate, value objects, DTOs and result envelopes."""

from task_tracker_mcp.domain.entities.email import Email
from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus, UserRole
from task_tracker_mcp.domain.entities.pagination import (
    PageSource,
    PaginatedList,
    SequencePageSource,
    paginate,
)
from task_tracker_mcp.domain.entities.request_context import (
    CancellationToken,
    CurrentUser,
    RequestContext,
)
from task_tracker_mcp.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
)
from task_tracker_mcp.domain.entities.task import Task
from task_tracker_mcp.domain.entities.task_dto import TaskDTO
from task_tracker_mcp.domain.entities.value_object import (
    SupportsEqualityComponents,
    value_equals,
    value_hash,
    value_object,
)

__all__ = [
    "CancellationToken",
    "CurrentUser",
    "DomainError",
    "DomainErrorType",
    "DomainResult",
    "DomainSuccess",
    "Email",
    "PageSource",
    "PaginatedList",
    "RequestContext",
    "SequencePageSource",
    "SupportsEqualityComponents",
    "Task",
    "TaskDTO",
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    "paginate",
    "value_equals",
    "value_hash",
    "value_object",
]
