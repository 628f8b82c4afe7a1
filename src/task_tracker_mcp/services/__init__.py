"""Service layer - Task command and query handlers."""

from task_tracker_mcp.services.pipeline import RequestHandler, can_access
from task_tracker_mcp.services.service_factory import (
    ServiceFactory,
    TaskHandlers,
    get_service_factory,
)
from task_tracker_mcp.services.task_commands import (
    CompleteTaskCommand,
    CompleteTaskHandler,
    CreateTaskCommand,
    CreateTaskHandler,
    DeleteTaskCommand,
    DeleteTaskHandler,
    UpdateTaskCommand,
    UpdateTaskHandler,
)
from task_tracker_mcp.services.task_queries import (
    GetTaskByIdHandler,
    GetTaskByIdQuery,
    GetTasksHandler,
    GetTasksQuery,
)

__all__ = [
    "CompleteTaskCommand",
    "CompleteTaskHandler",
    "CreateTaskCommand",
    "CreateTaskHandler",
    "DeleteTaskCommand",
    "DeleteTaskHandler",
    "GetTaskByIdHandler",
    "GetTaskByIdQuery",
    "GetTasksHandler",
    "GetTasksQuery",
    "RequestHandler",
    "ServiceFactory",
    "TaskHandlers",
    "UpdateTaskCommand",
    "UpdateTaskHandler",
    "can_access",
    "get_service_factory",
]
