"""
Service Executor - Direct handler execution for MCP tools.

Maps MCP tool names to task command and query handlers. Each tool call runs
on a worker thread with its own RequestContext; the caller identity comes from
server configuration, never from tool arguments.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import yaml

from task_tracker_mcp.config import get_configured_user
from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.pagination import PaginatedList
from task_tracker_mcp.domain.entities.request_context import (
    CancellationToken,
    CurrentUser,
    RequestContext,
)
from task_tracker_mcp.domain.entities.result_types import DomainResult
from task_tracker_mcp.domain.entities.task_dto import TaskDTO
from task_tracker_mcp.server.error_sanitizer import sanitize_exception
from task_tracker_mcp.services import (
    CompleteTaskCommand,
    CreateTaskCommand,
    DeleteTaskCommand,
    GetTaskByIdQuery,
    GetTasksQuery,
    ServiceFactory,
    UpdateTaskCommand,
    get_service_factory,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Dict[str, Any], RequestContext], str]


class ToolArgumentError(ValueError):
    """A tool argument is missing or has the wrong shape."""


def _parse_datetime(value: Any, name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as e:
        raise ToolArgumentError(f"{name} must be an ISO 8601 timestamp, got {value!r}") from e


def _parse_priority(value: Any) -> Optional[TaskPriority]:
    if value is None:
        return None
    try:
        return TaskPriority(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise ToolArgumentError(f"priority must be one of: {allowed}") from e


def _parse_status(value: Any) -> Optional[TaskStatus]:
    if value is None:
        return None
    try:
        return TaskStatus(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ToolArgumentError(f"status must be one of: {allowed}") from e


def _parse_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ToolArgumentError(f"{name} must be a boolean, got {value!r}")
    return value


def _parse_int(value: Any, name: str, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ToolArgumentError(f"{name} must be an integer") from e


def _serialize(data: Any) -> Any:
    if isinstance(data, TaskDTO):
        return data.to_dict()
    if isinstance(data, PaginatedList):
        return data.to_dict(_serialize)
    return data


class ServiceExecutor:
    """
    Executes MCP tool calls directly via the task handlers.

    Args:
        user: Caller identity. Read from the environment if not provided.
        factory: Service factory. Uses the singleton if not provided.
    """

    def __init__(
        self,
        user: Optional[CurrentUser] = None,
        factory: Optional[ServiceFactory] = None,
    ):
        """Initialize the service executor."""
        self._user = user or get_configured_user()
        self._factory = factory or get_service_factory()
        self._handlers = self._factory.get_task_handlers()
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="mcp-service-")

        # Tool to handler mapping
        self._tool_handlers: Dict[str, ToolHandler] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register tool name to handler mappings."""
        self._tool_handlers.update(
            {
                "task_create": self._handle_task_create,
                "task_list": self._handle_task_list,
                "task_show": self._handle_task_show,
                "task_update": self._handle_task_update,
                "task_delete": self._handle_task_delete,
                "task_complete": self._handle_task_complete,
            }
        )

    @property
    def tool_names(self) -> List[str]:
        return sorted(self._tool_handlers)

    async def execute_tool(self, tool_name: str, arguments: Dict[str, Any]) -> str:
        """
        Execute a tool and return YAML-formatted result.

        If the awaiting task is cancelled, the request's cancellation token is
        fired so the worker stops before committing.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments dictionary.

        Returns:
            YAML-formatted result string.
        """
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            return self._format_error(f"Unknown tool: {tool_name}")

        if self._user is None:
            return self._format_error(
                "No user identity configured; set TASK_TRACKER_USER_ID", "unauthorized"
            )

        token = CancellationToken()
        context = RequestContext(user=self._user, cancellation=token)
        try:
            # Run handler in thread pool to avoid blocking event loop
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(
                self._executor, lambda: handler(dict(arguments or {}), context)
            )
        except asyncio.CancelledError:
            token.cancel()
            logger.info("Tool %s cancelled by client", tool_name)
            raise
        except ToolArgumentError as e:
            return self._format_error(str(e), "validation_error")
        except Exception as e:
            logger.error("Error executing tool %s: %s", tool_name, e, exc_info=True)
            return self._format_error(sanitize_exception(e), "operation_failed")

    def _format_result(self, data: Any, success: bool = True) -> str:
        """Format result as YAML."""
        result = {
            "success": success,
            "data": _serialize(data),
        }
        return yaml.dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _format_error(self, message: str, error_type: Optional[str] = None) -> str:
        """Format error as YAML."""
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }
        return yaml.dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _respond(self, result: DomainResult[Any]) -> str:
        if result.is_success:
            return self._format_result(result.data)
        error_type = result.error_type.value if result.error_type else None
        return self._format_error(result.reason, error_type)

    # --- Task Handlers ---

    def _handle_task_create(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_create tool."""
        command = CreateTaskCommand(
            title=args.get("title", ""),
            description=args.get("description"),
            due_date=_parse_datetime(args.get("due_date"), "due_date"),
            priority=_parse_priority(args.get("priority")) or TaskPriority.MEDIUM,
        )
        return self._respond(self._handlers.create.handle(command, context))

    def _handle_task_list(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_list tool."""
        query = GetTasksQuery(
            page=_parse_int(args.get("page"), "page", 1),
            page_size=_parse_int(args.get("page_size"), "page_size", 20),
            status=_parse_status(args.get("status")),
            priority=_parse_priority(args.get("priority")),
        )
        return self._respond(self._handlers.get_list.handle(query, context))

    def _handle_task_show(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_show tool."""
        query = GetTaskByIdQuery(task_id=args.get("task_id", ""))
        return self._respond(self._handlers.get_by_id.handle(query, context))

    def _handle_task_update(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_update tool."""
        command = UpdateTaskCommand(
            task_id=args.get("task_id", ""),
            title=args.get("title"),
            description=args.get("description"),
            due_date=_parse_datetime(args.get("due_date"), "due_date"),
            clear_due_date=_parse_bool(args.get("clear_due_date"), "clear_due_date"),
            priority=_parse_priority(args.get("priority")),
            status=_parse_status(args.get("status")),
        )
        return self._respond(self._handlers.update.handle(command, context))

    def _handle_task_delete(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_delete tool."""
        command = DeleteTaskCommand(task_id=args.get("task_id", ""))
        return self._respond(self._handlers.delete.handle(command, context))

    def _handle_task_complete(self, args: Dict[str, Any], context: RequestContext) -> str:
        """Handle task_complete tool."""
        command = CompleteTaskCommand(task_id=args.get("task_id", ""))
        return self._respond(self._handlers.complete.handle(command, context))

    def close(self) -> None:
        """Shutdown the executor."""
        self._executor.shutdown(wait=True)
