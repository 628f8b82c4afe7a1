"""
Task Tracker MCP Server Implementation.

This module provides the TaskTrackerMCPServer class that implements the Model
Context Protocol (MCP) server for the task tracker on top of the task handlers.
"""

import asyncio
import atexit
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData, TextContent, Tool

from task_tracker_mcp import __version__
from task_tracker_mcp.config import get_configured_user, is_debug_mode
from task_tracker_mcp.database.orm_manager import get_orm_manager
from task_tracker_mcp.server.error_sanitizer import sanitize_exception
from task_tracker_mcp.server.service_executor import ServiceExecutor
from task_tracker_mcp.server.tools import get_all_tools

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = """Task Tracker - personal task management

Every call acts as the user configured for this server (TASK_TRACKER_USER_ID).

Basic workflow:
1. task_create(title="Buy milk", priority="high") -> note data.id
2. task_list(page=1, page_size=20) -> your tasks, newest first
3. task_update(task_id, status="in-progress") / task_complete(task_id)
4. task_delete(task_id) -> permanent for all practical purposes

Rules:
- You can only change or delete your own tasks (Admins can change any task)
- task_list only ever shows your own tasks
- Titles cannot be empty
"""


class TaskTrackerMCPServer:
    """
    MCP server implementation for the task tracker.

    Exposes the task tools over MCP, executing them directly through the
    service layer.
    """

    def __init__(self):
        """Initialize the Task Tracker MCP server."""
        self._server = Server(
            name="task-tracker-mcp",
            version=__version__,
            instructions=SERVER_INSTRUCTIONS,
        )

        user = get_configured_user()
        if user is None:
            logger.warning("TASK_TRACKER_USER_ID is not set; every tool call will be rejected")
        else:
            logger.info("Serving requests as user %s", user.id)

        # Initialize database
        logger.info("Initializing database...")
        try:
            self._orm_manager = get_orm_manager()
            health = self._orm_manager.perform_health_check()
            if health.get("healthy"):
                logger.info(
                    "Database initialized: %s tables",
                    health.get("table_count", 0),
                )
            else:
                logger.warning("Database health check failed: %s", health.get("error"))
        except Exception as e:
            logger.error("Failed to initialize database: %s", e, exc_info=True)
            raise RuntimeError(f"Database initialization failed: {e}") from e

        self._service_executor = ServiceExecutor(user=user)

        self._tools = get_all_tools()
        logger.info("Loaded %d tools", len(self._tools))

        self._register_handlers()

        atexit.register(self.cleanup)

        logger.info("TaskTrackerMCPServer initialized")

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self._server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            """Handle list_tools request."""
            if is_debug_mode():
                logger.debug("Handling list_tools request")
            return self._tools

        @self._server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            """Handle call_tool request."""
            if is_debug_mode():
                logger.debug("Handling call_tool: %s", name)

            try:
                result_text = await self._service_executor.execute_tool(name, arguments)

                if is_debug_mode():
                    preview = result_text[:200] + "..." if len(result_text) > 200 else result_text
                    logger.debug("Tool result preview: %s", preview)

                return [TextContent(type="text", text=result_text)]

            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Error executing tool '%s': %s", name, e, exc_info=True)

                error_data = ErrorData(
                    code=INTERNAL_ERROR,
                    message=sanitize_exception(e),
                    data={"tool_name": name},
                )
                raise McpError(error_data) from e

        logger.debug("MCP protocol handlers registered")

    async def run(self, read_stream: Any, write_stream: Any, initialization_options: Any) -> None:
        """Run the MCP server with the provided streams."""
        logger.info("Starting MCP server main loop")

        try:
            await self._server.run(read_stream, write_stream, initialization_options)
        except Exception as e:
            logger.error("Error in MCP server main loop: %s", e, exc_info=True)
            raise
        finally:
            logger.info("MCP server main loop ended")
            self.cleanup()

    def create_initialization_options(self) -> Any:
        """Create initialization options for the MCP server."""
        return self._server.create_initialization_options()

    def cleanup(self) -> None:
        """Cleanup resources on shutdown."""
        try:
            if getattr(self, "_service_executor", None) is not None:
                self._service_executor.close()
                self._service_executor = None

            if getattr(self, "_orm_manager", None) is not None:
                self._orm_manager.close()
                self._orm_manager = None

            logger.info("Cleanup complete")
        except Exception as e:
            logger.error("Error during cleanup: %s", e, exc_info=True)


async def run_server() -> None:
    """Run the MCP server with stdio transport."""
    from mcp.server.stdio import stdio_server

    server = TaskTrackerMCPServer()

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Entry point for the MCP server."""
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error("Server error: %s", e, exc_info=True)
        raise


if __name__ == "__main__":
    main()
