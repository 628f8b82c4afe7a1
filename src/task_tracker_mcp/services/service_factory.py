"""
Service Factory - Dependency injection for handlers.

Provides a centralized factory for creating command and query handlers that
share one ORM manager. Handlers are stateless and cached; each request they
serve opens its own repository.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from task_tracker_mcp.database.orm_manager import ORMManager, get_orm_manager
from task_tracker_mcp.database.repositories import TaskRepository
from task_tracker_mcp.services.task_commands import (
    CompleteTaskHandler,
    CreateTaskHandler,
    DeleteTaskHandler,
    UpdateTaskHandler,
)
from task_tracker_mcp.services.task_queries import GetTaskByIdHandler, GetTasksHandler

# Module-level singleton
_global_factory: Optional["ServiceFactory"] = None
_global_lock = threading.Lock()


def get_service_factory(orm_manager: Optional[ORMManager] = None) -> "ServiceFactory":
    """
    Get the singleton service factory instance.

    Args:
        orm_manager: Optional ORM manager instance. Uses singleton if not provided.

    Returns:
        ServiceFactory singleton instance.
    """
    global _global_factory

    with _global_lock:
        if _global_factory is None:
            _global_factory = ServiceFactory(orm_manager)
        return _global_factory


def reset_service_factory() -> None:
    """Reset the global service factory (for testing)."""
    global _global_factory

    with _global_lock:
        _global_factory = None


@dataclass(frozen=True)
class TaskHandlers:
    """Every task command and query handler."""

    create: CreateTaskHandler
    update: UpdateTaskHandler
    complete: CompleteTaskHandler
    delete: DeleteTaskHandler
    get_by_id: GetTaskByIdHandler
    get_list: GetTasksHandler


class ServiceFactory:
    """
    Factory for creating handler instances with dependency injection.

    All handlers receive a repository factory bound to the same ORM manager.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize the service factory.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self._orm_manager = orm_manager or get_orm_manager()
        self._lock = threading.RLock()
        self._task_handlers: Optional[TaskHandlers] = None

    @property
    def orm_manager(self) -> ORMManager:
        """Get the ORM manager."""
        return self._orm_manager

    def create_task_repository(self) -> TaskRepository:
        """Open a new task repository (one unit of work)."""
        return TaskRepository(self._orm_manager)

    def get_task_handlers(self) -> TaskHandlers:
        """Get or create the task handlers."""
        with self._lock:
            if self._task_handlers is None:
                factory = self.create_task_repository
                self._task_handlers = TaskHandlers(
                    create=CreateTaskHandler(factory),
                    update=UpdateTaskHandler(factory),
                    complete=CompleteTaskHandler(factory),
                    delete=DeleteTaskHandler(factory),
                    get_by_id=GetTaskByIdHandler(factory),
                    get_list=GetTasksHandler(factory),
                )
            return self._task_handlers
