"""
Handler Pipeline - Shared request handling around every command and query.

Wraps each handler with timing logs, request validation, cancellation and the
translation of domain exceptions into failed results, so concrete handlers
only contain their own business steps.
"""

from __future__ import annotations

import abc
import logging
import time
from contextlib import closing
from typing import Callable, ClassVar, Generic, List, Optional, TypeVar

from task_tracker_mcp.domain.entities.enums import UserRole
from task_tracker_mcp.domain.entities.request_context import CurrentUser, RequestContext
from task_tracker_mcp.domain.entities.result_types import DomainError, DomainResult
from task_tracker_mcp.domain.entities.task import Task
from task_tracker_mcp.domain.exceptions import (
    RequestCancelledError,
    TaskDeletedError,
    TaskValidationError,
)
from task_tracker_mcp.domain.interfaces.task_repository import ITaskRepository

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")

RepositoryFactory = Callable[[], ITaskRepository]

SLOW_REQUEST_THRESHOLD_MS = 500


def can_access(task: Task, user: CurrentUser) -> bool:
    """Owner-or-Admin rule used by every single-task operation."""
    return task.is_owned_by(user.id) or user.has_role(UserRole.ADMIN.value)


class RequestHandler(abc.ABC, Generic[RequestT, ResponseT]):
    """
    Base class for command and query handlers.

    Subclasses set ``operation`` and ``validator`` and implement ``_handle``.
    A fresh repository (one unit of work) is opened for every request and
    closed afterwards.
    """

    operation: ClassVar[str] = "request"
    validator: ClassVar[Optional[Callable[..., List[str]]]] = None

    def __init__(self, repository_factory: RepositoryFactory):
        self._repository_factory = repository_factory

    def handle(self, request: RequestT, context: RequestContext) -> DomainResult[ResponseT]:
        """Run the request through the pipeline and return its result."""
        request_name = type(request).__name__
        logger.info("Handling %s for user %s", request_name, context.user.id)
        started = time.perf_counter()
        try:
            return self._run(request, context)
        finally:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info("Handled %s in %dms", request_name, elapsed_ms)
            if elapsed_ms > SLOW_REQUEST_THRESHOLD_MS:
                logger.warning(
                    "%s took %dms (> %dms threshold)",
                    request_name,
                    elapsed_ms,
                    SLOW_REQUEST_THRESHOLD_MS,
                )

    def _run(self, request: RequestT, context: RequestContext) -> DomainResult[ResponseT]:
        validator = type(self).validator
        if validator is not None:
            errors = validator(request)
            if errors:
                return DomainError.validation_error(". ".join(errors), {"errors": errors})

        try:
            context.cancellation.raise_if_cancelled()
            with closing(self._repository_factory()) as repository:
                return self._handle(request, context, repository)
        except RequestCancelledError:
            logger.info("%s cancelled before completion", self.operation)
            return DomainError.cancelled(self.operation)
        except TaskValidationError as e:
            return DomainError.validation_error(str(e))
        except TaskDeletedError:
            return DomainError.not_found("Task")

    @abc.abstractmethod
    def _handle(
        self,
        request: RequestT,
        context: RequestContext,
        repository: ITaskRepository,
    ) -> DomainResult[ResponseT]:
        """Business steps of one request, run inside an open unit of work."""
