"""
Domain Result Types - Pure Business Logic Results.

These types represent the outcome of domain operations without any
infrastructure or presentation concerns. Handlers return them instead of
raising for expected business failures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


class DomainErrorType(Enum):
    """Types of domain errors."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    CANCELLED = "cancelled"
    OPERATION_FAILED = "operation_failed"


T = TypeVar("T")


@dataclass
class DomainResult(Generic[T]):
    """
    Base result type for domain operations.

    Represents either success with data or failure with a reason. A failure
    always carries a human-readable ``error_message`` and an ``error_type``.
    """

    success: bool
    data: Optional[T] = None
    error_type: Optional[DomainErrorType] = None
    error_message: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.success and self.error_message:
            raise ValueError("Success result cannot have an error message")
        if not self.success and not self.error_message:
            raise ValueError("Failure result must have an error message")

    @property
    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    @property
    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success

    @property
    def value(self) -> T:
        """Value of a successful result. Raises on a failure."""
        return self.get_data_or_raise()

    @property
    def reason(self) -> str:
        """Reason of a failed result. Raises on a success."""
        if self.is_success:
            raise ValueError("Cannot get failure reason from successful result")
        return self.error_message  # type: ignore

    def get_data_or_raise(self) -> T:
        """Get data or raise exception if failed."""
        if self.is_failure:
            raise ValueError(f"Cannot get data from failed result: {self.error_message}")
        return self.data  # type: ignore

    def get_data_or_default(self, default: T) -> T:
        """Get data or return default if failed."""
        return self.data if self.is_success and self.data is not None else default


@dataclass
class DomainSuccess(Generic[T]):
    """
    Factory for creating successful domain results.

    Usage:
        result = DomainSuccess.create(data=task_dto)
    """

    @staticmethod
    def create(data: Optional[T] = None) -> DomainResult[T]:
        """Create a successful domain result."""
        return DomainResult(success=True, data=data)


@dataclass
class DomainError:
    """
    Factory for creating failed domain results.

    Usage:
        result = DomainError.validation_error("Title is required")
    """

    @staticmethod
    def create(
        error_type: DomainErrorType,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> DomainResult[Any]:
        """Create a failed domain result."""
        return DomainResult(
            success=False,
            error_type=error_type,
            error_message=message,
            error_details=details or {},
        )

    @staticmethod
    def validation_error(
        message: str, details: Optional[Dict[str, Any]] = None
    ) -> DomainResult[Any]:
        """Create a validation error result."""
        return DomainError.create(DomainErrorType.VALIDATION_ERROR, message, details)

    @staticmethod
    def not_found(resource: str, resource_id: Optional[str] = None) -> DomainResult[Any]:
        """Create a not found error result."""
        details = {"resource": resource}
        if resource_id is not None:
            details["id"] = resource_id
        return DomainError.create(DomainErrorType.NOT_FOUND, f"{resource} not found", details)

    @staticmethod
    def forbidden(resource: str, action: str) -> DomainResult[Any]:
        """Create a permission denied error result."""
        return DomainError.create(
            DomainErrorType.FORBIDDEN,
            f"You don't have permission to {action} this {resource.lower()}",
            {"resource": resource, "action": action},
        )

    @staticmethod
    def conflict(message: str, details: Optional[Dict[str, Any]] = None) -> DomainResult[Any]:
        """Create a concurrent modification error result."""
        return DomainError.create(DomainErrorType.CONFLICT, message, details)

    @staticmethod
    def cancelled(operation: str) -> DomainResult[Any]:
        """Create a cancelled request result."""
        return DomainError.create(
            DomainErrorType.CANCELLED,
            f"Operation '{operation}' was cancelled",
            {"operation": operation},
        )

    @staticmethod
    def operation_failed(
        operation: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> DomainResult[Any]:
        """Create an operation failed error result."""
        return DomainError.create(
            DomainErrorType.OPERATION_FAILED,
            f"Operation '{operation}' failed: {reason}",
            {**(details or {}), "operation": operation},
        )
