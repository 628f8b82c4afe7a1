"""Tests for domain result types."""

import pytest

from task_tracker_mcp.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
)


class TestDomainResult:
    """Tests for DomainResult."""

    def test_success_result(self):
        """Test creating a success result."""
        result = DomainSuccess.create(data={"id": "123"})

        assert result.success is True
        assert result.is_success is True
        assert result.is_failure is False
        assert result.data == {"id": "123"}
        assert result.value == {"id": "123"}
        assert result.error_message is None

    def test_success_without_data(self):
        """A success may carry no value."""
        result = DomainSuccess.create()

        assert result.is_success
        assert result.value is None

    def test_error_result(self):
        """Test creating an error result."""
        result = DomainError.validation_error("Invalid input")

        assert result.success is False
        assert result.is_success is False
        assert result.is_failure is True
        assert result.error_message == "Invalid input"
        assert result.reason == "Invalid input"
        assert result.error_type == DomainErrorType.VALIDATION_ERROR

    def test_not_found_error(self):
        """Test creating a not found error."""
        result = DomainError.not_found("Task", "abc123")

        assert result.is_failure is True
        assert result.error_type == DomainErrorType.NOT_FOUND
        assert result.reason == "Task not found"
        assert result.error_details == {"resource": "Task", "id": "abc123"}

    def test_forbidden_error(self):
        """Test creating a permission error."""
        result = DomainError.forbidden("Task", "update")

        assert result.error_type == DomainErrorType.FORBIDDEN
        assert result.reason == "You don't have permission to update this task"

    def test_conflict_error(self):
        """Test creating a concurrency conflict error."""
        result = DomainError.conflict("Task was modified")

        assert result.error_type == DomainErrorType.CONFLICT
        assert result.reason == "Task was modified"

    def test_cancelled_error(self):
        """Test creating a cancellation error."""
        result = DomainError.cancelled("create_task")

        assert result.error_type == DomainErrorType.CANCELLED
        assert "create_task" in result.reason

    def test_operation_failed_error(self):
        """Test creating an operation failed error."""
        result = DomainError.operation_failed("commit", "disk full", {"attempt": 1})

        assert result.error_type == DomainErrorType.OPERATION_FAILED
        assert result.reason == "Operation 'commit' failed: disk full"
        assert result.error_details == {"attempt": 1, "operation": "commit"}

    def test_get_data_or_raise_success(self):
        """Test get_data_or_raise with success."""
        result = DomainSuccess.create(data={"value": 42})
        data = result.get_data_or_raise()
        assert data == {"value": 42}

    def test_get_data_or_raise_failure(self):
        """Test get_data_or_raise with failure."""
        result = DomainError.validation_error("Error")

        with pytest.raises(ValueError):
            result.get_data_or_raise()

    def test_value_of_failure_raises(self):
        """Reading the value of a failure is a programming error."""
        with pytest.raises(ValueError):
            _ = DomainError.not_found("Task").value

    def test_reason_of_success_raises(self):
        """Reading the reason of a success is a programming error."""
        with pytest.raises(ValueError):
            _ = DomainSuccess.create(data=1).reason

    def test_get_data_or_default(self):
        """Test get_data_or_default with success and failure."""
        assert DomainSuccess.create(data=5).get_data_or_default(0) == 5
        assert DomainError.validation_error("bad").get_data_or_default(0) == 0

    def test_failure_requires_message(self):
        """A failure without a reason cannot be built."""
        with pytest.raises(ValueError):
            DomainResult(success=False, error_type=DomainErrorType.NOT_FOUND)

    def test_success_rejects_message(self):
        """A success cannot carry a failure reason."""
        with pytest.raises(ValueError):
            DomainResult(success=True, error_message="nope")
