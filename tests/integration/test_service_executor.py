"""Integration tests for ServiceExecutor."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import yaml

from task_tracker_mcp.config import USER_ID_ENV, USER_ROLES_ENV
from task_tracker_mcp.domain.entities.request_context import CurrentUser
from task_tracker_mcp.server.service_executor import ServiceExecutor


def _executor(user_id, roles=("User",)):
    return ServiceExecutor(user=CurrentUser.create(user_id, roles=roles))


@pytest.fixture
def service_executor():
    """Create a service executor acting as user A."""
    executor = _executor("user-a")
    yield executor
    executor.close()


@pytest.fixture
def other_executor():
    """Create a service executor acting as user B."""
    executor = _executor("user-b")
    yield executor
    executor.close()


@pytest.fixture
def admin_executor():
    """Create a service executor acting as an Admin."""
    executor = _executor("admin-1", roles=("User", "Admin"))
    yield executor
    executor.close()


async def _call(executor, tool, arguments=None):
    result = await executor.execute_tool(tool, arguments or {})
    return yaml.safe_load(result)


class TestTaskTools:
    """Test task tool execution via ServiceExecutor."""

    @pytest.mark.asyncio
    async def test_task_create(self, service_executor):
        """Test creating a task via executor."""
        due = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()

        data = await _call(
            service_executor,
            "task_create",
            {"title": "Buy milk", "priority": "high", "due_date": due},
        )

        assert data["success"] is True
        assert data["data"]["title"] == "Buy milk"
        assert data["data"]["priority"] == "high"
        assert data["data"]["status"] == "pending"
        assert data["data"]["owner_id"] == "user-a"
        assert "id" in data["data"]

    @pytest.mark.asyncio
    async def test_task_create_validation_error(self, service_executor):
        data = await _call(service_executor, "task_create", {"title": ""})

        assert data["success"] is False
        assert data["error_type"] == "validation_error"
        assert data["error"] == "Title is required"

    @pytest.mark.asyncio
    async def test_bad_priority_argument(self, service_executor):
        data = await _call(service_executor, "task_create", {"title": "T", "priority": "urgent"})

        assert data["success"] is False
        assert data["error_type"] == "validation_error"
        assert "priority" in data["error"]

    @pytest.mark.asyncio
    async def test_bad_due_date_argument(self, service_executor):
        data = await _call(service_executor, "task_create", {"title": "T", "due_date": "soon"})

        assert data["error_type"] == "validation_error"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, service_executor):
        data = await _call(service_executor, "task_archive")

        assert data["success"] is False
        assert "Unknown tool" in data["error"]

    @pytest.mark.asyncio
    async def test_task_list_paging_metadata(self, service_executor):
        for i in range(3):
            await _call(service_executor, "task_create", {"title": f"Task {i}"})

        data = await _call(service_executor, "task_list", {"page": 1, "page_size": 2})

        page = data["data"]
        assert [item["title"] for item in page["items"]] == ["Task 2", "Task 1"]
        assert page["total_count"] == 3
        assert page["total_pages"] == 2
        assert page["has_next_page"] is True

    @pytest.mark.asyncio
    async def test_task_update_and_complete(self, service_executor):
        created = await _call(service_executor, "task_create", {"title": "Write report"})
        task_id = created["data"]["id"]

        updated = await _call(
            service_executor,
            "task_update",
            {"task_id": task_id, "status": "in-progress", "description": "Q3 numbers"},
        )
        completed = await _call(service_executor, "task_complete", {"task_id": task_id})

        assert updated["data"]["status"] == "in-progress"
        assert updated["data"]["description"] == "Q3 numbers"
        assert completed["data"]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_clear_due_date_requires_boolean(self, service_executor):
        due = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
        created = await _call(service_executor, "task_create", {"title": "T", "due_date": due})
        task_id = created["data"]["id"]

        rejected = await _call(
            service_executor, "task_update", {"task_id": task_id, "clear_due_date": "false"}
        )
        shown = await _call(service_executor, "task_show", {"task_id": task_id})
        cleared = await _call(
            service_executor, "task_update", {"task_id": task_id, "clear_due_date": True}
        )

        assert rejected["success"] is False
        assert rejected["error_type"] == "validation_error"
        assert shown["data"]["due_date"] is not None
        assert cleared["data"]["due_date"] is None

    @pytest.mark.asyncio
    async def test_offset_due_date_round_trip(self, service_executor):
        created = await _call(
            service_executor,
            "task_create",
            {"title": "T", "due_date": "2031-01-01T10:00:00+05:00"},
        )
        shown = await _call(service_executor, "task_show", {"task_id": created["data"]["id"]})

        assert created["data"]["due_date"] == "2031-01-01T05:00:00+00:00"
        assert shown["data"]["due_date"] == created["data"]["due_date"]


class TestOwnershipWorkflow:
    """End-to-end ownership and soft-delete behavior."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, service_executor, other_executor, admin_executor):
        created = await _call(
            service_executor, "task_create", {"title": "Buy milk", "priority": "high"}
        )
        task_id = created["data"]["id"]

        own_list = await _call(service_executor, "task_list")
        assert [item["id"] for item in own_list["data"]["items"]] == [task_id]

        other_list = await _call(other_executor, "task_list")
        assert other_list["data"]["items"] == []

        other_show = await _call(other_executor, "task_show", {"task_id": task_id})
        assert other_show["error_type"] == "forbidden"

        other_delete = await _call(other_executor, "task_delete", {"task_id": task_id})
        assert other_delete["error_type"] == "forbidden"

        admin_show = await _call(admin_executor, "task_show", {"task_id": task_id})
        assert admin_show["data"]["owner_id"] == "user-a"

        admin_list = await _call(admin_executor, "task_list")
        assert admin_list["data"]["total_count"] == 0

        deleted = await _call(service_executor, "task_delete", {"task_id": task_id})
        assert deleted["success"] is True
        assert deleted["data"]["task_id"] == task_id

        after_show = await _call(service_executor, "task_show", {"task_id": task_id})
        assert after_show["error_type"] == "not_found"

        again = await _call(service_executor, "task_delete", {"task_id": task_id})
        assert again["error_type"] == "not_found"

        final_list = await _call(service_executor, "task_list")
        assert final_list["data"]["total_count"] == 0


class TestIdentity:
    """Caller identity comes from configuration only."""

    @pytest.mark.asyncio
    async def test_no_user_configured(self):
        executor = ServiceExecutor()
        try:
            data = await _call(executor, "task_list")
        finally:
            executor.close()

        assert data["success"] is False
        assert data["error_type"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_user_from_environment(self, monkeypatch):
        monkeypatch.setenv(USER_ID_ENV, "env-user")
        monkeypatch.setenv(USER_ROLES_ENV, "User")
        executor = ServiceExecutor()
        try:
            data = await _call(executor, "task_create", {"title": "From env"})
        finally:
            executor.close()

        assert data["data"]["owner_id"] == "env-user"

    @pytest.mark.asyncio
    async def test_owner_argument_is_ignored(self, service_executor):
        data = await _call(
            service_executor, "task_create", {"title": "Sneaky", "owner_id": "user-b"}
        )

        assert data["data"]["owner_id"] == "user-a"


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_parallel_creates(self, service_executor):
        results = await asyncio.gather(
            *(_call(service_executor, "task_create", {"title": f"T{i}"}) for i in range(8))
        )

        assert all(r["success"] for r in results)
        listing = await _call(service_executor, "task_list", {"page_size": 100})
        assert listing["data"]["total_count"] == 8
