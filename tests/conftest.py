"""Pytest configuration and fixtures."""

import contextlib
import os
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest

from task_tracker_mcp.config import DB_PATH_ENV, USER_EMAIL_ENV, USER_ID_ENV, USER_ROLES_ENV
from task_tracker_mcp.database.orm_manager import ORMManager, reset_orm_manager
from task_tracker_mcp.domain.entities.request_context import CurrentUser, RequestContext
from task_tracker_mcp.services.service_factory import (
    ServiceFactory,
    TaskHandlers,
    reset_service_factory,
)

OWNER_ID = "user-a"
OTHER_ID = "user-b"
ADMIN_ID = "admin-1"


@pytest.fixture(scope="function", autouse=True)
def reset_singletons(monkeypatch):
    """Reset singletons and set up test database before each test."""
    # Create a unique temp database for this test
    tmpdir = tempfile.mkdtemp()
    db_path = os.path.join(tmpdir, "test.db")

    # Set env vars BEFORE resetting singletons; identity is opt-in per test
    monkeypatch.setenv(DB_PATH_ENV, db_path)
    for name in (USER_ID_ENV, USER_ROLES_ENV, USER_EMAIL_ENV):
        monkeypatch.delenv(name, raising=False)

    # Now reset singletons - they will pick up the test database path
    reset_orm_manager()
    reset_service_factory()

    yield

    # Cleanup after test
    reset_orm_manager()
    reset_service_factory()

    # Clean up temp directory
    with contextlib.suppress(Exception):
        shutil.rmtree(tmpdir)


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """Get the test database path."""
    # Return the path set by reset_singletons fixture
    yield os.environ[DB_PATH_ENV]


@pytest.fixture
def orm_manager(temp_db_path: str) -> Generator[ORMManager, None, None]:
    """Create an ORM manager with a temporary database."""
    manager = ORMManager(temp_db_path)
    yield manager
    manager.close()


@pytest.fixture
def service_factory(orm_manager: ORMManager) -> ServiceFactory:
    """Create a service factory bound to the test database."""
    return ServiceFactory(orm_manager)


@pytest.fixture
def handlers(service_factory: ServiceFactory) -> TaskHandlers:
    """Create every task handler."""
    return service_factory.get_task_handlers()


@pytest.fixture
def owner() -> RequestContext:
    """Context of a regular user who owns the tasks under test."""
    return RequestContext(user=CurrentUser.create(OWNER_ID, roles=["User"]))


@pytest.fixture
def other_user() -> RequestContext:
    """Context of a second regular user."""
    return RequestContext(user=CurrentUser.create(OTHER_ID, roles=["User"]))


@pytest.fixture
def admin() -> RequestContext:
    """Context of an Admin."""
    return RequestContext(user=CurrentUser.create(ADMIN_ID, roles=["User", "Admin"]))


@pytest.fixture
def future_date() -> datetime:
    """A due date safely in the future."""
    return datetime.now(timezone.utc) + timedelta(days=7)
