"""Tests for request context, cancellation and identity configuration."""

import pytest

from task_tracker_mcp.config import (
    USER_EMAIL_ENV,
    USER_ID_ENV,
    USER_ROLES_ENV,
    get_configured_user,
    get_default_db_path,
)
from task_tracker_mcp.domain.entities.email import Email
from task_tracker_mcp.domain.entities.request_context import (
    CancellationToken,
    CurrentUser,
    raise_if_cancelled,
)
from task_tracker_mcp.domain.exceptions import RequestCancelledError


class TestCurrentUser:
    def test_roles(self):
        user = CurrentUser.create("u1", roles=[" Admin ", "User", ""])

        assert user.roles == frozenset({"Admin", "User"})
        assert user.has_role("Admin")
        assert user.is_admin

    def test_regular_user(self):
        user = CurrentUser.create("u1", roles=["User"])

        assert not user.is_admin
        assert user.email is None

    def test_email_is_normalized(self):
        user = CurrentUser.create("u1", email="A@Example.com")

        assert user.email == Email.create("a@example.com")


class TestCancellationToken:
    def test_not_cancelled_by_default(self):
        token = CancellationToken()

        assert not token.is_cancelled
        token.raise_if_cancelled()

    def test_cancel(self):
        token = CancellationToken()
        token.cancel()

        assert token.is_cancelled
        with pytest.raises(RequestCancelledError):
            token.raise_if_cancelled()

    def test_free_function_accepts_none(self):
        raise_if_cancelled(None)


class TestConfiguredUser:
    def test_unset(self):
        assert get_configured_user() is None

    def test_defaults_to_user_role(self, monkeypatch):
        monkeypatch.setenv(USER_ID_ENV, "alice")

        user = get_configured_user()

        assert user.id == "alice"
        assert user.roles == frozenset({"User"})

    def test_roles_and_email(self, monkeypatch):
        monkeypatch.setenv(USER_ID_ENV, "root")
        monkeypatch.setenv(USER_ROLES_ENV, "User,Admin")
        monkeypatch.setenv(USER_EMAIL_ENV, "Root@Example.com")

        user = get_configured_user()

        assert user.is_admin
        assert str(user.email) == "root@example.com"

    def test_db_path_from_env(self, temp_db_path):
        assert get_default_db_path() == temp_db_path
