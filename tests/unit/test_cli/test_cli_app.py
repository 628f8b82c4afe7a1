"""Tests for the tracker CLI."""

import json

import pytest
from typer.testing import CliRunner

from task_tracker_mcp.cli.app import create_app
from task_tracker_mcp.config import USER_ID_ENV

runner = CliRunner()


@pytest.fixture
def cli_user(monkeypatch):
    monkeypatch.setenv(USER_ID_ENV, "cli-user")


def _create(title, *extra):
    result = runner.invoke(create_app(), ["task", "create", title, *extra])
    assert result.exit_code == 0, result.output
    return result


def _list_json(*extra):
    result = runner.invoke(create_app(), ["task", "list", "--format", "json", *extra])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestTaskCommands:
    def test_create_and_list(self, cli_user):
        result = _create("Buy milk", "--priority", "high")

        assert "Task created" in result.output
        data = _list_json()
        assert data["success"] is True
        assert [item["title"] for item in data["data"]["items"]] == ["Buy milk"]
        assert data["data"]["items"][0]["priority"] == "high"

    def test_list_text(self, cli_user):
        _create("Water plants")

        result = runner.invoke(create_app(), ["task", "list"])

        assert result.exit_code == 0
        assert "Water plants" in result.output

    def test_update_complete_delete(self, cli_user):
        _create("Write report")
        task_id = _list_json()["data"]["items"][0]["id"]

        updated = runner.invoke(
            create_app(), ["task", "update", task_id, "--status", "in-progress"]
        )
        completed = runner.invoke(create_app(), ["task", "complete", task_id])
        deleted = runner.invoke(create_app(), ["task", "delete", task_id, "--yes"])
        shown = runner.invoke(create_app(), ["task", "show", task_id])

        assert updated.exit_code == 0
        assert completed.exit_code == 0
        assert deleted.exit_code == 0
        assert shown.exit_code == 1
        assert "Task not found" in shown.output

    def test_status_filter(self, cli_user):
        _create("Open")
        _create("Closed")
        closed_id = _list_json()["data"]["items"][0]["id"]
        runner.invoke(create_app(), ["task", "complete", closed_id])

        data = _list_json("--status", "completed")

        assert [item["title"] for item in data["data"]["items"]] == ["Closed"]

    def test_update_without_changes(self, cli_user):
        result = runner.invoke(create_app(), ["task", "update", "some-id"])

        assert result.exit_code == 0
        assert "No updates specified" in result.output

    def test_validation_error(self, cli_user):
        result = runner.invoke(create_app(), ["task", "create", "  "])

        assert result.exit_code == 1
        assert "Title is required" in result.output

    def test_requires_identity(self):
        result = runner.invoke(create_app(), ["task", "list"])

        assert result.exit_code == 1
        assert "TASK_TRACKER_USER_ID" in result.output


class TestDbCommands:
    def test_health(self):
        result = runner.invoke(create_app(), ["db", "health"])

        assert result.exit_code == 0
        assert "Healthy" in result.output
        assert "tasks" in result.output
        assert "Live tasks: 0" in result.output
