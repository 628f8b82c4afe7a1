"""Tests for MCP tool definitions."""

from task_tracker_mcp.server.service_executor import ServiceExecutor
from task_tracker_mcp.server.tools import get_all_tools


class TestToolDefinitions:
    def test_tool_names(self):
        names = sorted(tool.name for tool in get_all_tools())

        assert names == [
            "task_complete",
            "task_create",
            "task_delete",
            "task_list",
            "task_show",
            "task_update",
        ]

    def test_every_tool_has_an_executor_handler(self):
        executor = ServiceExecutor()
        try:
            assert executor.tool_names == sorted(tool.name for tool in get_all_tools())
        finally:
            executor.close()

    def test_no_tool_accepts_an_owner(self):
        for tool in get_all_tools():
            assert "owner_id" not in tool.inputSchema.get("properties", {})

    def test_required_arguments(self):
        tools = {tool.name: tool for tool in get_all_tools()}

        assert tools["task_create"].inputSchema["required"] == ["title"]
        for name in ("task_show", "task_update", "task_delete", "task_complete"):
            assert tools[name].inputSchema["required"] == ["task_id"]
