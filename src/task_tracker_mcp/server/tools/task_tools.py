"""Task MCP tool definitions."""

from typing import List

from mcp.types import Tool

PRIORITY_VALUES = ["low", "medium", "high"]
STATUS_VALUES = ["pending", "in-progress", "completed"]


def get_task_tools() -> List[Tool]:
    """Get task management MCP tools."""
    return [
        Tool(
            name="task_create",
            description="""Create a new task owned by the current user.

Parameters:
- title (required): Task title, at most 200 characters
- description (optional): Task description, at most 2000 characters
- due_date (optional): ISO 8601 timestamp in the future
- priority (optional): "low", "medium" (default) or "high"

Returns: Created task with ID.

RESPONSE FORMAT:
```yaml
success: true
data:
  id: <task-id>           # use for task_show, task_update, task_delete
  title: Task title
  status: pending
  priority: medium
  owner_id: <user-id>
```""",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Task title"},
                    "description": {"type": "string", "description": "Task description"},
                    "due_date": {
                        "type": "string",
                        "format": "date-time",
                        "description": "Deadline (ISO 8601)",
                    },
                    "priority": {
                        "type": "string",
                        "enum": PRIORITY_VALUES,
                        "description": "Task priority",
                    },
                },
                "required": ["title"],
            },
        ),
        Tool(
            name="task_list",
            description="""List your own tasks, newest first, one page at a time.

Deleted tasks are never listed. Admins also see only their own tasks here;
use task_show to inspect another user's task by ID.

Parameters:
- page (optional): Page number, starting at 1 (default 1)
- page_size (optional): Tasks per page, 1-100 (default 20)
- status (optional): Filter by status
- priority (optional): Filter by priority

Returns: items plus page, page_size, total_count, total_pages.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "page": {"type": "integer", "minimum": 1, "description": "Page number"},
                    "page_size": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 100,
                        "description": "Tasks per page",
                    },
                    "status": {
                        "type": "string",
                        "enum": STATUS_VALUES,
                        "description": "Filter by status",
                    },
                    "priority": {
                        "type": "string",
                        "enum": PRIORITY_VALUES,
                        "description": "Filter by priority",
                    },
                },
            },
        ),
        Tool(
            name="task_show",
            description="""Show one task by ID.

Owners can view their tasks; Admins can view any task.

Parameters:
- task_id (required): Task ID""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_update",
            description="""Update fields of a task. Omitted fields are left unchanged.

Parameters:
- task_id (required): Task ID
- title (optional): New title, must not be empty
- description (optional): New description, empty string clears it
- due_date (optional): New deadline (ISO 8601, in the future)
- clear_due_date (optional): Remove the deadline
- priority (optional): "low", "medium" or "high"
- status (optional): "pending", "in-progress" or "completed"

Returns: Updated task.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                    "title": {"type": "string", "description": "New title"},
                    "description": {"type": "string", "description": "New description"},
                    "due_date": {
                        "type": "string",
                        "format": "date-time",
                        "description": "New deadline (ISO 8601)",
                    },
                    "clear_due_date": {
                        "type": "boolean",
                        "description": "Remove the deadline",
                    },
                    "priority": {
                        "type": "string",
                        "enum": PRIORITY_VALUES,
                        "description": "New priority",
                    },
                    "status": {
                        "type": "string",
                        "enum": STATUS_VALUES,
                        "description": "New status",
                    },
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_complete",
            description="""Mark a task as completed.

Parameters:
- task_id (required): Task ID""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_delete",
            description="""Delete a task. Deleted tasks disappear from task_list and task_show
and cannot be restored.

Parameters:
- task_id (required): Task ID""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
    ]
