"""Task Tracker MCP - per-user task tracking.

Create, update, soft-delete and page through tasks via MCP or the CLI.
"""

try:
    from task_tracker_mcp._version import __version__
except ImportError:
    __version__ = "0.1.0.dev0"

__all__ = ["__version__"]
