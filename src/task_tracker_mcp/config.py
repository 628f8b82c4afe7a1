"""
Runtime configuration.

All settings come from environment variables so that the MCP server and the
CLI pick up the same database and identity.
"""

import os
from pathlib import Path
from typing import Optional

from task_tracker_mcp.domain.entities.request_context import CurrentUser

DB_PATH_ENV = "TASK_TRACKER_DB_PATH"
USER_ID_ENV = "TASK_TRACKER_USER_ID"
USER_ROLES_ENV = "TASK_TRACKER_USER_ROLES"
USER_EMAIL_ENV = "TASK_TRACKER_USER_EMAIL"
DEBUG_ENV = "TASK_TRACKER_DEBUG"

DEFAULT_USER_ROLES = "User"


def get_default_db_path() -> str:
    """Get the default database path.

    Checks TASK_TRACKER_DB_PATH first, then falls back to
    ~/.task-tracker/database.db, creating the directory if needed.
    """
    env_db_path = os.environ.get(DB_PATH_ENV)
    if env_db_path:
        db_path = Path(env_db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return str(db_path)

    tracker_dir = Path.home() / ".task-tracker"
    tracker_dir.mkdir(parents=True, exist_ok=True)
    return str(tracker_dir / "database.db")


def get_configured_user() -> Optional[CurrentUser]:
    """Build the caller identity from the environment.

    Returns:
        CurrentUser, or None when TASK_TRACKER_USER_ID is unset.
    """
    user_id = os.environ.get(USER_ID_ENV, "").strip()
    if not user_id:
        return None

    roles = os.environ.get(USER_ROLES_ENV, DEFAULT_USER_ROLES).split(",")
    email = os.environ.get(USER_EMAIL_ENV) or None
    return CurrentUser.create(user_id, roles=roles, email=email)


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes")
