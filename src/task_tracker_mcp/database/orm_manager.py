"""
ORM Manager - Engine and session ownership for the task database.

One process-wide manager owns the SQLite engine. Repositories borrow sessions
from it: a long-lived one per unit of work (``create_session``) or a scoped
one that commits on exit (``get_session``).
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional, Tuple

from sqlalchemy import create_engine, event, func, inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from task_tracker_mcp.config import get_default_db_path
from task_tracker_mcp.database.models.base import Base
from task_tracker_mcp.database.models.task import TaskRecord

logger = logging.getLogger(__name__)

# Applied to every new DBAPI connection
SQLITE_PRAGMAS: Tuple[Tuple[str, str], ...] = (
    ("journal_mode", "WAL"),
    ("synchronous", "NORMAL"),
    ("cache_size", "-64000"),  # 64MB
    ("temp_store", "MEMORY"),
    ("busy_timeout", "5000"),
)

# Module-level singleton
_global_orm_manager: Optional["ORMManager"] = None
_global_lock = threading.Lock()


def get_orm_manager(db_path: Optional[str] = None) -> "ORMManager":
    """
    Get the singleton ORM manager instance.

    Args:
        db_path: Optional database path. Uses the configured path if not provided.

    Returns:
        ORMManager singleton instance.
    """
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is None:
            _global_orm_manager = ORMManager(db_path)
        return _global_orm_manager


def reset_orm_manager() -> None:
    """Dispose of the global ORM manager (for testing)."""
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is not None:
            _global_orm_manager.close()
            _global_orm_manager = None


def _apply_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        for name, value in SQLITE_PRAGMAS:
            cursor.execute(f"PRAGMA {name}={value}")
    finally:
        cursor.close()


class ORMManager:
    """
    Owns the SQLAlchemy engine and session factory for one SQLite file.

    The schema is created on construction, so a fresh path is usable at once.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the ORM manager.

        Args:
            db_path: Path to SQLite database file. Uses the configured path if not provided.
        """
        self.db_path = db_path or get_default_db_path()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

        self._initialize()

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    def _initialize(self) -> None:
        """Create the engine, the session factory and the schema."""
        self._engine = create_engine(
            self.database_url,
            echo=False,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False},
        )
        event.listen(self._engine, "connect", _apply_sqlite_pragmas)

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=True,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self._engine)
        logger.debug("Database ready at %s", self.db_path)

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("ORM Manager not initialized")
        return self._engine

    def _require_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("ORM Manager not initialized")
        return self._session_factory

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Scoped session that commits on success and rolls back on error.

        Usage:
            with orm_manager.get_session() as session:
                session.execute(...)
        """
        session = self._require_factory()()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_session(self) -> Session:
        """
        Open a session the caller commits and closes.

        Repositories hold one of these for a whole unit of work.
        """
        return self._require_factory()()

    def perform_health_check(self) -> Dict[str, Any]:
        """
        Check connectivity and report the schema and row counts.

        Returns:
            Dictionary with ``healthy`` plus either details or ``error``.
        """
        try:
            with self.get_session() as session:
                if session.execute(text("SELECT 1")).scalar() != 1:
                    return {"healthy": False, "error": "Basic query failed"}
                live_tasks = session.execute(
                    select(func.count())
                    .select_from(TaskRecord)
                    .where(TaskRecord.is_deleted.is_(False))
                ).scalar_one()

            table_names = inspect(self.engine).get_table_names()
            return {
                "healthy": True,
                "database_path": self.db_path,
                "tables": table_names,
                "table_count": len(table_names),
                "live_task_count": live_tasks,
            }
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return {"healthy": False, "error": str(e)}

    def close(self) -> None:
        """Dispose of the engine and release pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def __del__(self) -> None:
        self.close()
