"""Database engine setup for SQLite with WAL mode.

SQLAlchemy Core (not ORM) is used: repositories issue one short
transaction per operation and hand back frozen domain records, so there
is nothing for a session or identity map to track.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from shelfctl.infrastructure.database.schema import metadata

DEFAULT_DB_PATH = Path(".shelfctl") / "shelfctl.db"

# Seconds a writer waits on a locked database before the driver gives up.
_BUSY_TIMEOUT = 30


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": _BUSY_TIMEOUT, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(root: Path, db_path: Path | None = None) -> Engine:
    """Create the database under *root* and all tables.

    *db_path* is resolved against *root* when relative; it defaults to
    ``.shelfctl/shelfctl.db``. Idempotent — safe to call on an existing
    database.
    """
    path = db_path if db_path is not None else DEFAULT_DB_PATH
    if not path.is_absolute():
        path = root / path
    path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(path)
    metadata.create_all(engine)
    return engine
