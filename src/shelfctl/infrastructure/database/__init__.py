"""SQLite database engine and schema via SQLAlchemy Core."""

from shelfctl.infrastructure.database.engine import (
    DEFAULT_DB_PATH,
    create_db_engine,
    init_database,
)
from shelfctl.infrastructure.database.schema import books, metadata, rentals

__all__ = [
    "DEFAULT_DB_PATH",
    "books",
    "create_db_engine",
    "init_database",
    "metadata",
    "rentals",
]
