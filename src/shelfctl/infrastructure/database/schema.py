"""SQLAlchemy Core table definitions for the shelfctl database.

Timestamps are stored as ISO 8601 text with their UTC offset so they
round-trip through SQLite without losing timezone information.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("isbn", Text, primary_key=True),
    Column("title", Text, nullable=False),
    Column("author", Text, nullable=False),
    Column("published_at", Text, nullable=False),
)

# No foreign key to books: rental history outlives catalog entries.
rentals = Table(
    "rentals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("book_id", Text, nullable=False),
    Column("user_id", Text, nullable=False),
    Column("borrowed_at", Text, nullable=False),
    Column("return_deadline", Text, nullable=False),
    Column("returned_at", Text),
)

Index("ix_rentals_book_id", rentals.c.book_id)
Index("ix_rentals_user_id", rentals.c.user_id)

# At most one active rental per book, enforced by the database itself.
Index(
    "ux_rentals_active_book",
    rentals.c.book_id,
    unique=True,
    sqlite_where=rentals.c.returned_at.is_(None),
    postgresql_where=rentals.c.returned_at.is_(None),
)
