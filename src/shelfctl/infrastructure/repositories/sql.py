"""SQLite-backed catalog and ledger via SQLAlchemy Core.

Each compound operation is a single statement or a single transaction,
and the schema constraints (primary key on ``books.isbn``, partial unique
index on active rentals) decide lost races. A constraint violation becomes
:class:`ConflictError`; any other driver failure becomes
:class:`RepositoryError` with the original exception chained.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shelfctl.domain.errors import ConflictError, LibraryError, NotFoundError, RepositoryError
from shelfctl.domain.lending import ALREADY_BORROWED, ALREADY_HELD
from shelfctl.domain.models import Book, Rental
from shelfctl.infrastructure.database.schema import books, rentals

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection, RowMapping
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Wrap driver failures in RepositoryError; let domain errors through."""
    try:
        yield
    except LibraryError:
        raise
    except SQLAlchemyError as exc:
        logger.warning("Storage failure during %s: %s", operation, exc)
        raise RepositoryError(f"Storage failure during {operation}", operation=operation) from exc


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def _book_from_row(row: RowMapping) -> Book:
    return Book(
        isbn=row["isbn"],
        title=row["title"],
        author=row["author"],
        published_at=datetime.fromisoformat(row["published_at"]),
    )


def _book_values(book: Book) -> dict[str, Any]:
    return {
        "isbn": book.isbn,
        "title": book.title,
        "author": book.author,
        "published_at": book.published_at.isoformat(),
    }


def _rental_from_row(row: RowMapping) -> Rental:
    returned_at = row["returned_at"]
    return Rental(
        book_id=row["book_id"],
        user_id=row["user_id"],
        borrowed_at=datetime.fromisoformat(row["borrowed_at"]),
        return_deadline=datetime.fromisoformat(row["return_deadline"]),
        returned_at=datetime.fromisoformat(returned_at) if returned_at else None,
    )


def _rental_values(rental: Rental) -> dict[str, Any]:
    return {
        "book_id": rental.book_id,
        "user_id": rental.user_id,
        "borrowed_at": rental.borrowed_at.isoformat(),
        "return_deadline": rental.return_deadline.isoformat(),
        "returned_at": rental.returned_at.isoformat() if rental.returned_at else None,
    }


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class SqlBookRepository:
    """Catalog stored in the ``books`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, book: Book) -> None:
        values = _book_values(book)
        with _storage_errors("save"), self._engine.begin() as conn:
            result = conn.execute(
                update(books).where(books.c.isbn == book.isbn).values(**values)
            )
            if result.rowcount == 0:
                conn.execute(insert(books).values(**values))

    def find_by_isbn(self, isbn: str) -> Book:
        with _storage_errors("find_by_isbn"), self._engine.connect() as conn:
            return self._fetch(conn, isbn)

    def find_all(self) -> list[Book]:
        with _storage_errors("find_all"), self._engine.connect() as conn:
            rows = conn.execute(select(books).order_by(books.c.isbn)).mappings().all()
        return [_book_from_row(row) for row in rows]

    def delete(self, isbn: str) -> None:
        with _storage_errors("delete"), self._engine.begin() as conn:
            result = conn.execute(books.delete().where(books.c.isbn == isbn))
            if result.rowcount == 0:
                raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)
        logger.debug("Deleted book %s", isbn)

    def exists(self, isbn: str) -> bool:
        with _storage_errors("exists"), self._engine.connect() as conn:
            row = conn.execute(select(books.c.isbn).where(books.c.isbn == isbn)).first()
        return row is not None

    def insert_if_absent(self, book: Book) -> None:
        with _storage_errors("insert_if_absent"):
            try:
                with self._engine.begin() as conn:
                    conn.execute(insert(books).values(**_book_values(book)))
            except IntegrityError as exc:
                raise ConflictError(
                    f"Book with ISBN {book.isbn} already exists",
                    isbn=book.isbn,
                ) from exc
        logger.debug("Inserted book %s", book.isbn)

    def update_if_present(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> Book:
        changes: dict[str, Any] = {}
        if title:
            changes["title"] = title
        if author:
            changes["author"] = author

        with _storage_errors("update_if_present"), self._engine.begin() as conn:
            if changes:
                result = conn.execute(update(books).where(books.c.isbn == isbn).values(**changes))
                if result.rowcount == 0:
                    raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)
            return self._fetch(conn, isbn)

    @staticmethod
    def _fetch(conn: Connection, isbn: str) -> Book:
        row = conn.execute(select(books).where(books.c.isbn == isbn)).mappings().first()
        if row is None:
            raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)
        return _book_from_row(row)


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


class SqlRentalLedger:
    """Append-only rental history stored in the ``rentals`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save_rental(self, rental: Rental) -> None:
        with _storage_errors("save_rental"):
            try:
                with self._engine.begin() as conn:
                    conn.execute(insert(rentals).values(**_rental_values(rental)))
            except IntegrityError as exc:
                raise ConflictError(ALREADY_BORROWED, book_id=rental.book_id) from exc

    def find_active_rental_by_book_id(self, book_id: str) -> Rental | None:
        with _storage_errors("find_active_rental_by_book_id"), self._engine.connect() as conn:
            return self._active(conn, book_id)

    def find_rentals_by_user(self, user_id: str) -> list[Rental]:
        stmt = select(rentals).where(rentals.c.user_id == user_id).order_by(rentals.c.id)
        return self._fetch_all("find_rentals_by_user", stmt)

    def find_rentals_by_book(self, book_id: str) -> list[Rental]:
        stmt = select(rentals).where(rentals.c.book_id == book_id).order_by(rentals.c.id)
        return self._fetch_all("find_rentals_by_book", stmt)

    def find_active_rentals(self) -> list[Rental]:
        stmt = select(rentals).where(rentals.c.returned_at.is_(None)).order_by(rentals.c.id)
        return self._fetch_all("find_active_rentals", stmt)

    def open_rental(self, rental: Rental) -> Rental:
        with _storage_errors("open_rental"):
            try:
                with self._engine.begin() as conn:
                    active = self._active(conn, rental.book_id)
                    if active is not None:
                        raise self._conflict(active, rental)
                    conn.execute(insert(rentals).values(**_rental_values(rental)))
            except IntegrityError as exc:
                # Another writer opened a rental between our check and insert.
                winner = self.find_active_rental_by_book_id(rental.book_id)
                raise self._conflict(winner, rental) from exc
        logger.debug("Opened rental of %s for %s", rental.book_id, rental.user_id)
        return rental

    def close_rental(self, book_id: str, user_id: str, returned_at: datetime) -> Rental:
        with _storage_errors("close_rental"), self._engine.begin() as conn:
            row = (
                conn.execute(
                    select(rentals).where(
                        rentals.c.book_id == book_id,
                        rentals.c.user_id == user_id,
                        rentals.c.returned_at.is_(None),
                    )
                )
                .mappings()
                .first()
            )
            if row is None:
                raise self._no_active(book_id, user_id)

            result = conn.execute(
                update(rentals)
                .where(rentals.c.id == row["id"], rentals.c.returned_at.is_(None))
                .values(returned_at=returned_at.isoformat())
            )
            if result.rowcount == 0:
                raise self._no_active(book_id, user_id)

        logger.debug("Closed rental of %s for %s", book_id, user_id)
        return _rental_from_row(row).mark_returned(returned_at)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fetch_all(self, operation: str, stmt: Any) -> list[Rental]:
        with _storage_errors(operation), self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_rental_from_row(row) for row in rows]

    @staticmethod
    def _active(conn: Connection, book_id: str) -> Rental | None:
        row = (
            conn.execute(
                select(rentals).where(
                    rentals.c.book_id == book_id,
                    rentals.c.returned_at.is_(None),
                )
            )
            .mappings()
            .first()
        )
        return None if row is None else _rental_from_row(row)

    @staticmethod
    def _conflict(active: Rental | None, requested: Rental) -> ConflictError:
        same_user = active is not None and active.user_id == requested.user_id
        return ConflictError(
            ALREADY_HELD if same_user else ALREADY_BORROWED,
            book_id=requested.book_id,
            user_id=requested.user_id,
        )

    @staticmethod
    def _no_active(book_id: str, user_id: str) -> NotFoundError:
        return NotFoundError(
            f"No active rental of {book_id} for user {user_id}",
            book_id=book_id,
            user_id=user_id,
        )
