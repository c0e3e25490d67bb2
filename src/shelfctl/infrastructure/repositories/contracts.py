"""Storage contracts for the catalog and the rental ledger.

Any backing store (in-memory, SQLite, an external service) plugs into the
services by satisfying these protocols. The compound operations
(``insert_if_absent``, ``update_if_present``, ``open_rental``,
``close_rental``) must each be atomic with respect to concurrent callers
on the same key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from shelfctl.domain.models import Book, Rental


@runtime_checkable
class BookRepository(Protocol):
    """Owns Book records keyed by normalized ISBN."""

    def save(self, book: Book) -> None:
        """Insert or replace the whole record for ``book.isbn``."""
        ...

    def find_by_isbn(self, isbn: str) -> Book:
        """Raises NotFoundError."""
        ...

    def find_all(self) -> list[Book]:
        """All books ordered by ISBN."""
        ...

    def delete(self, isbn: str) -> None:
        """Raises NotFoundError."""
        ...

    def exists(self, isbn: str) -> bool: ...

    def insert_if_absent(self, book: Book) -> None:
        """Raises ConflictError if ``book.isbn`` is already present."""
        ...

    def update_if_present(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> Book:
        """Replace the supplied fields and return the new record. Raises NotFoundError."""
        ...


@runtime_checkable
class RentalLedger(Protocol):
    """Append-only store of Rental records."""

    def save_rental(self, rental: Rental) -> None:
        """Append *rental*. Raises ConflictError if its book already has an active rental."""
        ...

    def find_active_rental_by_book_id(self, book_id: str) -> Rental | None: ...

    def find_rentals_by_user(self, user_id: str) -> list[Rental]:
        """Oldest first."""
        ...

    def find_rentals_by_book(self, book_id: str) -> list[Rental]:
        """Oldest first."""
        ...

    def find_active_rentals(self) -> list[Rental]: ...

    def open_rental(self, rental: Rental) -> Rental:
        """Append *rental* unless its book is already out. Raises ConflictError."""
        ...

    def close_rental(self, book_id: str, user_id: str, returned_at: datetime) -> Rental:
        """Mark *user_id*'s active rental of *book_id* returned. Raises NotFoundError."""
        ...
