"""In-process catalog and ledger backed by dicts.

Writers take the per-key lock for the whole check-then-act sequence and
publish under ``_guard``; readers take ``_guard`` only long enough to
snapshot. Records are frozen, so handing them out never exposes mutable
internal state.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from shelfctl.domain.errors import ConflictError, NotFoundError
from shelfctl.domain.lending import ALREADY_BORROWED, ALREADY_HELD
from shelfctl.infrastructure.locks import KeyedLock

if TYPE_CHECKING:
    from datetime import datetime

    from shelfctl.domain.models import Book, Rental


class InMemoryBookRepository:
    """Catalog keyed by normalized ISBN."""

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}
        self._guard = threading.Lock()
        self._keys = KeyedLock()

    def save(self, book: Book) -> None:
        with self._keys.hold(book.isbn):
            self._publish(book)

    def find_by_isbn(self, isbn: str) -> Book:
        with self._guard:
            book = self._books.get(isbn)
        if book is None:
            raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)
        return book

    def find_all(self) -> list[Book]:
        with self._guard:
            books = list(self._books.values())
        return sorted(books, key=lambda b: b.isbn)

    def delete(self, isbn: str) -> None:
        with self._keys.hold(isbn), self._guard:
            if self._books.pop(isbn, None) is None:
                raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)

    def exists(self, isbn: str) -> bool:
        with self._guard:
            return isbn in self._books

    def insert_if_absent(self, book: Book) -> None:
        with self._keys.hold(book.isbn):
            if self.exists(book.isbn):
                raise ConflictError(
                    f"Book with ISBN {book.isbn} already exists",
                    isbn=book.isbn,
                )
            self._publish(book)

    def update_if_present(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> Book:
        with self._keys.hold(isbn):
            updated = self.find_by_isbn(isbn).with_changes(title=title, author=author)
            self._publish(updated)
        return updated

    def _publish(self, book: Book) -> None:
        with self._guard:
            self._books[book.isbn] = book


class InMemoryRentalLedger:
    """Append-only rental log with an index of active rentals per book.

    ``_rentals`` only grows; returning a book replaces its slot with the
    returned copy. ``_active`` maps book_id to the slot of its active
    rental, which is what keeps at most one active rental per book.
    """

    def __init__(self) -> None:
        self._rentals: list[Rental] = []
        self._active: dict[str, int] = {}
        self._guard = threading.Lock()
        self._keys = KeyedLock()

    def save_rental(self, rental: Rental) -> None:
        with self._keys.hold(rental.book_id):
            self._append(rental)

    def find_active_rental_by_book_id(self, book_id: str) -> Rental | None:
        with self._guard:
            slot = self._active.get(book_id)
            return None if slot is None else self._rentals[slot]

    def find_rentals_by_user(self, user_id: str) -> list[Rental]:
        with self._guard:
            return [r for r in self._rentals if r.user_id == user_id]

    def find_rentals_by_book(self, book_id: str) -> list[Rental]:
        with self._guard:
            return [r for r in self._rentals if r.book_id == book_id]

    def find_active_rentals(self) -> list[Rental]:
        with self._guard:
            return [self._rentals[slot] for slot in sorted(self._active.values())]

    def open_rental(self, rental: Rental) -> Rental:
        with self._keys.hold(rental.book_id):
            active = self.find_active_rental_by_book_id(rental.book_id)
            if active is not None:
                message = ALREADY_HELD if active.user_id == rental.user_id else ALREADY_BORROWED
                raise ConflictError(message, book_id=rental.book_id, user_id=rental.user_id)
            self._append(rental)
        return rental

    def close_rental(self, book_id: str, user_id: str, returned_at: datetime) -> Rental:
        with self._keys.hold(book_id):
            with self._guard:
                slot = self._active.get(book_id)
            if slot is None or self._rentals[slot].user_id != user_id:
                raise NotFoundError(
                    f"No active rental of {book_id} for user {user_id}",
                    book_id=book_id,
                    user_id=user_id,
                )
            returned = self._rentals[slot].mark_returned(returned_at)
            with self._guard:
                self._rentals[slot] = returned
                del self._active[book_id]
        return returned

    def _append(self, rental: Rental) -> None:
        with self._guard:
            if rental.is_active and rental.book_id in self._active:
                raise ConflictError(ALREADY_BORROWED, book_id=rental.book_id)
            self._rentals.append(rental)
            if rental.is_active:
                self._active[rental.book_id] = len(self._rentals) - 1
