"""LendingService — borrow, return, and inspect the rental ledger.

Borrow and return are each one atomic ledger call: ``open_rental``
checks for an active rental and appends the new one in the same critical
section, ``close_rental`` finds the caller's active rental and marks it
returned in the same critical section. Lost races surface as
``CONFLICT`` and are never retried.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shelfctl.domain.errors import LibraryError, NotFoundError
from shelfctl.domain.isbn import validate_isbn
from shelfctl.domain.lending import availability_for
from shelfctl.domain.models import Rental
from shelfctl.services._helpers import ensure_present
from shelfctl.services.base import BaseService
from shelfctl.services.contracts import (
    RentalListData,
    availability_payload,
    dump_validated,
    rental_payload,
)
from shelfctl.services.result import ServiceResult


class LendingService(BaseService):
    """Rental operations over ``library.ledger``, checked against ``library.catalog``."""

    def borrow_book(self, book_id: str, user_id: str) -> ServiceResult:
        """Open a 14-day rental of *book_id* for *user_id*.

        Fails with ``NOT_FOUND`` if the book is not catalogued and with
        ``CONFLICT`` if it is already out, whether to another user or to
        *user_id* itself (the message tells the two apart).
        """
        op = "borrow_book"
        now = self._now()
        try:
            ensure_present(book_id=book_id, user_id=user_id)
            isbn = validate_isbn(book_id)
            if not self._library.catalog.exists(isbn):
                raise NotFoundError(f"No book found with ISBN: {isbn}", isbn=isbn)
            rental = self._library.ledger.open_rental(Rental.open(isbn, user_id, now))
        except LibraryError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=self._payload(rental, now))

    def return_book(self, book_id: str, user_id: str) -> ServiceResult:
        """Close *user_id*'s active rental of *book_id*."""
        op = "return_book"
        now = self._now()
        try:
            ensure_present(book_id=book_id, user_id=user_id)
            rental = self._library.ledger.close_rental(validate_isbn(book_id), user_id, now)
        except LibraryError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=self._payload(rental, now))

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def user_rentals(self, user_id: str, *, active_only: bool = False) -> ServiceResult:
        op = "user_rentals"
        try:
            ensure_present(user_id=user_id)
        except LibraryError as exc:
            return self._failure(op, exc)
        rentals = self._library.ledger.find_rentals_by_user(user_id)
        if active_only:
            rentals = [r for r in rentals if r.is_active]
        return self._listing(op, rentals, self._now(), user_id=user_id)

    def book_history(self, book_id: str) -> ServiceResult:
        """Every rental of *book_id*, including those of deleted books."""
        op = "book_history"
        try:
            ensure_present(book_id=book_id)
            isbn = validate_isbn(book_id)
        except LibraryError as exc:
            return self._failure(op, exc)
        history = self._library.ledger.find_rentals_by_book(isbn)
        return self._listing(op, history, self._now(), book_id=isbn)

    def active_rentals(self) -> ServiceResult:
        """Every book currently out, across all users."""
        rentals = self._library.ledger.find_active_rentals()
        return self._listing("active_rentals", rentals, self._now())

    def overdue_rentals(self) -> ServiceResult:
        now = self._now()
        overdue = [r for r in self._library.ledger.find_active_rentals() if r.is_overdue(now)]
        return self._listing("overdue_rentals", overdue, now)

    def availability(self, isbn: str) -> ServiceResult:
        """Catalog entry combined with its current loan, if any."""
        op = "availability"
        try:
            ensure_present(isbn=isbn)
            normalized = validate_isbn(isbn)
            book = self._library.catalog.find_by_isbn(normalized)
        except LibraryError as exc:
            return self._failure(op, exc)
        active = self._library.ledger.find_active_rental_by_book_id(normalized)
        view = availability_for(book, active, self._now())
        return ServiceResult(ok=True, op=op, data=availability_payload(view))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _payload(self, rental: Rental, now: datetime) -> dict[str, Any]:
        return rental_payload(rental, now, due_soon_days=self._library.lending.due_soon_days)

    def _listing(
        self, op: str, rentals: list[Rental], now: datetime, **scope: str
    ) -> ServiceResult:
        """Payloads for *rentals*, all evaluated at the same *now*."""
        items = [self._payload(r, now) for r in rentals]
        data = dump_validated(RentalListData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op=op, data=data, meta=scope or None)
