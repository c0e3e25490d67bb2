"""Rental state machine and the availability view of a catalog entry.

A rental moves through one transition only:

    active -> returned

``overdue`` is not a stored state; it is an active rental observed after
its deadline.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

from shelfctl.domain.models import Book, Rental

ALREADY_BORROWED = "book is already borrowed by someone else"
ALREADY_HELD = "you already have this book, please return it before borrowing again"


class RentalStatus(StrEnum):
    """Observed status of a rental at a point in time."""

    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"


def rental_status(rental: Rental, now: datetime) -> RentalStatus:
    """Classify *rental* as seen at *now*."""
    if not rental.is_active:
        return RentalStatus.RETURNED
    if rental.is_overdue(now):
        return RentalStatus.OVERDUE
    return RentalStatus.ACTIVE


class Availability(BaseModel):
    """Read-only catalog view of a book with its current loan, if any."""

    model_config = {"frozen": True}

    isbn: str
    title: str
    author: str
    published_at: datetime
    is_available: bool
    current_borrower: str | None = None
    due_date: datetime | None = None
    is_overdue: bool = False
    days_until_due: int = 0


def availability_for(book: Book, active: Rental | None, now: datetime) -> Availability:
    """Combine *book* with its *active* rental (None when on the shelf)."""
    if active is None:
        return Availability(
            isbn=book.isbn,
            title=book.title,
            author=book.author,
            published_at=book.published_at,
            is_available=True,
        )
    return Availability(
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        published_at=book.published_at,
        is_available=False,
        current_borrower=active.user_id,
        due_date=active.return_deadline,
        is_overdue=active.is_overdue(now),
        days_until_due=active.days_until_due(now),
    )
