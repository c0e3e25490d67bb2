"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``rentals`` vs ``items``)
fail fast in tests and during development.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from shelfctl.domain.lending import Availability, rental_status
from shelfctl.domain.models import Book, Rental


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a JSON-friendly payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class BookItem(BaseModel):
    """One catalog entry."""

    isbn: str
    title: str
    author: str
    published_at: datetime


class BookListData(BaseModel):
    """Payload contract for ``CatalogService.list_books``."""

    count: int
    items: list[BookItem]


class RentalItem(BaseModel):
    """One rental with its derived values as of the operation's clock."""

    model_config = ConfigDict(extra="forbid")

    book_id: str
    user_id: str
    borrowed_at: datetime
    return_deadline: datetime
    returned_at: datetime | None = None
    status: str
    is_overdue: bool
    days_until_due: int
    due_soon: bool = False


class RentalListData(BaseModel):
    """Payload contract for ledger listings (user, book history, overdue)."""

    count: int
    items: list[RentalItem]


class AvailabilityData(BaseModel):
    """Payload contract for ``LendingService.availability``."""

    isbn: str
    title: str
    author: str
    published_at: datetime
    is_available: bool
    current_borrower: str | None = None
    due_date: datetime | None = None
    is_overdue: bool
    days_until_due: int


def book_payload(book: Book) -> dict[str, Any]:
    return dump_validated(BookItem, book.model_dump())


def rental_payload(rental: Rental, now: datetime, *, due_soon_days: int = 0) -> dict[str, Any]:
    days = rental.days_until_due(now)
    return dump_validated(
        RentalItem,
        {
            **rental.model_dump(),
            "status": str(rental_status(rental, now)),
            "is_overdue": rental.is_overdue(now),
            "days_until_due": days,
            "due_soon": rental.is_active and 0 <= days < due_soon_days,
        },
    )


def availability_payload(view: Availability) -> dict[str, Any]:
    return dump_validated(AvailabilityData, view.model_dump())
