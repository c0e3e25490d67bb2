"""Tests for rental status and the availability view."""

from datetime import UTC, datetime, timedelta

from shelfctl.domain.lending import (
    RentalStatus,
    availability_for,
    rental_status,
)
from shelfctl.domain.models import Book, Rental

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
BOOK = Book(isbn="9783161484100", title="Title A", author="Author A", published_at=NOW)


class TestRentalStatus:
    def test_active(self) -> None:
        rental = Rental.open(BOOK.isbn, "u1", NOW)
        assert rental_status(rental, NOW) is RentalStatus.ACTIVE

    def test_overdue(self) -> None:
        rental = Rental.open(BOOK.isbn, "u1", NOW)
        assert rental_status(rental, NOW + timedelta(days=15)) is RentalStatus.OVERDUE

    def test_returned_wins_over_overdue(self) -> None:
        rental = Rental.open(BOOK.isbn, "u1", NOW).mark_returned(NOW + timedelta(days=20))
        assert rental_status(rental, NOW + timedelta(days=30)) is RentalStatus.RETURNED


class TestAvailabilityFor:
    def test_on_shelf(self) -> None:
        view = availability_for(BOOK, None, NOW)
        assert view.is_available
        assert view.current_borrower is None
        assert view.due_date is None
        assert view.title == "Title A"

    def test_on_loan(self) -> None:
        rental = Rental.open(BOOK.isbn, "u1", NOW)
        view = availability_for(BOOK, rental, NOW + timedelta(days=4))
        assert not view.is_available
        assert view.current_borrower == "u1"
        assert view.due_date == NOW + timedelta(days=14)
        assert view.days_until_due == 10
        assert not view.is_overdue

    def test_overdue_loan(self) -> None:
        rental = Rental.open(BOOK.isbn, "u1", NOW)
        view = availability_for(BOOK, rental, NOW + timedelta(days=15))
        assert view.is_overdue
        assert view.days_until_due == -1
