"""Command group: borrowing and returning books."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfGroup
from shelfctl.domain.commands import BorrowBook, ReturnBook
from shelfctl.services.lending import LendingService

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext

_LOAN_EXAMPLES = """\
  shelfctl loan borrow 9783161484100 --user u1
  shelfctl loan return 9783161484100 --user u1
  shelfctl loan list --user u1 --active
  shelfctl loan overdue
  shelfctl loan history 9783161484100"""


@click.group(cls=ShelfGroup, examples=_LOAN_EXAMPLES)
def loan() -> None:
    """Borrow and return books, and inspect the rental ledger."""


@loan.command(
    examples="""\
  shelfctl loan borrow 9783161484100 --user u1
  shelfctl --json loan borrow 978-3-16-148410-0 --user u2"""
)
@click.argument("isbn")
@click.option("--user", "user_id", required=True, help="Borrowing user.")
@click.pass_obj
def borrow(app: AppContext, isbn: str, user_id: str) -> None:
    """Borrow a book for 14 days."""
    app.emit(app.dispatcher.dispatch(BorrowBook(book_id=isbn, user_id=user_id)))


@loan.command(
    name="return",
    examples="""\
  shelfctl loan return 9783161484100 --user u1""",
)
@click.argument("isbn")
@click.option("--user", "user_id", required=True, help="Returning user.")
@click.pass_obj
def return_book(app: AppContext, isbn: str, user_id: str) -> None:
    """Return a borrowed book."""
    app.emit(app.dispatcher.dispatch(ReturnBook(book_id=isbn, user_id=user_id)))


@loan.command(
    name="list",
    examples="""\
  shelfctl loan list
  shelfctl loan list --user u1
  shelfctl loan list --user u1 --active""",
)
@click.option("--user", "user_id", default=None, help="Only this user's rentals.")
@click.option("--active", "active_only", is_flag=True, help="Only rentals not yet returned.")
@click.pass_obj
def list_rentals(app: AppContext, user_id: str | None, active_only: bool) -> None:
    """List rentals. Without --user, lists every book currently out."""
    service = LendingService(app.library)
    if user_id is None:
        app.emit(service.active_rentals())
    else:
        app.emit(service.user_rentals(user_id, active_only=active_only))


@loan.command(
    examples="""\
  shelfctl loan overdue
  shelfctl -q loan overdue"""
)
@click.pass_obj
def overdue(app: AppContext) -> None:
    """List active rentals past their return deadline."""
    app.emit(LendingService(app.library).overdue_rentals())


@loan.command(
    examples="""\
  shelfctl loan history 9783161484100"""
)
@click.argument("isbn")
@click.pass_obj
def history(app: AppContext, isbn: str) -> None:
    """Every rental of a book, oldest first."""
    app.emit(LendingService(app.library).book_history(isbn))
