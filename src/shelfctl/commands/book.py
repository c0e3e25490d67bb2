"""Command group: catalog maintenance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfGroup
from shelfctl.domain.commands import AddBook, DeleteBook, UpdateBook

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext

_BOOK_EXAMPLES = """\
  shelfctl book add 978-3-16-148410-0 --title "Title A" --author "Author A"
  shelfctl book update 9783161484100 --title "Second Edition"
  shelfctl book show 9783161484100
  shelfctl book list
  shelfctl book delete 9783161484100"""


@click.group(cls=ShelfGroup, examples=_BOOK_EXAMPLES)
def book() -> None:
    """Add, update, remove, and look up catalog entries."""


@book.command(
    examples="""\
  shelfctl book add 9783161484100 --title "Title A" --author "Author A"
  shelfctl book add 0-8044-2957-X --title "Dune" --author "Frank Herbert"
  shelfctl --json book add 9780306406157 --title "Signals" --author "Someone\""""
)
@click.argument("isbn")
@click.option("--title", required=True, help="Book title.")
@click.option("--author", required=True, help="Book author.")
@click.pass_obj
def add(app: AppContext, isbn: str, title: str, author: str) -> None:
    """Add a book to the catalog. ISBN-10 or ISBN-13, hyphens allowed."""
    app.emit(app.dispatcher.dispatch(AddBook(isbn=isbn, title=title, author=author)))


@book.command(
    examples="""\
  shelfctl book update 9783161484100 --title "New Title"
  shelfctl book update 9783161484100 --author "New Author"
  shelfctl book update 9783161484100 --title "T" --author "A\""""
)
@click.argument("isbn")
@click.option("--title", default=None, help="New title.")
@click.option("--author", default=None, help="New author.")
@click.pass_obj
def update(app: AppContext, isbn: str, title: str | None, author: str | None) -> None:
    """Replace a book's title and/or author. Omitted fields stay unchanged."""
    app.emit(app.dispatcher.dispatch(UpdateBook(isbn=isbn, title=title, author=author)))


@book.command(
    examples="""\
  shelfctl book delete 9783161484100"""
)
@click.argument("isbn")
@click.pass_obj
def delete(app: AppContext, isbn: str) -> None:
    """Remove a book from the catalog. Its loan history is kept."""
    app.emit(app.dispatcher.dispatch(DeleteBook(isbn=isbn)))


@book.command(
    examples="""\
  shelfctl book show 9783161484100
  shelfctl --json book show 978-3-16-148410-0"""
)
@click.argument("isbn")
@click.pass_obj
def show(app: AppContext, isbn: str) -> None:
    """Show a book and whether it is currently on loan."""
    from shelfctl.services.lending import LendingService

    app.emit(LendingService(app.library).availability(isbn))


@book.command(
    name="list",
    examples="""\
  shelfctl book list
  shelfctl -q book list
  shelfctl --json book list""",
)
@click.pass_obj
def list_books(app: AppContext) -> None:
    """List every catalog entry, ordered by ISBN."""
    from shelfctl.services.catalog import CatalogService

    app.emit(CatalogService(app.library).list_books())
