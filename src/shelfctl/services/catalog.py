"""CatalogService — add, update, delete, and look up catalog entries.

Every write follows the same three steps: reject empty required fields,
validate and normalize the ISBN, then make exactly one atomic repository
call (``insert_if_absent``, ``update_if_present``, or ``delete``).
"""

from __future__ import annotations

from datetime import datetime

from shelfctl.domain.errors import LibraryError, ValidationError
from shelfctl.domain.isbn import validate_isbn
from shelfctl.domain.models import Book
from shelfctl.services._helpers import ensure_present
from shelfctl.services.base import BaseService
from shelfctl.services.contracts import BookListData, book_payload, dump_validated
from shelfctl.services.result import ServiceResult


def _supplied(value: str | None) -> str | None:
    return value if value and value.strip() else None


class CatalogService(BaseService):
    """Catalog operations over ``library.catalog``."""

    def add_book(
        self,
        isbn: str,
        title: str,
        author: str,
        *,
        published_at: datetime | None = None,
    ) -> ServiceResult:
        """Create a new catalog entry.

        Fails with ``VALIDATION_FAILED`` for empty fields or a bad ISBN and
        with ``CONFLICT`` if the ISBN is already catalogued.
        """
        op = "add_book"
        try:
            ensure_present(isbn=isbn, title=title, author=author)
            book = Book(
                isbn=validate_isbn(isbn),
                title=title,
                author=author,
                published_at=published_at or self._now(),
            )
            self._library.catalog.insert_if_absent(book)
        except LibraryError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=book_payload(book))

    def update_book(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> ServiceResult:
        """Overwrite only the supplied fields of an existing entry."""
        op = "update_book"
        title, author = _supplied(title), _supplied(author)
        try:
            ensure_present(isbn=isbn)
            if title is None and author is None:
                raise ValidationError("at least one field must be provided for update")
            book = self._library.catalog.update_if_present(
                validate_isbn(isbn), title=title, author=author
            )
        except LibraryError as exc:
            return self._failure(op, exc)

        updated = [name for name, value in (("title", title), ("author", author)) if value]
        return ServiceResult(
            ok=True,
            op=op,
            data={**book_payload(book), "fields_changed": updated},
        )

    def delete_book(self, isbn: str) -> ServiceResult:
        """Remove a catalog entry. Its rental history is left untouched."""
        op = "delete_book"
        try:
            ensure_present(isbn=isbn)
            normalized = validate_isbn(isbn)
            self._library.catalog.delete(normalized)
        except LibraryError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"isbn": normalized})

    def get_book(self, isbn: str) -> ServiceResult:
        op = "get_book"
        try:
            ensure_present(isbn=isbn)
            book = self._library.catalog.find_by_isbn(validate_isbn(isbn))
        except LibraryError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=book_payload(book))

    def list_books(self) -> ServiceResult:
        """All catalog entries, ordered by ISBN."""
        books = self._library.catalog.find_all()
        items = [book.model_dump() for book in books]
        return ServiceResult(
            ok=True,
            op="list_books",
            data=dump_validated(BookListData, {"count": len(items), "items": items}),
        )
