"""Tests for the operation-specific Rich renderers."""

from __future__ import annotations

from typing import Any

from shelfctl.output.renderers import render_quiet, render_result
from shelfctl.services.result import ServiceError, ServiceResult


def _ok(op: str, data: dict[str, Any], **kwargs: Any) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=data, **kwargs)


BOOK = {
    "isbn": "9783161484100",
    "title": "Title A",
    "author": "Author A",
    "published_at": "2024-03-01T09:00:00Z",
}

RENTAL = {
    "book_id": "9783161484100",
    "user_id": "u1",
    "borrowed_at": "2024-03-01T09:00:00Z",
    "return_deadline": "2024-03-15T09:00:00Z",
    "returned_at": None,
    "status": "active",
    "is_overdue": False,
    "days_until_due": 14,
    "due_soon": False,
}


class TestErrorRenderer:
    def test_error_line(self) -> None:
        result = ServiceResult(
            ok=False,
            op="borrow_book",
            error=ServiceError(code="CONFLICT", message="book is already borrowed by someone else"),
        )
        output = render_result(result)
        assert output.startswith("ERROR")
        assert "borrow_book" in output
        assert "already borrowed" in output
        assert "CONFLICT" not in output

    def test_verbose_shows_code_and_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="borrow_book",
            error=ServiceError(code="CONFLICT", message="taken", detail={"user_id": "u2"}),
        )
        output = render_result(result, verbose=True)
        assert "CONFLICT" in output
        assert "user_id: u2" in output


class TestCatalogRenderers:
    def test_add_book(self) -> None:
        output = render_result(_ok("add_book", BOOK))
        assert "OK" in output
        assert "isbn: 9783161484100" in output
        assert "title: Title A" in output
        assert "published_at" not in output

    def test_field_lines_single_spaced(self) -> None:
        lines = render_result(_ok("add_book", BOOK)).splitlines()
        assert lines[0] == "OK  add_book"
        assert lines[1] == "  isbn: 9783161484100"

    def test_update_shows_fields_changed(self) -> None:
        output = render_result(_ok("update_book", {**BOOK, "fields_changed": ["title"]}))
        assert "fields_changed: title" in output

    def test_book_table(self) -> None:
        output = render_result(_ok("list_books", {"count": 1, "items": [BOOK]}))
        assert "ISBN" in output
        assert "Title A" in output
        assert "1 books" in output

    def test_availability_on_shelf(self) -> None:
        data = {**BOOK, "is_available": True, "is_overdue": False, "days_until_due": 0}
        output = render_result(_ok("availability", data))
        assert "9783161484100" in output
        assert "available" in output

    def test_availability_on_loan(self) -> None:
        data = {
            **BOOK,
            "is_available": False,
            "current_borrower": "u1",
            "due_date": "2024-03-15T09:00:00Z",
            "is_overdue": False,
            "days_until_due": 10,
        }
        output = render_result(_ok("availability", data))
        assert "on loan" in output
        assert "u1" in output
        assert "10 days" in output

    def test_markup_in_title_is_literal(self) -> None:
        data = {**BOOK, "title": "[b]X[/b]", "is_available": True}
        output = render_result(_ok("availability", data))
        assert "[b]X[/b]" in output


class TestLendingRenderers:
    def test_borrow(self) -> None:
        output = render_result(_ok("borrow_book", RENTAL))
        assert "book_id: 9783161484100" in output
        assert "user_id: u1" in output
        assert "status: active" in output

    def test_due_soon_warning(self) -> None:
        data = {**RENTAL, "due_soon": True, "days_until_due": 1}
        assert "due in 1 days" in render_result(_ok("borrow_book", data))

    def test_rental_table(self) -> None:
        returned = {**RENTAL, "status": "returned", "returned_at": "2024-03-02T09:00:00Z"}
        output = render_result(_ok("book_history", {"count": 2, "items": [RENTAL, returned]}))
        assert "active" in output
        assert "returned" in output
        assert "2 rentals" in output

    def test_verbose_table_shows_meta(self) -> None:
        result = _ok("user_rentals", {"count": 1, "items": [RENTAL]}, meta={"user_id": "u1"})
        output = render_result(result, verbose=True)
        assert "Borrowed" in output
        assert "meta:" in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("something_else", {"a": 1, "b": [1, 2]}))
        assert "OK" in output
        assert "a: 1" in output
        assert "b: [1,2]" in output


class TestRenderQuiet:
    def test_empty_list(self) -> None:
        assert render_quiet(_ok("list_books", {"count": 0, "items": []})) == ""
