"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from shelfctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add_book", data={"isbn": "9783161484100"})
        assert result.ok is True
        assert result.op == "add_book"
        assert result.data == {"isbn": "9783161484100"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="No book found")
        result = ServiceResult(ok=False, op="delete_book", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="list_books", data={"count": 0}, meta={"scope": "all"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "list_books"
        assert parsed["data"]["count"] == 0
        assert parsed["meta"]["scope"] == "all"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(code="CONFLICT", message="taken", detail={"isbn": "9783161484100"})
        assert error.detail["isbn"] == "9783161484100"

    def test_default_detail(self) -> None:
        assert ServiceError(code="E001", message="bad").detail == {}
