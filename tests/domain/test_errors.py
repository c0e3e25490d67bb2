"""Tests for the exception taxonomy."""

import pytest

from shelfctl.domain.errors import (
    ConflictError,
    HandlerNotFoundError,
    InvalidCommandError,
    LibraryError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from shelfctl.domain.types import ErrorCode


class TestLibraryErrors:
    @pytest.mark.parametrize(
        ("cls", "code"),
        [
            (ValidationError, ErrorCode.VALIDATION_FAILED),
            (NotFoundError, ErrorCode.NOT_FOUND),
            (ConflictError, ErrorCode.CONFLICT),
            (InvalidCommandError, ErrorCode.INVALID_COMMAND),
            (HandlerNotFoundError, ErrorCode.HANDLER_NOT_FOUND),
            (RepositoryError, ErrorCode.REPOSITORY_ERROR),
        ],
    )
    def test_each_kind_has_distinct_code(self, cls: type[LibraryError], code: ErrorCode) -> None:
        assert cls.code is code
        assert issubclass(cls, LibraryError)

    def test_message_and_detail(self) -> None:
        exc = ConflictError("taken", isbn="9783161484100")
        assert str(exc) == "taken"
        assert exc.message == "taken"
        assert exc.detail == {"isbn": "9783161484100"}
