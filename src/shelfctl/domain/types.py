"""Command kinds and error codes.

Both sets are closed: the dispatcher routes only on :class:`CommandKind`
members, and every failed :class:`~shelfctl.services.result.ServiceResult`
carries one :class:`ErrorCode`.
"""

from __future__ import annotations

from enum import StrEnum


class CommandKind(StrEnum):
    """Write intents understood by the dispatcher."""

    ADD_BOOK = "add_book"
    UPDATE_BOOK = "update_book"
    DELETE_BOOK = "delete_book"
    BORROW_BOOK = "borrow_book"
    RETURN_BOOK = "return_book"


class ErrorCode(StrEnum):
    """Machine-readable failure kinds surfaced to adapters."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_COMMAND = "INVALID_COMMAND"
    HANDLER_NOT_FOUND = "HANDLER_NOT_FOUND"
    REPOSITORY_ERROR = "REPOSITORY_ERROR"
