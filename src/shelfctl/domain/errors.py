"""Exception taxonomy shared by repositories, services, and the dispatcher.

Repositories raise these; services translate the expected ones into a
failed ServiceResult carrying ``exc.code``. :class:`RepositoryError` is
never translated — it propagates to the caller as-is.
"""

from __future__ import annotations

from typing import Any, ClassVar

from shelfctl.domain.types import ErrorCode


class LibraryError(Exception):
    """Base class for every failure the core reports."""

    code: ClassVar[ErrorCode]

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class ValidationError(LibraryError):
    """Malformed or missing input. Raised before any storage access."""

    code = ErrorCode.VALIDATION_FAILED


class NotFoundError(LibraryError):
    """Referenced book or active rental does not exist."""

    code = ErrorCode.NOT_FOUND


class ConflictError(LibraryError):
    """Uniqueness or exclusivity invariant would be violated."""

    code = ErrorCode.CONFLICT


class InvalidCommandError(LibraryError):
    """Payload does not match the shape declared by its kind tag."""

    code = ErrorCode.INVALID_COMMAND


class HandlerNotFoundError(LibraryError):
    """No handler registered for a command kind (wiring defect)."""

    code = ErrorCode.HANDLER_NOT_FOUND


class RepositoryError(LibraryError):
    """Storage failed for reasons opaque to the core (I/O, connectivity)."""

    code = ErrorCode.REPOSITORY_ERROR
