"""BaseService — abstract foundation for all shelfctl services.

Every service receives a :class:`Library` at construction time. The
Library provides the catalog and the ledger; services never reach for
storage any other way. Each operation performs at most one atomic
compound call against storage, so services hold no locks of their own.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from shelfctl.domain.errors import LibraryError, RepositoryError
from shelfctl.services._helpers import utc_now
from shelfctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from shelfctl.infrastructure.library import Library

Clock = Callable[[], datetime]


def failed_result(op: str, exc: LibraryError) -> ServiceResult:
    """Translate an expected domain error into a failed result.

    INVARIANT: RepositoryError is never translated; it propagates.
    """
    if isinstance(exc, RepositoryError):
        raise exc
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=str(exc.code), message=exc.message, detail=exc.detail),
    )


class BaseService:
    """Abstract base for all service-layer classes.

    Subclasses implement domain-specific operations (catalog, lending)
    using the library for all data access.

    Usage::

        class CatalogService(BaseService):
            def add_book(self, isbn: str, ...) -> ServiceResult:
                try:
                    self._library.catalog.insert_if_absent(book)
                except LibraryError as exc:
                    return self._failure("add_book", exc)
    """

    def __init__(self, library: Library, *, clock: Clock | None = None) -> None:
        self._library = library
        self._clock = clock or utc_now

    def _now(self) -> datetime:
        return self._clock()

    @staticmethod
    def _failure(op: str, exc: LibraryError) -> ServiceResult:
        return failed_result(op, exc)
