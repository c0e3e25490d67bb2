"""Library — the single storage dependency injected into every service.

A Library owns exactly one catalog (:class:`BookRepository`) and one
ledger (:class:`RentalLedger`). It is constructed once per process (or
per test) and passed to the services; there is no module-level state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shelfctl.config.models import LendingConfig
from shelfctl.infrastructure.database.engine import init_database
from shelfctl.infrastructure.repositories.memory import (
    InMemoryBookRepository,
    InMemoryRentalLedger,
)
from shelfctl.infrastructure.repositories.sql import SqlBookRepository, SqlRentalLedger

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from shelfctl.config.settings import ShelfSettings
    from shelfctl.infrastructure.repositories.contracts import BookRepository, RentalLedger

logger = logging.getLogger(__name__)


class Library:
    """Catalog + ledger pair with the lending policy that applies to them.

    Use :meth:`from_settings` for configured storage, :meth:`in_memory` for
    an isolated process-local library, or pass any contract-conforming
    repositories directly.
    """

    def __init__(
        self,
        catalog: BookRepository,
        ledger: RentalLedger,
        *,
        lending: LendingConfig | None = None,
        engine: Engine | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._lending = lending or LendingConfig()
        self._engine = engine

    @classmethod
    def in_memory(cls, *, lending: LendingConfig | None = None) -> Library:
        return cls(InMemoryBookRepository(), InMemoryRentalLedger(), lending=lending)

    @classmethod
    def from_settings(cls, settings: ShelfSettings) -> Library:
        """Build the backend named by ``settings.storage.backend``."""
        if settings.storage.backend == "memory":
            logger.debug("Using in-memory storage")
            return cls.in_memory(lending=settings.lending)

        engine = init_database(settings.root, settings.db_path)
        logger.debug("Using SQLite storage at %s", settings.db_path)
        return cls(
            SqlBookRepository(engine),
            SqlRentalLedger(engine),
            lending=settings.lending,
            engine=engine,
        )

    @property
    def catalog(self) -> BookRepository:
        return self._catalog

    @property
    def ledger(self) -> RentalLedger:
        return self._ledger

    @property
    def lending(self) -> LendingConfig:
        return self._lending

    def close(self) -> None:
        """Release the database engine, if any."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
