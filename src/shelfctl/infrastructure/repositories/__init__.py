"""Catalog and ledger implementations behind a shared contract."""

from shelfctl.infrastructure.repositories.contracts import BookRepository, RentalLedger
from shelfctl.infrastructure.repositories.memory import (
    InMemoryBookRepository,
    InMemoryRentalLedger,
)
from shelfctl.infrastructure.repositories.sql import SqlBookRepository, SqlRentalLedger

__all__ = [
    "BookRepository",
    "InMemoryBookRepository",
    "InMemoryRentalLedger",
    "RentalLedger",
    "SqlBookRepository",
    "SqlRentalLedger",
]
