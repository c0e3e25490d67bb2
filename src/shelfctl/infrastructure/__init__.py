"""Infrastructure layer — catalog/ledger storage, locking, SQLite engine.

Repositories here implement the contracts in
:mod:`shelfctl.infrastructure.repositories.contracts` and speak in domain
records. They must never import from services, commands, or output.
"""
