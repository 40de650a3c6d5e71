"""SQLAlchemy adapter package for the ledger."""

from __future__ import annotations

from .mappings import create_all_tables, ledger_entry_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyLedgerRepository
from .unit_of_work import (
    SqlAlchemyLedgerUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyLedgerUnitOfWork",
    "StartupError",
    "create_all_tables",
    "is_started",
    "ledger_entry_table",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
