"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import Directory
from .ledger import LedgerRepositories, LedgerRepository, LedgerUnitOfWork
from .notifier import ExpirationNotifier, ImportNotifier, Notifier

__all__ = [
    "Directory",
    "ExpirationNotifier",
    "ImportNotifier",
    "LedgerRepositories",
    "LedgerRepository",
    "LedgerUnitOfWork",
    "Notifier",
]
