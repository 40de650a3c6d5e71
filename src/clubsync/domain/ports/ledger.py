"""Persistence ports for the ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from clubsync.domain.model import LedgerEntry


@runtime_checkable
class LedgerRepository(Protocol):
    """Persistence contract for ledger entries."""

    def add(self, entry: LedgerEntry) -> None: ...

    def list(self, *, only_unprocessed: bool = False) -> Sequence[LedgerEntry]:
        """Entries in insertion order."""
        ...

    def get_by_transaction_id(self, transaction_id: str) -> LedgerEntry | None: ...


@dataclass(slots=True)
class LedgerRepositories:
    ledger: LedgerRepository


@runtime_checkable
class LedgerUnitOfWork(Protocol):
    """Transaction boundary around the ledger repositories."""

    @property
    def repositories(self) -> LedgerRepositories: ...

    def __enter__(self) -> LedgerUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


__all__ = ["LedgerRepositories", "LedgerRepository", "LedgerUnitOfWork"]
