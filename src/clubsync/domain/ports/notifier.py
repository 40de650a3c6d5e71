"""Ports for reporting outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clubsync.domain.model import AccountRecord, ImportedMember, LedgerEntry


@runtime_checkable
class Notifier(Protocol):
    """One callback per reconciliation outcome. Return values are ignored."""

    def join_succeeded(self, entry: LedgerEntry, record: AccountRecord) -> object: ...

    def join_failed(
        self, entry: LedgerEntry, record: AccountRecord | None, error: BaseException
    ) -> object: ...

    def renewed(self, entry: LedgerEntry, record: AccountRecord) -> object: ...

    def renew_failed(
        self, entry: LedgerEntry, record: AccountRecord, error: BaseException
    ) -> object: ...

    def partial(self, entry: LedgerEntry, record: AccountRecord) -> object: ...


@runtime_checkable
class ImportNotifier(Protocol):
    def import_succeeded(self, member: ImportedMember, record: AccountRecord) -> object: ...

    def import_failed(
        self, member: ImportedMember, record: AccountRecord | None, error: BaseException
    ) -> object: ...


@runtime_checkable
class ExpirationNotifier(Protocol):
    def expiring(self, record: AccountRecord, days: int) -> object: ...

    def expired(self, record: AccountRecord) -> object: ...


__all__ = ["ExpirationNotifier", "ImportNotifier", "Notifier"]
