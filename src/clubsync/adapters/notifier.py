"""Notifier that records outcomes and reports them through logging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.model import OutcomeEvent, OutcomeKind

if TYPE_CHECKING:
    from clubsync.domain.model import AccountRecord, ImportedMember, LedgerEntry

log = getLogger(__name__)

INVALID_RECOVERY_PHONE = "Invalid recovery phone."


@dataclass(slots=True)
class RecordingNotifier:
    """Collects every outcome in ``events``; ``log_summary`` reports them."""

    events: list[OutcomeEvent] = field(default_factory=list[OutcomeEvent])

    # Reconciliation outcomes

    def join_succeeded(self, entry: LedgerEntry, record: AccountRecord) -> None:
        self._add(OutcomeKind.JOIN_SUCCEEDED, entry=entry, record=record)

    def join_failed(
        self, entry: LedgerEntry, record: AccountRecord | None, error: BaseException
    ) -> None:
        self._add(OutcomeKind.JOIN_FAILED, entry=entry, record=record, error=error)

    def renewed(self, entry: LedgerEntry, record: AccountRecord) -> None:
        self._add(OutcomeKind.RENEWED, entry=entry, record=record)

    def renew_failed(self, entry: LedgerEntry, record: AccountRecord, error: BaseException) -> None:
        self._add(OutcomeKind.RENEW_FAILED, entry=entry, record=record, error=error)

    def partial(self, entry: LedgerEntry, record: AccountRecord) -> None:
        self._add(OutcomeKind.PARTIAL, entry=entry, record=record)

    # Import outcomes

    def import_succeeded(self, member: ImportedMember, record: AccountRecord) -> None:
        self._add(OutcomeKind.IMPORT_SUCCEEDED, entry=member, record=record)

    def import_failed(
        self, member: ImportedMember, record: AccountRecord | None, error: BaseException
    ) -> None:
        self._add(OutcomeKind.IMPORT_FAILED, entry=member, record=record, error=error)

    # Expiry outcomes

    def expiring(self, record: AccountRecord, days: int) -> None:
        self._add(OutcomeKind.EXPIRING, record=record, days=days)

    def expired(self, record: AccountRecord) -> None:
        self._add(OutcomeKind.EXPIRED, record=record)

    def of_kind(self, kind: OutcomeKind) -> list[OutcomeEvent]:
        return [event for event in self.events if event.kind is kind]

    def clear(self) -> None:
        self.events.clear()

    def log_summary(self, logger: logging.Logger | None = None) -> None:
        target = logger or log
        for event in self.events:
            flagged = event.is_failure or event.kind is OutcomeKind.PARTIAL
            level = logging.ERROR if flagged else logging.INFO
            target.log(level, describe_event(event))

    def _add(
        self,
        kind: OutcomeKind,
        *,
        entry: LedgerEntry | ImportedMember | None = None,
        record: AccountRecord | None = None,
        error: BaseException | None = None,
        days: int | None = None,
    ) -> None:
        self.events.append(
            OutcomeEvent(kind=kind, entry=entry, record=record, error=error, days=days)
        )


def describe_event(event: OutcomeEvent) -> str:
    text = event.describe()
    if event.error is not None and str(event.error).endswith(INVALID_RECOVERY_PHONE):
        phone = event.record.recovery_phone if event.record is not None else ""
        if not phone and event.entry is not None:
            phone = event.entry.phone
        text = f"{text} ({phone})"
    return text


if TYPE_CHECKING:
    from clubsync.domain.ports import ExpirationNotifier, ImportNotifier, Notifier

    _notifier_check: Notifier = RecordingNotifier()
    _import_check: ImportNotifier = RecordingNotifier()
    _expiry_check: ExpirationNotifier = RecordingNotifier()
