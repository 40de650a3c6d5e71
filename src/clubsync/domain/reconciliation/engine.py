"""Batch reconciliation of ledger entries against the directory."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.errors import DirectoryError, DirectoryErrorKind
from clubsync.domain.model import AccountRecord, OutcomeEvent, OutcomeKind
from clubsync.domain.reconciliation.matching import Classification, classify
from clubsync.domain.retry import RetryExhaustedError, retry_on_specific_error

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from clubsync.config import DirectoryConfig, ReconcileConfig
    from clubsync.domain.model import LedgerEntry
    from clubsync.domain.ports import Directory, Notifier
    from clubsync.domain.retry import Sleep

log = getLogger(__name__)

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True, kw_only=True)
class EngineSettings:
    domain: str
    org_unit_path: str
    groups: tuple[str, ...] = ()
    phone_prefix: str = "+1"
    max_generation_attempts: int = 100
    creation_pending_max_attempts: int = 20
    creation_pending_backoff_seconds: float = 0.25

    @classmethod
    def from_config(cls, directory: DirectoryConfig, reconcile: ReconcileConfig) -> EngineSettings:
        return cls(
            domain=directory.domain,
            org_unit_path=directory.org_unit_path,
            groups=directory.groups,
            phone_prefix=directory.phone_prefix,
            max_generation_attempts=reconcile.max_generation_attempts,
            creation_pending_max_attempts=reconcile.creation_pending_max_attempts,
            creation_pending_backoff_seconds=reconcile.creation_pending_backoff_seconds,
        )


@dataclass(slots=True)
class BatchResult:
    """Everything that happened to one batch, in processing order."""

    events: list[OutcomeEvent] = field(default_factory=list[OutcomeEvent])
    skipped: int = 0
    errors: list[BaseException] = field(default_factory=list[BaseException])

    def record(self, event: OutcomeEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: OutcomeKind) -> list[OutcomeEvent]:
        return [event for event in self.events if event.kind is kind]

    @property
    def joined(self) -> int:
        return len(self.of_kind(OutcomeKind.JOIN_SUCCEEDED))

    @property
    def renewed(self) -> int:
        return len(self.of_kind(OutcomeKind.RENEWED))

    @property
    def partial(self) -> int:
        return len(self.of_kind(OutcomeKind.PARTIAL))

    @property
    def failed(self) -> int:
        return sum(1 for event in self.events if event.is_failure)

    def summary(self) -> str:
        return (
            f"joined={self.joined} renewed={self.renewed} partial={self.partial} "
            f"failed={self.failed} skipped={self.skipped}"
        )


class ReconciliationEngine:
    """Apply paid, unprocessed ledger entries to the directory.

    The engine loads the directory once per batch and keeps that snapshot up to
    date with its own writes, so an entry later in the batch sees accounts
    created or renewed earlier in the same batch. The only mutation it makes to
    an entry is the processed stamp; persisting that stamp is the caller's job.
    """

    def __init__(
        self,
        directory: Directory,
        notifier: Notifier,
        settings: EngineSettings,
        clock: Clock = utc_now,
        *,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.directory = directory
        self.notifier = notifier
        self.settings = settings
        self.clock = clock
        self._sleep = sleep

    def process_batch(self, entries: Iterable[LedgerEntry]) -> BatchResult:
        result = BatchResult()
        eligible: list[LedgerEntry] = []
        for entry in entries:
            if entry.is_eligible:
                eligible.append(entry)
            else:
                result.skipped += 1

        if not eligible:
            log.info("No eligible ledger entries (%d skipped)", result.skipped)
            return result

        # a listing failure is fatal to the whole batch
        snapshot = self.directory.list_all()
        log.info(
            "Reconciling %d ledger entries against %d directory records",
            len(eligible),
            len(snapshot),
        )

        for entry in eligible:
            try:
                self._process_entry(entry, snapshot, result)
            except Exception as exc:
                log.exception("Unexpected failure while processing %s", entry.describe())
                result.errors.append(exc)

        log.info("Batch finished: %s", result.summary())
        return result

    def _process_entry(
        self,
        entry: LedgerEntry,
        snapshot: list[AccountRecord],
        result: BatchResult,
    ) -> None:
        decision = classify(entry, snapshot, phone_prefix=self.settings.phone_prefix)
        log.info("%s classified as %s", entry.describe(), decision.classification)

        match decision.classification:
            case Classification.JOIN:
                self._join(entry, snapshot, result)
            case Classification.RENEW:
                self._renew(entry, decision.record, snapshot, result)
            case Classification.PARTIAL:
                self._partial(entry, decision.records, result)

    # -- join -------------------------------------------------------------

    def _join(self, entry: LedgerEntry, snapshot: list[AccountRecord], result: BatchResult) -> None:
        record = AccountRecord.from_entry(
            entry,
            domain=self.settings.domain,
            org_unit_path=self.settings.org_unit_path,
            phone_prefix=self.settings.phone_prefix,
            today=self._today(),
        )
        try:
            created = create_with_generation(
                self.directory,
                record,
                max_attempts=self.settings.max_generation_attempts,
            )
        except Exception as exc:
            log.error("Join failed for %s: %s", entry.describe(), exc)
            self.notifier.join_failed(entry, record, exc)
            result.record(
                OutcomeEvent(kind=OutcomeKind.JOIN_FAILED, entry=entry, record=record, error=exc)
            )
            return

        snapshot.append(created)

        try:
            register_groups(self.directory, created, self.settings.groups)
        except Exception as exc:
            # the account exists but the entry stays unprocessed
            log.error(
                "Created %s but group registration failed: %s", created.primary_identifier, exc
            )
            self.notifier.join_failed(entry, created, exc)
            result.record(
                OutcomeEvent(kind=OutcomeKind.JOIN_FAILED, entry=entry, record=created, error=exc)
            )
            return

        entry.mark_processed(self.clock())
        log.info("Created %s for %s", created.primary_identifier, entry.describe())
        self.notifier.join_succeeded(entry, created)
        result.record(OutcomeEvent(kind=OutcomeKind.JOIN_SUCCEEDED, entry=entry, record=created))

    # -- renew ------------------------------------------------------------

    def _renew(
        self,
        entry: LedgerEntry,
        original: AccountRecord,
        snapshot: list[AccountRecord],
        result: BatchResult,
    ) -> None:
        renewed = original.copy().increment_expiration_date()
        renewed.listed_in_directory = entry.listed_in_directory
        if entry.override_address:
            renewed.replace_home_address(entry.override_address)

        try:
            stored = retry_on_specific_error(
                lambda: self.directory.update(renewed),
                DirectoryErrorKind.CREATION_PENDING,
                backoff_seconds=self.settings.creation_pending_backoff_seconds,
                max_attempts=self.settings.creation_pending_max_attempts,
                sleep=self._sleep,
            )
        except Exception as exc:
            log.error("Renewal failed for %s: %s", entry.describe(), exc)
            self.notifier.renew_failed(entry, original, exc)
            result.record(
                OutcomeEvent(kind=OutcomeKind.RENEW_FAILED, entry=entry, record=original, error=exc)
            )
            return

        _replace_in_snapshot(snapshot, stored)
        entry.mark_processed(self.clock())
        log.info(
            "Renewed %s until %s",
            stored.primary_identifier,
            stored.membership.expires_on.isoformat(),
        )
        self.notifier.renewed(entry, stored)
        result.record(OutcomeEvent(kind=OutcomeKind.RENEWED, entry=entry, record=stored))

    # -- partial ----------------------------------------------------------

    def _partial(
        self,
        entry: LedgerEntry,
        records: Sequence[AccountRecord],
        result: BatchResult,
    ) -> None:
        for record in records:
            log.warning(
                "%s only partially matches %s; left for review",
                entry.describe(),
                record.primary_identifier,
            )
            self.notifier.partial(entry, record)
            result.record(OutcomeEvent(kind=OutcomeKind.PARTIAL, entry=entry, record=record))

    def _today(self) -> date:
        return self.clock().date()


def create_with_generation(
    directory: Directory,
    record: AccountRecord,
    *,
    max_attempts: int,
) -> AccountRecord:
    """Create ``record``, bumping its generation on every identifier collision."""

    last_error: DirectoryError | None = None
    for _ in range(max_attempts):
        try:
            return directory.create(record)
        except DirectoryError as exc:
            if exc.kind is not DirectoryErrorKind.ALREADY_EXISTS:
                raise
            last_error = exc
            log.info("%s is taken; trying the next generation", record.primary_identifier)
            record.increment_generation()
    raise RetryExhaustedError(
        f"No free identifier for {record.name.full} after {max_attempts} attempts",
        attempts=max_attempts,
        last_error=last_error,
    )


def register_groups(directory: Directory, record: AccountRecord, groups: Iterable[str]) -> None:
    for group in groups:
        directory.add_to_group(record, group)
        log.info("Added %s to %s", record.home_address, group)


def _replace_in_snapshot(snapshot: list[AccountRecord], record: AccountRecord) -> None:
    for index, existing in enumerate(snapshot):
        if existing.same_account(record):
            snapshot[index] = record
            return
    snapshot.append(record)
