"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.adapters.google_directory import AdminDirectoryClient, GoogleDirectory
from clubsync.adapters.ledger_file import read_ledger, read_members
from clubsync.adapters.memory import InMemoryDirectory
from clubsync.adapters.notifier import RecordingNotifier
from clubsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLedgerUnitOfWork,
    is_started,
    startup,
)
from clubsync.config import (
    get_directory_config,
    get_expiration_config,
    get_google_directory_config,
    get_reconcile_config,
)
from clubsync.domain.expiration import ExpirationChecker
from clubsync.domain.ports import LedgerUnitOfWork
from clubsync.domain.reconciliation import EngineSettings, MemberImporter, ReconciliationEngine
from clubsync.domain.reconciliation.engine import utc_now
from clubsync.domain.report import membership_report as build_membership_report

if TYPE_CHECKING:
    from datetime import date
    from pathlib import Path

    from clubsync.config import DirectoryConfig, ExpirationConfig, ReconcileConfig
    from clubsync.domain.model import MemberReport, OutcomeEvent
    from clubsync.domain.ports import Directory
    from clubsync.domain.reconciliation import BatchResult, ImportResult
    from clubsync.domain.reconciliation.engine import Clock

UnitOfWorkFactory = Callable[[], LedgerUnitOfWork]


log = getLogger(__name__)


def _ensure_storage() -> None:
    if not is_started():
        startup()


def build_google_directory(
    *,
    directory_config: DirectoryConfig | None = None,
    reconcile_config: ReconcileConfig | None = None,
) -> GoogleDirectory:
    config = directory_config or get_directory_config()
    client = AdminDirectoryClient(get_google_directory_config(), customer=config.customer)
    return GoogleDirectory(client, config, reconcile_config or get_reconcile_config())


def reconcile_ledger(
    *,
    directory: Directory | None = None,
    notifier: RecordingNotifier | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    directory_config: DirectoryConfig | None = None,
    reconcile_config: ReconcileConfig | None = None,
    dry_run: bool = False,
    clock: Clock = utc_now,
) -> BatchResult:
    """Apply every unprocessed ledger entry to the directory.

    With ``dry_run`` the engine works against an in-memory copy of the live
    directory and no processed stamps are committed.
    """

    directory_config = directory_config or get_directory_config()
    reconcile_config = reconcile_config or get_reconcile_config()
    if unit_of_work_factory is None:
        _ensure_storage()
        unit_of_work_factory = SqlAlchemyLedgerUnitOfWork
    effective_directory = directory or build_google_directory(
        directory_config=directory_config, reconcile_config=reconcile_config
    )
    if dry_run:
        effective_directory = InMemoryDirectory(effective_directory.list_all())
    effective_notifier = notifier or RecordingNotifier()

    engine = ReconciliationEngine(
        effective_directory,
        effective_notifier,
        EngineSettings.from_config(directory_config, reconcile_config),
        clock,
    )
    log.info("Starting reconciliation (dry_run=%s)", dry_run)

    with unit_of_work_factory() as uow:
        entries = list(uow.repositories.ledger.list(only_unprocessed=True))
        result = engine.process_batch(entries)
        if dry_run:
            uow.rollback()
        else:
            uow.commit()

    effective_notifier.log_summary()
    log.info("Finished reconciliation: %s", result.summary())
    return result


def load_ledger_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Store new rows from a ledger CSV; rows whose transaction id is known are skipped."""

    entries = read_ledger(path)
    if unit_of_work_factory is None:
        _ensure_storage()
        unit_of_work_factory = SqlAlchemyLedgerUnitOfWork

    added = 0
    with unit_of_work_factory() as uow:
        ledger = uow.repositories.ledger
        for entry in entries:
            if entry.transaction_id and ledger.get_by_transaction_id(entry.transaction_id):
                log.info("Skipping known transaction %s", entry.transaction_id)
                continue
            ledger.add(entry)
            added += 1
        uow.commit()

    log.info("Loaded %d of %d ledger rows from %s", added, len(entries), path)
    return added


def import_members(
    path: Path,
    *,
    directory: Directory | None = None,
    notifier: RecordingNotifier | None = None,
    directory_config: DirectoryConfig | None = None,
    reconcile_config: ReconcileConfig | None = None,
) -> ImportResult:
    directory_config = directory_config or get_directory_config()
    reconcile_config = reconcile_config or get_reconcile_config()
    effective_directory = directory or build_google_directory(
        directory_config=directory_config, reconcile_config=reconcile_config
    )
    effective_notifier = notifier or RecordingNotifier()

    importer = MemberImporter(
        effective_directory,
        effective_notifier,
        EngineSettings.from_config(directory_config, reconcile_config),
    )
    result = importer.import_members(read_members(path))
    effective_notifier.log_summary()
    return result


def check_expirations(
    *,
    directory: Directory | None = None,
    notifier: RecordingNotifier | None = None,
    directory_config: DirectoryConfig | None = None,
    expiration_config: ExpirationConfig | None = None,
    today: Callable[[], date] | None = None,
) -> list[OutcomeEvent]:
    """Send expiry warnings; members expiring today also leave the configured groups."""

    directory_config = directory_config or get_directory_config()
    config = expiration_config or get_expiration_config()
    effective_directory = directory or build_google_directory(directory_config=directory_config)
    effective_notifier = notifier or RecordingNotifier()

    checker = ExpirationChecker(
        effective_notifier,
        warning_days=config.warning_days,
        directory=effective_directory,
        groups=directory_config.groups,
    )
    if today is not None:
        checker.today = today
    events = checker.check_all(effective_directory.list_all())
    effective_notifier.log_summary()
    log.info("Expiry check finished: %d notifications", len(events))
    return events


def membership_report(*, directory: Directory | None = None) -> list[MemberReport]:
    effective_directory = directory or build_google_directory()
    return build_membership_report(effective_directory.list_all())
