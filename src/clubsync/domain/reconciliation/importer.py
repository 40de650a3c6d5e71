"""Creating accounts for members who predate the ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.model import AccountRecord, OutcomeEvent, OutcomeKind, normalize_phone
from clubsync.domain.reconciliation.engine import create_with_generation, register_groups
from clubsync.domain.reconciliation.matching import match_values, record_values

if TYPE_CHECKING:
    from collections.abc import Iterable

    from clubsync.domain.model import ImportedMember
    from clubsync.domain.ports import Directory, ImportNotifier
    from clubsync.domain.reconciliation.engine import EngineSettings

log = getLogger(__name__)


@dataclass(slots=True)
class ImportResult:
    events: list[OutcomeEvent] = field(default_factory=list[OutcomeEvent])
    skipped: list[ImportedMember] = field(default_factory=list["ImportedMember"])

    @property
    def imported(self) -> int:
        return sum(1 for event in self.events if event.kind is OutcomeKind.IMPORT_SUCCEEDED)

    @property
    def failed(self) -> int:
        return sum(1 for event in self.events if event.is_failure)


class MemberImporter:
    """Create directory accounts from imported member rows.

    Rows that match any existing account (full or partial) are skipped, so
    running the same import twice creates nothing the second time.
    """

    def __init__(
        self,
        directory: Directory,
        notifier: ImportNotifier,
        settings: EngineSettings,
    ) -> None:
        self.directory = directory
        self.notifier = notifier
        self.settings = settings

    def import_members(self, members: Iterable[ImportedMember]) -> ImportResult:
        result = ImportResult()
        snapshot = self.directory.list_all()
        for member in members:
            if self._already_present(member, snapshot):
                log.info("Skipping %s: already in the directory", member.describe())
                result.skipped.append(member)
                continue
            created = self._import_one(member, result)
            if created is not None:
                snapshot.append(created)
        log.info(
            "Import finished: imported=%d failed=%d skipped=%d",
            result.imported,
            result.failed,
            len(result.skipped),
        )
        return result

    def _import_one(self, member: ImportedMember, result: ImportResult) -> AccountRecord | None:
        record = AccountRecord.from_imported(
            member,
            domain=self.settings.domain,
            org_unit_path=self.settings.org_unit_path,
            phone_prefix=self.settings.phone_prefix,
        )
        try:
            created = create_with_generation(
                self.directory,
                record,
                max_attempts=self.settings.max_generation_attempts,
            )
            register_groups(self.directory, created, self.settings.groups)
        except Exception as exc:
            log.error("Import failed for %s: %s", member.describe(), exc)
            self.notifier.import_failed(member, record, exc)
            result.events.append(
                OutcomeEvent(kind=OutcomeKind.IMPORT_FAILED, entry=member, record=record, error=exc)
            )
            return None

        self.notifier.import_succeeded(member, created)
        result.events.append(
            OutcomeEvent(kind=OutcomeKind.IMPORT_SUCCEEDED, entry=member, record=created)
        )
        return created

    def _already_present(self, member: ImportedMember, snapshot: Iterable[AccountRecord]) -> bool:
        values = (member.home_address, normalize_phone(member.phone, self.settings.phone_prefix))
        return any(
            match_values(values, record_values(record, self.settings.phone_prefix))
            for record in snapshot
        )
