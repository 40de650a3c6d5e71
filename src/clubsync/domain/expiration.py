"""Membership expiry warnings and group removal on expiry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.errors import DirectoryError
from clubsync.domain.model import OutcomeEvent, OutcomeKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import date

    from clubsync.domain.model import AccountRecord
    from clubsync.domain.ports import Directory, ExpirationNotifier

log = getLogger(__name__)


def _today() -> date:
    return datetime.now(UTC).date()


@dataclass(slots=True)
class ExpirationChecker:
    """Notify members whose membership expires on one of the warning days.

    A record expiring exactly ``n`` days from today gets ``expiring(record, n)``
    for every ``n`` in ``warning_days``; a record expiring today is taken out of
    ``groups`` and gets ``expired``. Records that expired earlier were already
    handled and are left alone.

    A failed group removal does not stop the run: the error is logged and
    carried on the ``EXPIRED`` event, and the member is still notified.
    """

    notifier: ExpirationNotifier
    warning_days: tuple[int, ...] = (30, 7, 1)
    today: Callable[[], date] = field(default=_today)
    directory: Directory | None = None
    groups: tuple[str, ...] = ()

    def check(self, record: AccountRecord) -> OutcomeEvent | None:
        remaining = (record.membership.expires_on - self.today()).days
        if remaining == 0:
            log.info("%s expired today", record.primary_identifier)
            error = self._leave_groups(record)
            self.notifier.expired(record)
            return OutcomeEvent(kind=OutcomeKind.EXPIRED, record=record, error=error)
        if remaining in self.warning_days:
            log.info("%s expires in %d days", record.primary_identifier, remaining)
            self.notifier.expiring(record, remaining)
            return OutcomeEvent(kind=OutcomeKind.EXPIRING, record=record, days=remaining)
        return None

    def check_all(self, records: Iterable[AccountRecord]) -> list[OutcomeEvent]:
        events: list[OutcomeEvent] = []
        for record in records:
            event = self.check(record)
            if event is not None:
                events.append(event)
        return events

    def _leave_groups(self, record: AccountRecord) -> DirectoryError | None:
        if self.directory is None:
            return None
        failure: DirectoryError | None = None
        for group in self.groups:
            try:
                self.directory.remove_from_group(record, group)
            except DirectoryError as exc:
                log.error("Removing %s from %s failed: %s", record.home_address, group, exc)
                failure = exc
        return failure
