from __future__ import annotations

import logging

import pytest

from clubsync.adapters.notifier import RecordingNotifier
from clubsync.domain.errors import DirectoryError, DirectoryErrorKind
from clubsync.domain.model import OutcomeKind
from tests.helpers.ledger import make_entry, make_record


def test_events_are_recorded_in_order(notifier: RecordingNotifier) -> None:
    entry = make_entry()
    record = make_record()

    notifier.join_succeeded(entry, record)
    notifier.partial(entry, record)
    notifier.expiring(record, 7)

    assert [event.kind for event in notifier.events] == [
        OutcomeKind.JOIN_SUCCEEDED,
        OutcomeKind.PARTIAL,
        OutcomeKind.EXPIRING,
    ]
    assert notifier.of_kind(OutcomeKind.EXPIRING)[0].days == 7


def test_log_summary_levels(
    notifier: RecordingNotifier, caplog: pytest.LogCaptureFixture
) -> None:
    entry = make_entry()
    record = make_record()
    notifier.renewed(entry, record)
    notifier.renew_failed(entry, record, DirectoryError(DirectoryErrorKind.NOT_FOUND, "gone"))
    notifier.partial(entry, record)

    with caplog.at_level(logging.INFO, logger="clubsync.adapters.notifier"):
        notifier.log_summary()

    assert [rec.levelno for rec in caplog.records] == [logging.INFO, logging.ERROR, logging.ERROR]
    assert "renewed" in caplog.records[0].getMessage()
    assert "gone" in caplog.records[1].getMessage()


def test_invalid_recovery_phone_failures_include_the_number(
    notifier: RecordingNotifier, caplog: pytest.LogCaptureFixture
) -> None:
    entry = make_entry(phone="12")
    record = make_record(phone="12")
    error = DirectoryError(DirectoryErrorKind.UNCLASSIFIED, "Invalid recovery phone.")
    notifier.join_failed(entry, record, error)

    with caplog.at_level(logging.INFO, logger="clubsync.adapters.notifier"):
        notifier.log_summary()

    assert caplog.records[0].getMessage().endswith("(+112)")
