from __future__ import annotations

import io
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

import pytest

from clubsync.adapters.ledger_file import (
    LedgerFileError,
    parse_ledger,
    parse_members,
    read_ledger,
    write_report,
)
from clubsync.domain.report import membership_report
from tests.helpers.ledger import make_record

if TYPE_CHECKING:
    from pathlib import Path

LEDGER_HEADER = ",".join(
    (
        "First Name",
        "Last Name",
        "Email Address",
        "Phone Number",
        "Payable Status",
        "In Directory",
        "Processed",
        "New Email Address",
        "Payable Transaction ID",
    )
)

LEDGER_CSV = f"""\
{LEDGER_HEADER}
 Jane,Kane,jane@home.example,4085550001,Paid,TRUE,,,T-1
Ann,Lee,ann@home.example,,Pending,no,2025-01-05T10:00:00+00:00,ann@new.example,T-2
,,,,,,,,
"""

MEMBERS_CSV = """\
First Name,Last Name,Email Address,Phone Number,In Directory,Joined,Expires,Membership Type,Family
Olga,Petrov,olga@home.example,4085550100,yes,2019-01-15,2025-01-15,Family,
Ivan,Petrov,ivan@home.example,,,2019-01-15,2025-01-15,,
"""


def test_parse_ledger_rows() -> None:
    entries = parse_ledger(io.StringIO(LEDGER_CSV))

    assert len(entries) == 2
    jane, ann = entries
    assert jane.given_name == "Jane"
    assert jane.is_eligible
    assert jane.listed_in_directory is True
    assert jane.override_address is None
    assert jane.transaction_id == "T-1"
    assert ann.listed_in_directory is False
    assert ann.processed == datetime(2025, 1, 5, 10, 0, tzinfo=UTC)
    assert ann.override_address == "ann@new.example"
    assert ann.phone == ""


def test_parse_ledger_reports_bad_row_line() -> None:
    text = "First Name,Last Name,Email Address\nJane,,jane@home.example\n"

    with pytest.raises(LedgerFileError) as excinfo:
        parse_ledger(io.StringIO(text))

    assert excinfo.value.line == 2


def test_parse_members() -> None:
    olga, ivan = parse_members(io.StringIO(MEMBERS_CSV))

    assert olga.joined_on == date(2019, 1, 15)
    assert olga.expires_on == date(2025, 1, 15)
    assert olga.membership_type == "Family"
    assert olga.family_label is None
    assert ivan.membership_type == "Individual"
    assert ivan.listed_in_directory is True


def test_parse_members_requires_dates() -> None:
    text = "First Name,Last Name,Email Address,Joined,Expires\nOlga,Petrov,o@x.com,,\n"

    with pytest.raises(LedgerFileError):
        parse_members(io.StringIO(text))


def test_read_ledger_from_path(tmp_path: Path) -> None:
    path = tmp_path / "ledger.csv"
    path.write_text("\ufeff" + LEDGER_CSV, encoding="utf-8")

    assert [entry.transaction_id for entry in read_ledger(path)] == ["T-1", "T-2"]


def test_write_report() -> None:
    stream = io.StringIO()

    count = write_report(membership_report([make_record()]), stream)

    lines = stream.getvalue().splitlines()
    assert count == 1
    assert lines[0] == "primary,email,phone,First,Last,Joined,Expires,Membership Type,Family"
    assert lines[1].startswith("jane.kane@club.example.org,jane@home.example,+14085550001,Jane")
