"""CSV ledger exports and member lists, validated with pydantic."""

from __future__ import annotations

import csv
from datetime import date, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from clubsync.domain.model import ImportedMember, LedgerEntry
from clubsync.domain.report import REPORT_COLUMNS, report_row

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path
    from typing import TextIO

    from clubsync.domain.model import MemberReport

log = getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "yes", "y", "1", "x"})
_FALSE_VALUES = frozenset({"false", "no", "n", "0"})


class LedgerFileError(ValueError):
    """Raised when a ledger or member file row cannot be parsed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message if line is None else f"line {line}: {message}")
        self.line = line


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _parse_flag(value: object) -> object:
    if not isinstance(value, str):
        return value
    text = value.strip().lower()
    if not text or text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return value


Text = Annotated[str, BeforeValidator(_strip)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
Flag = Annotated[bool, BeforeValidator(_parse_flag)]


class LedgerFileModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LedgerRow(LedgerFileModel):
    given_name: Text = Field(alias="First Name", min_length=1)
    family_name: Text = Field(alias="Last Name", min_length=1)
    home_address: Text = Field(alias="Email Address")
    phone: Text = Field(default="", alias="Phone Number")
    payment_status: Text = Field(default="", alias="Payable Status")
    listed_in_directory: Flag = Field(default=True, alias="In Directory")
    processed: Annotated[datetime | None, BeforeValidator(_blank_to_none)] = Field(
        default=None, alias="Processed"
    )
    override_address: OptionalText = Field(default=None, alias="New Email Address")
    transaction_id: OptionalText = Field(default=None, alias="Payable Transaction ID")

    def to_entry(self) -> LedgerEntry:
        return LedgerEntry(
            given_name=self.given_name,
            family_name=self.family_name,
            home_address=self.home_address,
            phone=self.phone,
            payment_status=self.payment_status,
            listed_in_directory=self.listed_in_directory,
            override_address=self.override_address,
            transaction_id=self.transaction_id,
            processed=self.processed,
        )


class MemberRow(LedgerFileModel):
    given_name: Text = Field(alias="First Name", min_length=1)
    family_name: Text = Field(alias="Last Name", min_length=1)
    home_address: Text = Field(alias="Email Address")
    phone: Text = Field(default="", alias="Phone Number")
    listed_in_directory: Flag = Field(default=True, alias="In Directory")
    joined_on: date = Field(alias="Joined")
    expires_on: date = Field(alias="Expires")
    membership_type: Text = Field(default="Individual", alias="Membership Type")
    family_label: OptionalText = Field(default=None, alias="Family")

    def to_member(self) -> ImportedMember:
        return ImportedMember(
            given_name=self.given_name,
            family_name=self.family_name,
            home_address=self.home_address,
            phone=self.phone,
            joined_on=self.joined_on,
            expires_on=self.expires_on,
            membership_type=self.membership_type or "Individual",
            family_label=self.family_label,
            listed_in_directory=self.listed_in_directory,
        )


def _rows(stream: TextIO) -> Iterator[tuple[int, dict[str, str]]]:
    reader = csv.DictReader(stream)
    for row in reader:
        if not any((value or "").strip() for value in row.values()):
            continue
        yield reader.line_num, {key: value for key, value in row.items() if key is not None}


def parse_ledger(stream: TextIO) -> list[LedgerEntry]:
    entries: list[LedgerEntry] = []
    for line, row in _rows(stream):
        try:
            entries.append(LedgerRow.model_validate(row).to_entry())
        except ValidationError as exc:
            raise LedgerFileError(str(exc), line=line) from exc
    log.info("Parsed %d ledger rows", len(entries))
    return entries


def parse_members(stream: TextIO) -> list[ImportedMember]:
    members: list[ImportedMember] = []
    for line, row in _rows(stream):
        try:
            members.append(MemberRow.model_validate(row).to_member())
        except ValidationError as exc:
            raise LedgerFileError(str(exc), line=line) from exc
    log.info("Parsed %d member rows", len(members))
    return members


def read_ledger(path: Path) -> list[LedgerEntry]:
    with path.open(newline="", encoding="utf-8-sig") as stream:
        return parse_ledger(stream)


def read_members(path: Path) -> list[ImportedMember]:
    with path.open(newline="", encoding="utf-8-sig") as stream:
        return parse_members(stream)


def write_report(rows: Iterable[MemberReport], stream: TextIO) -> int:
    writer = csv.DictWriter(stream, fieldnames=list(REPORT_COLUMNS))
    writer.writeheader()
    count = 0
    for row in rows:
        writer.writerow(report_row(row))
        count += 1
    return count
