"""Tabular membership report."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from clubsync.domain.model import AccountRecord, MemberReport

REPORT_COLUMNS: Final[tuple[str, ...]] = (
    "primary",
    "email",
    "phone",
    "First",
    "Last",
    "Joined",
    "Expires",
    "Membership Type",
    "Family",
)


def membership_report(records: Iterable[AccountRecord]) -> list[MemberReport]:
    """Report rows sorted by family label (members without one first), then given name."""

    rows = [record.report() for record in records]
    return sorted(rows, key=lambda row: ((row.family or "").casefold(), row.first.casefold()))


def report_row(row: MemberReport) -> dict[str, str]:
    values = (
        row.primary,
        row.email,
        row.phone,
        row.first,
        row.last,
        row.joined,
        row.expires,
        row.membership_type,
        row.family or "",
    )
    return dict(zip(REPORT_COLUMNS, values, strict=True))
