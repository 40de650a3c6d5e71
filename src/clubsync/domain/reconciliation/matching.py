"""Entry-to-record matching and classification.

Each identity dimension is compared under the same rule table:

=============  =============  ========
entry value    record value   agrees
=============  =============  ========
empty          empty          yes
empty          present        yes
present        empty          yes
present        present        equal?
=============  =============  ========

A full match agrees on every dimension, a partial match on some but not all.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from clubsync.domain.model import normalize_phone

if TYPE_CHECKING:
    from collections.abc import Iterable

    from clubsync.domain.model import AccountRecord, LedgerEntry

type Normalizer = Callable[[str], str]


@dataclass(slots=True, frozen=True)
class Match:
    full: bool


type MatchResult = Match | Literal[False]


class Classification(StrEnum):
    JOIN = "join"
    RENEW = "renew"
    PARTIAL = "partial"


@dataclass(slots=True, frozen=True)
class Decision:
    classification: Classification
    records: tuple[AccountRecord, ...] = ()

    @property
    def record(self) -> AccountRecord:
        return self.records[0]


def _address_key(value: str) -> str:
    return value.strip().casefold()


def _phone_key(value: str) -> str:
    return value.strip()


def dimension_agrees(left: str, right: str, normalize: Normalizer = str.strip) -> bool:
    left_key = normalize(left) if left else ""
    right_key = normalize(right) if right else ""
    if not left_key or not right_key:
        return True
    return left_key == right_key


def match_values(
    left: tuple[str, str],
    right: tuple[str, str],
) -> MatchResult:
    """Compare ``(address, phone)`` pairs; symmetric in its arguments."""

    agreements = (
        dimension_agrees(left[0], right[0], _address_key),
        dimension_agrees(left[1], right[1], _phone_key),
    )
    if all(agreements):
        return Match(full=True)
    if any(agreements):
        return Match(full=False)
    return False


def record_values(record: AccountRecord, phone_prefix: str) -> tuple[str, str]:
    """``(address, phone)`` of a directory record, phone prefixed like ledger phones."""
    return record.home_address, normalize_phone(record.mobile_phone, phone_prefix)


def match(entry: LedgerEntry, record: AccountRecord, *, phone_prefix: str = "+1") -> MatchResult:
    entry_values = (entry.home_address, normalize_phone(entry.phone, phone_prefix))
    return match_values(entry_values, record_values(record, phone_prefix))


def classify(
    entry: LedgerEntry,
    records: Iterable[AccountRecord],
    *,
    phone_prefix: str = "+1",
) -> Decision:
    matches: list[tuple[AccountRecord, Match]] = []
    for record in records:
        result = match(entry, record, phone_prefix=phone_prefix)
        if result:
            matches.append((record, result))

    if not matches:
        return Decision(Classification.JOIN)
    if len(matches) == 1 and matches[0][1].full:
        return Decision(Classification.RENEW, (matches[0][0],))
    return Decision(Classification.PARTIAL, tuple(record for record, _ in matches))
