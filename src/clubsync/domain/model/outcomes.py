"""Outcome events emitted while reconciling, importing and checking expiry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from clubsync.domain.model.enums import OutcomeKind

if TYPE_CHECKING:
    from clubsync.domain.model.account import AccountRecord
    from clubsync.domain.model.ledger import ImportedMember, LedgerEntry


@dataclass(slots=True, frozen=True, kw_only=True)
class OutcomeEvent:
    kind: OutcomeKind
    entry: LedgerEntry | ImportedMember | None = None
    record: AccountRecord | None = None
    error: BaseException | None = None
    days: int | None = None

    @property
    def is_failure(self) -> bool:
        return self.kind.is_failure

    def describe(self) -> str:
        parts = [str(self.kind)]
        if self.entry is not None:
            parts.append(self.entry.describe())
        if self.record is not None:
            parts.append(f"-> {self.record.primary_identifier}")
        if self.days is not None:
            parts.append(f"in {self.days} days")
        if self.error is not None:
            parts.append(f": {self.error}")
        return " ".join(parts)
