"""Ledger-side records: paid transactions and imported member rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from datetime import date, datetime

PAID_STATUS_PREFIX = "paid"


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class LedgerEntry:
    """A payment record driving reconciliation.

    The engine never edits identity or payment fields; the only mutation it makes
    is setting ``processed`` once the entry has been applied to the directory.
    """

    id: UUID = field(default_factory=new_id)
    given_name: str
    family_name: str
    home_address: str
    phone: str = ""
    payment_status: str = ""
    listed_in_directory: bool = True
    override_address: str | None = None
    transaction_id: str | None = None
    processed: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status.strip().lower().startswith(PAID_STATUS_PREFIX)

    @property
    def is_processed(self) -> bool:
        return self.processed is not None

    @property
    def is_eligible(self) -> bool:
        """Paid and not yet applied."""
        return self.is_paid and not self.is_processed

    @property
    def contact_address(self) -> str:
        """Address to store on a newly created account."""
        return self.override_address or self.home_address

    def mark_processed(self, when: datetime) -> None:
        self.processed = when

    def describe(self) -> str:
        label = self.transaction_id or str(self.id)
        return f"{label} ({self.given_name} {self.family_name} <{self.home_address}>)"


@dataclass(eq=False, kw_only=True)
class ImportedMember:
    """A member who joined before the ledger existed, carrying their own dates."""

    given_name: str
    family_name: str
    home_address: str
    phone: str = ""
    joined_on: date
    expires_on: date
    membership_type: str
    family_label: str | None = None
    listed_in_directory: bool = True

    @property
    def contact_address(self) -> str:
        return self.home_address

    def describe(self) -> str:
        return f"{self.given_name} {self.family_name} <{self.home_address}>"
