"""Public domain model surface."""

from __future__ import annotations

from clubsync.domain.model.account import (
    AccountRecord,
    ContactAddress,
    MemberReport,
    MembershipAttributes,
    PersonName,
    PhoneNumber,
    add_one_year,
    derive_primary_identifier,
    normalize_phone,
)
from clubsync.domain.model.enums import ContactType, MembershipType, OutcomeKind, PhoneType
from clubsync.domain.model.ledger import ImportedMember, LedgerEntry
from clubsync.domain.model.outcomes import OutcomeEvent

__all__ = [
    "AccountRecord",
    "ContactAddress",
    "ContactType",
    "ImportedMember",
    "LedgerEntry",
    "MemberReport",
    "MembershipAttributes",
    "MembershipType",
    "OutcomeEvent",
    "OutcomeKind",
    "PersonName",
    "PhoneNumber",
    "PhoneType",
    "add_one_year",
    "derive_primary_identifier",
    "normalize_phone",
]
