"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ContactType(StrEnum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class PhoneType(StrEnum):
    MOBILE = "mobile"
    HOME = "home"
    WORK = "work"


class MembershipType(StrEnum):
    """Well-known membership types. Imported records may carry others verbatim."""

    INDIVIDUAL = "Individual"
    FAMILY = "Family"


class OutcomeKind(StrEnum):
    JOIN_SUCCEEDED = "join_succeeded"
    JOIN_FAILED = "join_failed"
    RENEWED = "renewed"
    RENEW_FAILED = "renew_failed"
    PARTIAL = "partial"

    # Member import and expiry runs
    IMPORT_SUCCEEDED = "import_succeeded"
    IMPORT_FAILED = "import_failed"
    EXPIRING = "expiring"
    EXPIRED = "expired"

    @property
    def is_failure(self) -> bool:
        return self in _FAILURES


_FAILURES = frozenset(
    {OutcomeKind.JOIN_FAILED, OutcomeKind.RENEW_FAILED, OutcomeKind.IMPORT_FAILED}
)
