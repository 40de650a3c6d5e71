"""Account records: the engine's view of a directory subject.

An ``AccountRecord`` is created from a ledger entry (join), from an imported
member row (import), copied from an existing record (renewal), or translated
from a directory payload by an adapter. Two invariants hold after every
public operation:

- ``primary_identifier`` is ``lower(f"{given}.{family}{suffix}@{domain}")``,
  where the suffix is empty for generation 0 and the generation number otherwise.
- Exactly one contact is flagged primary and its address is the primary identifier.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from clubsync.domain.model.enums import ContactType, MembershipType, PhoneType

if TYPE_CHECKING:
    from clubsync.domain.model.ledger import ImportedMember, LedgerEntry


def derive_primary_identifier(given: str, family: str, generation: int, domain: str) -> str:
    suffix = str(generation) if generation else ""
    return f"{given}.{family}{suffix}@{domain}".strip().lower()


def normalize_phone(value: str, prefix: str) -> str:
    """Prefix a bare number with the country code; blank numbers stay blank."""

    phone = value.strip()
    if not phone or phone.startswith("+"):
        return phone
    return f"{prefix}{phone}"


def add_one_year(value: date) -> date:
    """Same month and day one year later; 29 February becomes 28 February."""

    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        return value.replace(year=value.year + 1, day=28)


@dataclass(slots=True)
class PersonName:
    given: str
    family: str
    full: str = ""

    def __post_init__(self) -> None:
        if not self.full:
            self.full = f"{self.given} {self.family}".strip()


@dataclass(slots=True)
class ContactAddress:
    address: str
    type: ContactType | None = None
    primary: bool = False


@dataclass(slots=True)
class PhoneNumber:
    value: str
    type: PhoneType = PhoneType.MOBILE


@dataclass(slots=True)
class MembershipAttributes:
    joined_on: date
    expires_on: date
    membership_type: str = MembershipType.INDIVIDUAL
    family: str | None = None


@dataclass(slots=True, frozen=True)
class MemberReport:
    primary: str
    email: str
    phone: str
    first: str
    last: str
    joined: str
    expires: str
    membership_type: str
    family: str | None


@dataclass(eq=False, kw_only=True)
class AccountRecord:
    domain: str
    name: PersonName
    membership: MembershipAttributes
    org_unit_path: str
    generation: int = 0
    primary_identifier: str = ""
    contacts: list[ContactAddress] = field(default_factory=list[ContactAddress])
    phones: list[PhoneNumber] = field(default_factory=list[PhoneNumber])
    recovery_email: str = ""
    recovery_phone: str = ""
    listed_in_directory: bool = True

    def __post_init__(self) -> None:
        if not self.primary_identifier:
            self.primary_identifier = derive_primary_identifier(
                self.name.given, self.name.family, self.generation, self.domain
            )
        else:
            self.primary_identifier = self.primary_identifier.strip().lower()
        self._sync_primary_contact()

    # -- construction -----------------------------------------------------

    @classmethod
    def from_entry(
        cls,
        entry: LedgerEntry,
        *,
        domain: str,
        org_unit_path: str,
        phone_prefix: str,
        today: date,
    ) -> AccountRecord:
        """Build the record a joining member should receive."""

        membership = MembershipAttributes(
            joined_on=today,
            expires_on=add_one_year(today),
            membership_type=MembershipType.INDIVIDUAL,
        )
        return cls._from_person(
            given=entry.given_name,
            family=entry.family_name,
            address=entry.contact_address,
            phone=entry.phone,
            membership=membership,
            listed=entry.listed_in_directory,
            domain=domain,
            org_unit_path=org_unit_path,
            phone_prefix=phone_prefix,
        )

    @classmethod
    def from_imported(
        cls,
        member: ImportedMember,
        *,
        domain: str,
        org_unit_path: str,
        phone_prefix: str,
    ) -> AccountRecord:
        """Build a record for a pre-existing member, keeping their own dates."""

        membership_type = member.membership_type.strip()
        family: str | None = None
        if membership_type == MembershipType.FAMILY:
            family = member.family_label or member.family_name.strip()
        membership = MembershipAttributes(
            joined_on=member.joined_on,
            expires_on=member.expires_on,
            membership_type=membership_type,
            family=family,
        )
        return cls._from_person(
            given=member.given_name,
            family=member.family_name,
            address=member.contact_address,
            phone=member.phone,
            membership=membership,
            listed=member.listed_in_directory,
            domain=domain,
            org_unit_path=org_unit_path,
            phone_prefix=phone_prefix,
        )

    @classmethod
    def _from_person(
        cls,
        *,
        given: str,
        family: str,
        address: str,
        phone: str,
        membership: MembershipAttributes,
        listed: bool,
        domain: str,
        org_unit_path: str,
        phone_prefix: str,
    ) -> AccountRecord:
        name = PersonName(given=given.strip(), family=family.strip())
        domain = domain.strip()
        primary = derive_primary_identifier(name.given, name.family, 0, domain)
        address = address.strip()
        mobile = normalize_phone(phone, phone_prefix)
        return cls(
            domain=domain,
            name=name,
            membership=membership,
            org_unit_path=org_unit_path.strip(),
            primary_identifier=primary,
            contacts=[
                ContactAddress(address=address, type=ContactType.HOME),
                ContactAddress(address=primary, primary=True),
            ],
            phones=[PhoneNumber(value=mobile, type=PhoneType.MOBILE)],
            recovery_email=address,
            recovery_phone=mobile,
            listed_in_directory=listed,
        )

    def copy(self) -> AccountRecord:
        """Deep copy; edits to the copy never reach the original."""
        return copy.deepcopy(self)

    # -- mutation ---------------------------------------------------------

    def increment_generation(self) -> AccountRecord:
        """Move to the next identifier candidate after a collision."""

        self.generation += 1
        self.primary_identifier = derive_primary_identifier(
            self.name.given, self.name.family, self.generation, self.domain
        )
        self._sync_primary_contact()
        return self

    def increment_expiration_date(self) -> AccountRecord:
        self.membership.expires_on = add_one_year(self.membership.expires_on)
        return self

    def replace_home_address(self, address: str) -> AccountRecord:
        address = address.strip()
        for contact in self.contacts:
            if contact.type == ContactType.HOME and not contact.primary:
                contact.address = address
                return self
        self.contacts.insert(0, ContactAddress(address=address, type=ContactType.HOME))
        return self

    def _sync_primary_contact(self) -> None:
        primaries = [contact for contact in self.contacts if contact.primary]
        if not primaries:
            self.contacts.append(ContactAddress(address=self.primary_identifier, primary=True))
            return
        primaries[0].address = self.primary_identifier
        for extra in primaries[1:]:
            extra.primary = False

    # -- accessors --------------------------------------------------------

    @property
    def home_address(self) -> str:
        for contact in self.contacts:
            if contact.type == ContactType.HOME and not contact.primary:
                return contact.address
        return ""

    @property
    def mobile_phone(self) -> str:
        for phone in self.phones:
            if phone.type == PhoneType.MOBILE:
                return phone.value
        return ""

    @property
    def primary_contact(self) -> ContactAddress:
        return next(contact for contact in self.contacts if contact.primary)

    def report(self) -> MemberReport:
        return MemberReport(
            primary=self.primary_identifier,
            email=self.home_address,
            phone=self.mobile_phone,
            first=self.name.given,
            last=self.name.family,
            joined=self.membership.joined_on.isoformat(),
            expires=self.membership.expires_on.isoformat(),
            membership_type=self.membership.membership_type,
            family=self.membership.family,
        )

    # -- identity ---------------------------------------------------------

    def same_account(self, other: AccountRecord) -> bool:
        return self.primary_identifier.lower() == other.primary_identifier.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountRecord):
            return NotImplemented
        return self.same_account(other)

    def __hash__(self) -> int:
        return hash(self.primary_identifier.lower())
