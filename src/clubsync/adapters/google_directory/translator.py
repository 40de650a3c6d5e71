"""Translate Directory API user payloads to and from account records."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from clubsync.domain.model import (
    AccountRecord,
    ContactAddress,
    ContactType,
    MembershipAttributes,
    PersonName,
    PhoneNumber,
    PhoneType,
)

from .schema import (
    EmailPayload,
    MembershipSchemaPayload,
    NamePayload,
    PhonePayload,
    UserPayload,
)

if TYPE_CHECKING:
    from clubsync.config import DirectoryConfig


def parse_user(payload: UserPayload, *, config: DirectoryConfig) -> AccountRecord:
    """Build an account record from a user payload.

    Raises ``ValueError`` for users without the membership schema, which are
    accounts this system does not manage.
    """

    membership = payload.custom_schemas.get(config.schema_name)
    if membership is None:
        raise ValueError(
            f"User {payload.primary_email} has no {config.schema_name} custom schema"
        )

    given = payload.name.given_name.strip()
    family = payload.name.family_name.strip()
    primary = payload.primary_email.strip().lower()
    domain = primary.rpartition("@")[2] or config.domain

    contacts = [
        ContactAddress(
            address=email.address,
            type=_contact_type(email.type),
            primary=bool(email.primary),
        )
        for email in payload.emails
    ]
    phones = [
        PhoneNumber(value=phone.value, type=_phone_type(phone.type)) for phone in payload.phones
    ]

    return AccountRecord(
        domain=domain,
        name=PersonName(given=given, family=family, full=payload.name.full_name or ""),
        membership=MembershipAttributes(
            joined_on=membership.join_date,
            expires_on=membership.expires,
            membership_type=membership.membership_type,
            family=membership.family,
        ),
        org_unit_path=payload.org_unit_path,
        generation=infer_generation(primary, given, family),
        primary_identifier=primary,
        contacts=contacts,
        phones=phones,
        recovery_email=payload.recovery_email or "",
        recovery_phone=payload.recovery_phone or "",
        # users listed before the flag existed default to listed
        listed_in_directory=(
            True
            if payload.include_in_global_address_list is None
            else payload.include_in_global_address_list
        ),
    )


def build_user_payload(record: AccountRecord, *, config: DirectoryConfig) -> UserPayload:
    membership = MembershipSchemaPayload(
        expires=record.membership.expires_on,
        join_date=record.membership.joined_on,
        membership_type=record.membership.membership_type,
        family=record.membership.family,
    )
    return UserPayload(
        primary_email=record.primary_identifier,
        name=NamePayload(
            given_name=record.name.given,
            family_name=record.name.family,
            full_name=record.name.full,
        ),
        emails=[
            EmailPayload(
                address=contact.address,
                type=str(contact.type) if contact.type is not None else None,
                primary=True if contact.primary else None,
            )
            for contact in record.contacts
        ],
        phones=[
            PhonePayload(value=phone.value, type=str(phone.type))
            for phone in record.phones
            if phone.value
        ],
        org_unit_path=record.org_unit_path,
        recovery_email=record.recovery_email or None,
        recovery_phone=record.recovery_phone or None,
        include_in_global_address_list=record.listed_in_directory,
        custom_schemas={config.schema_name: membership},
    )


def infer_generation(primary: str, given: str, family: str) -> int:
    local = primary.partition("@")[0]
    stem = f"{given}.{family}".lower()
    if not local.startswith(stem):
        return 0
    suffix = local[len(stem) :]
    if re.fullmatch(r"[1-9]\d*", suffix):
        return int(suffix)
    return 0


def _contact_type(value: str | None) -> ContactType | None:
    if value is None:
        return None
    try:
        return ContactType(value)
    except ValueError:
        return ContactType.OTHER


def _phone_type(value: str | None) -> PhoneType:
    try:
        return PhoneType(value or PhoneType.MOBILE)
    except ValueError:
        return PhoneType.HOME
