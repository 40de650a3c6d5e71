from __future__ import annotations

from datetime import date

import pytest

from clubsync.domain.model import (
    AccountRecord,
    ContactType,
    add_one_year,
    derive_primary_identifier,
    normalize_phone,
)
from tests.helpers.ledger import DOMAIN, ORG_UNIT, TODAY, make_entry, make_member, make_record


def _from_entry(**kwargs: object) -> AccountRecord:
    entry = make_entry(**kwargs)  # pyright: ignore[reportArgumentType]
    return AccountRecord.from_entry(
        entry, domain=DOMAIN, org_unit_path=ORG_UNIT, phone_prefix="+1", today=TODAY
    )


def test_from_entry_derives_identifier_and_contacts() -> None:
    record = _from_entry(given=" Jane ", family="Kane ", address="jane@home.example")

    assert record.primary_identifier == f"jane.kane@{DOMAIN}"
    assert record.name.full == "Jane Kane"
    assert record.home_address == "jane@home.example"
    assert record.primary_contact.address == record.primary_identifier
    assert [contact.primary for contact in record.contacts] == [False, True]
    assert record.contacts[0].type is ContactType.HOME
    assert record.recovery_email == "jane@home.example"
    assert record.org_unit_path == ORG_UNIT


def test_from_entry_sets_membership_defaults() -> None:
    record = _from_entry()

    assert record.membership.joined_on == TODAY
    assert record.membership.expires_on == date(2026, 3, 10)
    assert record.membership.membership_type == "Individual"
    assert record.membership.family is None


def test_from_entry_prefers_override_address() -> None:
    record = _from_entry(address="old@home.example", override="new@home.example")

    assert record.home_address == "new@home.example"


def test_from_entry_copies_listing_flag() -> None:
    assert _from_entry(listed=False).listed_in_directory is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("4085550001", "+14085550001"),
        ("+447700900123", "+447700900123"),
        ("  4085550001 ", "+14085550001"),
        ("", ""),
    ],
)
def test_normalize_phone(raw: str, expected: str) -> None:
    assert normalize_phone(raw, "+1") == expected


def test_from_entry_normalizes_phone() -> None:
    record = _from_entry(phone="4085550001")

    assert record.mobile_phone == "+14085550001"
    assert record.recovery_phone == "+14085550001"


def test_increment_generation_keeps_primary_contact_in_sync() -> None:
    record = make_record()

    record.increment_generation()
    assert record.generation == 1
    assert record.primary_identifier == f"jane.kane1@{DOMAIN}"
    assert record.primary_contact.address == record.primary_identifier

    record.increment_generation()
    assert record.primary_identifier == f"jane.kane2@{DOMAIN}"
    assert sum(1 for contact in record.contacts if contact.primary) == 1


def test_derive_primary_identifier_lowercases() -> None:
    assert derive_primary_identifier("Ann", "O'Neil", 3, "Club.Org") == "ann.o'neil3@club.org"


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (date(2025, 4, 1), date(2026, 4, 1)),
        (date(2023, 2, 28), date(2024, 2, 28)),
        (date(2024, 2, 29), date(2025, 2, 28)),
        (date(2024, 12, 31), date(2025, 12, 31)),
    ],
)
def test_add_one_year(start: date, expected: date) -> None:
    assert add_one_year(start) == expected


def test_increment_expiration_date_advances_one_year_each_time() -> None:
    record = make_record(expires_on=date(2025, 4, 1))

    record.increment_expiration_date()
    record.increment_expiration_date()

    assert record.membership.expires_on == date(2027, 4, 1)


def test_copy_is_independent() -> None:
    record = make_record()
    clone = record.copy()

    clone.increment_expiration_date()
    clone.replace_home_address("other@home.example")

    assert record.membership.expires_on == date(2025, 4, 1)
    assert record.home_address == "jane@home.example"
    assert clone.generation == record.generation


def test_identity_is_case_insensitive() -> None:
    first = make_record()
    second = make_record(address="different@home.example", phone="")
    second.primary_identifier = second.primary_identifier.upper()

    assert first.same_account(second)
    assert first == second
    assert len({first, second}) == 1
    assert first != make_record(generation=1)


def test_explicit_identifier_is_lowercased_and_contact_added() -> None:
    base = make_record()
    record = AccountRecord(
        domain=DOMAIN,
        name=base.name,
        membership=base.membership,
        org_unit_path=ORG_UNIT,
        primary_identifier="Jane.Kane@Club.Example.Org",
    )

    assert record.primary_identifier == "jane.kane@club.example.org"
    assert record.primary_contact.address == record.primary_identifier


def test_from_imported_keeps_dates_and_family_label() -> None:
    member = make_member(
        family="Petrov",
        membership_type="Family",
        joined_on=date(2019, 1, 15),
        expires_on=date(2025, 1, 15),
    )

    record = AccountRecord.from_imported(
        member, domain=DOMAIN, org_unit_path=ORG_UNIT, phone_prefix="+1"
    )

    assert record.membership.joined_on == date(2019, 1, 15)
    assert record.membership.expires_on == date(2025, 1, 15)
    assert record.membership.membership_type == "Family"
    assert record.membership.family == "Petrov"
    assert record.mobile_phone == "+14085550100"


def test_from_imported_uses_explicit_family_label() -> None:
    member = make_member(membership_type="Family", family_label="Petrov-Smith")

    record = AccountRecord.from_imported(
        member, domain=DOMAIN, org_unit_path=ORG_UNIT, phone_prefix="+1"
    )

    assert record.membership.family == "Petrov-Smith"


def test_from_imported_individual_has_no_family() -> None:
    member = make_member(family_label="Ignored")

    record = AccountRecord.from_imported(
        member, domain=DOMAIN, org_unit_path=ORG_UNIT, phone_prefix="+1"
    )

    assert record.membership.family is None


def test_report_row_fields() -> None:
    row = make_record().report()

    assert row.primary == f"jane.kane@{DOMAIN}"
    assert row.email == "jane@home.example"
    assert row.phone == "+14085550001"
    assert (row.first, row.last) == ("Jane", "Kane")
    assert (row.joined, row.expires) == ("2024-04-01", "2025-04-01")
