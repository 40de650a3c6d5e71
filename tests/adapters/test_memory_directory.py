from __future__ import annotations

import pytest

from clubsync.adapters.memory import InMemoryDirectory
from clubsync.domain.errors import DirectoryError, DirectoryErrorKind
from tests.helpers.ledger import DOMAIN, ORG_UNIT, make_record


def test_create_rejects_duplicate_identifier(directory: InMemoryDirectory) -> None:
    directory.create(make_record())

    with pytest.raises(DirectoryError) as excinfo:
        directory.create(make_record(address="else@x.com"))

    assert excinfo.value.kind is DirectoryErrorKind.ALREADY_EXISTS


def test_identifiers_are_case_insensitive(directory: InMemoryDirectory) -> None:
    directory.create(make_record())

    assert f"JANE.KANE@{DOMAIN.upper()}" in directory
    assert directory.get(f"Jane.Kane@{DOMAIN}").name.given == "Jane"


def test_records_are_copied_in_and_out(directory: InMemoryDirectory) -> None:
    record = make_record()
    directory.create(record)

    record.increment_expiration_date()
    listed = directory.list_all()[0]
    listed.replace_home_address("changed@x.com")

    stored = directory.get(record.primary_identifier)
    assert stored.membership.expires_on != record.membership.expires_on
    assert stored.home_address == "jane@home.example"


def test_update_missing_record_is_not_found(directory: InMemoryDirectory) -> None:
    with pytest.raises(DirectoryError) as excinfo:
        directory.update(make_record())

    assert excinfo.value.kind is DirectoryErrorKind.NOT_FOUND
    assert excinfo.value.identifier == f"jane.kane@{DOMAIN}"


def test_remove_is_idempotent(directory: InMemoryDirectory) -> None:
    record = make_record()
    directory.create(record)

    directory.remove(record)
    directory.remove(record)

    assert len(directory) == 0


def test_list_filters_by_org_unit() -> None:
    inside = make_record()
    outside = make_record(given="Ann")
    outside.org_unit_path = "/alumni"
    directory = InMemoryDirectory([inside, outside], org_unit_path=ORG_UNIT)

    assert [record.name.given for record in directory.list_all()] == ["Jane"]


def test_list_rejects_unknown_scope() -> None:
    directory = InMemoryDirectory(org_unit_path="/nowhere", valid_scopes={ORG_UNIT})

    with pytest.raises(DirectoryError) as excinfo:
        directory.list_all()

    assert excinfo.value.kind is DirectoryErrorKind.SCOPE_INVALID


def test_add_to_group_requires_existing_record(directory: InMemoryDirectory) -> None:
    with pytest.raises(DirectoryError) as excinfo:
        directory.add_to_group(make_record(), "members@club")

    assert excinfo.value.kind is DirectoryErrorKind.NOT_FOUND


def test_calls_are_recorded(directory: InMemoryDirectory) -> None:
    record = make_record()
    directory.create(record)
    directory.add_to_group(record, "members@club")
    directory.add_to_group(record, "members@club")

    operations = [call.operation for call in directory.calls]
    assert operations == ["create", "add_to_group", "add_to_group"]
    assert directory.groups == {"members@club": {"jane@home.example"}}


def test_remove_from_group_ignores_non_members(directory: InMemoryDirectory) -> None:
    record = make_record()
    directory.create(record)
    directory.add_to_group(record, "members@club")

    directory.remove_from_group(record, "members@club")
    directory.remove_from_group(record, "members@club")
    directory.remove_from_group(record, "unknown@club")

    assert directory.groups == {"members@club": set()}
    assert len(directory.operations("remove_from_group")) == 3
