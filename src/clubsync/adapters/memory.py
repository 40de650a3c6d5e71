"""In-memory directory used for dry runs and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.errors import (
    DirectoryError,
    DirectoryErrorKind,
    already_exists,
    not_found,
    scope_invalid,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from clubsync.domain.model import AccountRecord

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DirectoryCall:
    operation: str
    identifier: str


class InMemoryDirectory:
    """Single-writer directory store.

    Records are copied on the way in and on the way out, so callers never hold
    a reference into the store. Every call is appended to ``calls``.
    """

    def __init__(
        self,
        records: Iterable[AccountRecord] = (),
        *,
        org_unit_path: str | None = None,
        valid_scopes: Iterable[str] | None = None,
    ) -> None:
        self.org_unit_path = org_unit_path
        self._valid_scopes = set(valid_scopes) if valid_scopes is not None else None
        self._records: dict[str, AccountRecord] = {}
        self.groups: dict[str, set[str]] = {}
        self.calls: list[DirectoryCall] = []
        for record in records:
            self._records[_key(record.primary_identifier)] = record.copy()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and _key(identifier) in self._records

    def list_all(self) -> list[AccountRecord]:
        self.calls.append(DirectoryCall("list_all", self.org_unit_path or ""))
        if (
            self.org_unit_path is not None
            and self._valid_scopes is not None
            and self.org_unit_path not in self._valid_scopes
        ):
            raise scope_invalid(self.org_unit_path)
        return [
            record.copy()
            for record in self._records.values()
            if self.org_unit_path is None or record.org_unit_path == self.org_unit_path
        ]

    def create(self, record: AccountRecord) -> AccountRecord:
        key = _key(record.primary_identifier)
        self.calls.append(DirectoryCall("create", key))
        if key in self._records:
            raise already_exists(key)
        self._records[key] = record.copy()
        log.debug("Created %s", key)
        return record.copy()

    def update(self, record: AccountRecord) -> AccountRecord:
        key = _key(record.primary_identifier)
        self.calls.append(DirectoryCall("update", key))
        if key not in self._records:
            raise not_found(key)
        self._records[key] = record.copy()
        return record.copy()

    def remove(self, record: AccountRecord) -> None:
        key = _key(record.primary_identifier)
        self.calls.append(DirectoryCall("remove", key))
        self._records.pop(key, None)
        for members in self.groups.values():
            members.discard(record.home_address.casefold())

    def get(self, identifier: str) -> AccountRecord:
        key = _key(identifier)
        self.calls.append(DirectoryCall("get", key))
        try:
            return self._records[key].copy()
        except KeyError:
            raise not_found(key) from None

    def add_to_group(self, record: AccountRecord, group: str) -> None:
        key = _key(record.primary_identifier)
        self.calls.append(DirectoryCall("add_to_group", key))
        if key not in self._records:
            raise DirectoryError(
                DirectoryErrorKind.NOT_FOUND,
                f"Resource Not Found: {key} (group {group})",
                key,
            )
        # re-adding an existing member is not an error
        self.groups.setdefault(group, set()).add(record.home_address.casefold())

    def remove_from_group(self, record: AccountRecord, group: str) -> None:
        key = _key(record.primary_identifier)
        self.calls.append(DirectoryCall("remove_from_group", key))
        members = self.groups.get(group, set())
        address = record.home_address.casefold()
        if address not in members:
            log.debug("%s is not in %s", address, group)
            return
        members.discard(address)

    def operations(self, name: str) -> list[str]:
        return [call.identifier for call in self.calls if call.operation == name]


def _key(identifier: str) -> str:
    return identifier.strip().lower()


if TYPE_CHECKING:
    from clubsync.domain.ports import Directory

    _directory_check: Directory = InMemoryDirectory()
