"""Port for the directory of account holders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clubsync.domain.model import AccountRecord


@runtime_checkable
class Directory(Protocol):
    """Account store the engine reconciles against.

    Every method raises ``DirectoryError`` on failure. Mutations may not be
    visible through ``list_all`` immediately; adapters wait for visibility
    before returning but never fail a mutation because the wait timed out.
    """

    def list_all(self) -> list[AccountRecord]:
        """Return every record within the configured organizational scope."""
        ...

    def create(self, record: AccountRecord) -> AccountRecord:
        """Create ``record``; ``ALREADY_EXISTS`` when the identifier is taken."""
        ...

    def update(self, record: AccountRecord) -> AccountRecord:
        """Replace the stored record; ``NOT_FOUND`` or ``CREATION_PENDING`` on failure."""
        ...

    def remove(self, record: AccountRecord) -> None:
        """Delete the record. Removing an absent record is not an error."""
        ...

    def get(self, identifier: str) -> AccountRecord: ...

    def add_to_group(self, record: AccountRecord, group: str) -> None:
        """Register the record's home address in ``group``."""
        ...

    def remove_from_group(self, record: AccountRecord, group: str) -> None:
        """Drop the record's home address from ``group``; a non-member is not an error."""
        ...


__all__ = ["Directory"]
