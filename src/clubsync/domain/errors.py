"""Directory error taxonomy.

A single error type tagged with a ``kind``; callers branch on the kind
rather than on subclasses.
"""

from __future__ import annotations

from enum import StrEnum


class DirectoryErrorKind(StrEnum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    CREATION_PENDING = "creation_pending"
    SCOPE_INVALID = "scope_invalid"
    UNCLASSIFIED = "unclassified"


class DirectoryError(RuntimeError):
    """Raised by directory adapters for every failed directory operation."""

    def __init__(
        self,
        kind: DirectoryErrorKind,
        message: str,
        identifier: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.identifier = identifier

    def is_kind(self, kind: DirectoryErrorKind) -> bool:
        return self.kind is kind

    def annotate(self, detail: str) -> DirectoryError:
        """Return a copy whose message carries ``detail`` after a colon."""

        annotated = DirectoryError(self.kind, f"{self.message}: {detail}", self.identifier)
        annotated.__cause__ = self
        return annotated

    def __repr__(self) -> str:
        return f"DirectoryError({self.kind!s}, {self.message!r}, identifier={self.identifier!r})"


def already_exists(identifier: str) -> DirectoryError:
    return DirectoryError(
        DirectoryErrorKind.ALREADY_EXISTS,
        f"Entity already exists: {identifier}",
        identifier,
    )


def not_found(identifier: str) -> DirectoryError:
    return DirectoryError(
        DirectoryErrorKind.NOT_FOUND,
        f"Resource Not Found: {identifier}",
        identifier,
    )


def creation_pending(identifier: str) -> DirectoryError:
    return DirectoryError(
        DirectoryErrorKind.CREATION_PENDING,
        f"User creation is not complete: {identifier}",
        identifier,
    )


def scope_invalid(scope: str) -> DirectoryError:
    return DirectoryError(DirectoryErrorKind.SCOPE_INVALID, f'Invalid scope: "{scope}"')
