from __future__ import annotations

from clubsync.domain.errors import DirectoryError, DirectoryErrorKind, not_found, scope_invalid


def test_annotate_appends_detail_and_keeps_kind() -> None:
    error = scope_invalid("/nowhere")

    annotated = error.annotate('"orgUnitPath"')

    assert annotated.kind is DirectoryErrorKind.SCOPE_INVALID
    assert str(annotated).endswith(': "orgUnitPath"')
    assert annotated.__cause__ is error


def test_not_found_carries_identifier() -> None:
    error = not_found("jane.kane@club.example.org")

    assert error.is_kind(DirectoryErrorKind.NOT_FOUND)
    assert error.identifier == "jane.kane@club.example.org"
    assert "jane.kane@club.example.org" in str(error)


def test_repr_names_kind() -> None:
    error = DirectoryError(DirectoryErrorKind.UNCLASSIFIED, "boom")

    assert "unclassified" in repr(error)
