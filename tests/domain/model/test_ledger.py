from __future__ import annotations

import pytest

from tests.helpers.ledger import NOW, make_entry


@pytest.mark.parametrize("status", ["paid", "Paid", " PAID in full", "paid-online"])
def test_paid_statuses_are_eligible(status: str) -> None:
    assert make_entry(status=status).is_eligible


@pytest.mark.parametrize("status", ["", "pending", "unpaid", "refunded"])
def test_unpaid_statuses_are_not_eligible(status: str) -> None:
    assert not make_entry(status=status).is_eligible


def test_processed_entries_are_not_eligible() -> None:
    entry = make_entry()

    entry.mark_processed(NOW)

    assert entry.is_processed
    assert not entry.is_eligible


def test_contact_address_prefers_override() -> None:
    assert make_entry(override="new@home.example").contact_address == "new@home.example"
    assert make_entry().contact_address == "jane@home.example"


def test_describe_prefers_transaction_id() -> None:
    assert make_entry(transaction_id="T-1").describe().startswith("T-1 (Jane Kane")
