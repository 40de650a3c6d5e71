from __future__ import annotations

import itertools

import pytest

from clubsync.domain.reconciliation import Classification, Match, classify, match, match_values
from tests.helpers.ledger import make_entry, make_record

ADDRESSES = ["", "a@x.com", "A@X.com ", "b@x.com"]
PHONES = ["", "+14085550001", "+14085550002"]


def _kind(result: Match | bool) -> str:
    if result is False:
        return "none"
    assert isinstance(result, Match)
    return "full" if result.full else "partial"


@pytest.mark.parametrize(
    ("left", "right"),
    list(
        itertools.combinations(
            list(itertools.product(ADDRESSES, PHONES)),
            2,
        )
    ),
)
def test_match_is_symmetric(left: tuple[str, str], right: tuple[str, str]) -> None:
    assert _kind(match_values(left, right)) == _kind(match_values(right, left))


@pytest.mark.parametrize(
    ("entry_values", "record_values", "expected"),
    [
        (("a@x.com", "+14085550001"), ("a@x.com", "+14085550001"), "full"),
        (("a@x.com", "+14085550001"), ("a@x.com", "+14085550002"), "partial"),
        (("a@x.com", "+14085550001"), ("b@x.com", "+14085550001"), "partial"),
        (("a@x.com", "+14085550001"), ("b@x.com", "+14085550002"), "none"),
        # empty values never force a mismatch
        (("", "+14085550001"), ("b@x.com", "+14085550001"), "full"),
        (("a@x.com", ""), ("a@x.com", "+14085550002"), "full"),
        (("", ""), ("b@x.com", "+14085550002"), "full"),
        (("", "+14085550001"), ("b@x.com", "+14085550002"), "partial"),
    ],
)
def test_wildcard_rule_table(
    entry_values: tuple[str, str],
    record_values: tuple[str, str],
    expected: str,
) -> None:
    assert _kind(match_values(entry_values, record_values)) == expected


def test_address_comparison_ignores_case_and_whitespace() -> None:
    assert match_values((" Jane@Home.Example", ""), ("jane@home.example", "")) == Match(full=True)


def test_no_match_is_plain_false() -> None:
    result = match(make_entry(address="x@y.z", phone="+10000000000"), make_record())

    assert result is False


def test_entry_phone_is_normalized_before_comparison() -> None:
    entry = make_entry(phone="4085550001")

    assert match(entry, make_record(phone="+14085550001")) == Match(full=True)


def test_record_phone_is_normalized_before_comparison() -> None:
    record = make_record()
    record.phones[0].value = "4085550001"

    assert record.mobile_phone == "4085550001"
    assert match(make_entry(phone="4085550001"), record) == Match(full=True)
    assert match(make_entry(phone="+14085550001"), record) == Match(full=True)


def test_classify_join_when_nothing_matches() -> None:
    decision = classify(make_entry(), [make_record(address="o@x.com", phone="+19999999999")])

    assert decision.classification is Classification.JOIN
    assert decision.records == ()


def test_classify_renew_on_single_full_match() -> None:
    record = make_record()

    decision = classify(make_entry(), [record])

    assert decision.classification is Classification.RENEW
    assert decision.record is record


def test_classify_partial_on_single_partial_match() -> None:
    record = make_record(phone="+19999999999")

    decision = classify(make_entry(), [record])

    assert decision.classification is Classification.PARTIAL
    assert decision.records == (record,)


def test_classify_partial_on_multiple_matches() -> None:
    first = make_record()
    second = make_record(generation=1)

    decision = classify(make_entry(), [first, second])

    assert decision.classification is Classification.PARTIAL
    assert len(decision.records) == 2
