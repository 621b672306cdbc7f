"""Test suite for running totals."""

import pytest
from fractions import Fraction
from ledgerprint import AggregationError, Posting, Transaction
from ledgerprint.aggregate import grand_total, postings_frame
from ledgerprint.running_total import add_to_totals, final_totals, running_totals
from .base_ledger import sample_ledger, transaction


def test_snapshot_after_every_posting():
    snapshots = [s.totals for s in running_totals(sample_ledger().transactions())]
    assert snapshots == [
        {"USD": Fraction(100)},
        {"USD": Fraction(0)},
        {"USD": Fraction(25, 2)},
        {"USD": Fraction(0)},
        {"EUR": Fraction(20), "USD": Fraction(0)},
        {"EUR": Fraction(0), "USD": Fraction(0)},
    ]


def test_snapshot_pairs_with_posting():
    snapshots = list(running_totals(sample_ledger().transactions()))
    assert [s.posting.account for s in snapshots] == [
        "Assets:Cash", "Equity:Opening", "Expenses:Food",
        "Assets:Cash", "Assets:Cash", "Equity:Opening",
    ]
    assert [s.transaction.description for s in snapshots[::2]] == ["Opening", "Groceries", "Trip"]


def test_later_commodity_keeps_earlier_totals():
    transactions = [
        transaction("2024-01-01", "Salary", ("Assets:Cash", "USD", 50)),
        transaction("2024-01-02", "Refund", ("Assets:Cash", "EUR", 20)),
    ]
    snapshots = [s.totals for s in running_totals(transactions)]
    assert snapshots == [
        {"USD": Fraction(50)},
        {"EUR": Fraction(20), "USD": Fraction(50)},
    ]
    assert list(snapshots[1]) == ["EUR", "USD"]


def test_add_to_totals_returns_new_mapping():
    totals = {"USD": Fraction(1)}
    result = add_to_totals(totals, ("CHF", Fraction(2)))
    assert totals == {"USD": Fraction(1)}
    assert result == {"CHF": Fraction(2), "USD": Fraction(1)}
    assert list(result) == ["CHF", "USD"]


def test_final_snapshot_equals_grand_total():
    transactions = list(sample_ledger().transactions()) + [
        transaction("2024-03-01", "Split", ("Assets:Cash", "USD", Fraction(1, 3)),
                    ("Assets:Bank", "USD", Fraction(1, 3)), ("Assets:Cash", "CHF", "-0.05")),
    ]
    assert final_totals(transactions) == grand_total(postings_frame(transactions))


def test_reordering_changes_intermediate_but_not_final_totals():
    first = transaction("2024-01-01", "a", ("Assets:Cash", "USD", 10))
    second = transaction("2024-01-02", "b", ("Assets:Cash", "USD", -4))
    forward = [s.totals for s in running_totals([first, second])]
    backward = [s.totals for s in running_totals([second, first])]
    assert forward[0] != backward[0]
    assert forward[-1] == backward[-1] == {"USD": Fraction(6)}


def test_reordering_disjoint_commodities_keeps_final_totals():
    usd = transaction("2024-01-01", "a", ("Assets:Cash", "USD", 10))
    eur = transaction("2024-01-02", "b", ("Assets:Cash", "EUR", 3))
    assert final_totals([usd, eur]) == final_totals([eur, usd])


def test_empty_stream():
    assert list(running_totals([])) == []
    assert final_totals([]) == {}


def test_missing_balanced_amount_raises():
    broken = Transaction(
        date="2024-01-01", description="Broken", postings=[Posting("Assets:Cash", None)]
    )
    with pytest.raises(AggregationError, match="Assets:Cash"):
        list(running_totals([broken]))
