"""Running per-commodity totals over an ordered transaction stream.

Unlike balance aggregation, intermediate totals depend on the exact order
of postings. Totals are threaded through a fold as an explicit accumulator:
every step returns a fresh mapping and leaves earlier snapshots untouched.
"""

from fractions import Fraction
from itertools import accumulate
from typing import Iterable, Iterator, Mapping, NamedTuple

from .aggregate import AggregationError
from .amount import CommodityAmount
from .model import Posting, Transaction


class RunningTotal(NamedTuple):
    """Running totals right after `posting` of `transaction` was applied."""

    transaction: Transaction
    posting: Posting
    totals: dict[str, Fraction]


def add_to_totals(
    totals: Mapping[str, Fraction], amount: CommodityAmount
) -> dict[str, Fraction]:
    """Return a new mapping with `amount` added to its commodity's total.

    Commodities are kept in lexicographic order. The input is not modified.
    """
    result = dict(totals)
    commodity, value = amount
    result[commodity] = result[commodity] + value if commodity in result else value
    return dict(sorted(result.items()))


def running_totals(transactions: Iterable[Transaction]) -> Iterator[RunningTotal]:
    """Yield a snapshot of all running totals after each posting.

    Postings are consumed in transaction order and, within a transaction, in
    posting order. Each snapshot covers every commodity seen so far, not only
    the one just updated.

    Raises:
        AggregationError: If a posting lacks a balanced amount.
    """
    steps = (
        (txn, posting, _balanced_amount(txn, posting))
        for txn in transactions
        for posting in txn.postings
    )
    # The accumulator carries (transaction, posting, totals) so that every
    # snapshot stays paired with the posting that produced it.
    folded = accumulate(
        steps,
        lambda acc, step: RunningTotal(step[0], step[1], add_to_totals(acc.totals, step[2])),
        initial=RunningTotal(None, None, {}),
    )
    next(folded)
    yield from folded


def final_totals(transactions: Iterable[Transaction]) -> dict[str, Fraction]:
    """Totals after the whole stream has been consumed."""
    totals = {}
    for snapshot in running_totals(transactions):
        totals = snapshot.totals
    return totals


def _balanced_amount(txn: Transaction, posting: Posting) -> CommodityAmount:
    if posting.balanced_amount is None:
        raise AggregationError(
            f"Posting to {posting.account} ({txn.header}) has no balanced amount."
        )
    return posting.balanced_amount
