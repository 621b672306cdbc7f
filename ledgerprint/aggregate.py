"""Aggregation of postings into per-account, per-commodity balances."""

from fractions import Fraction
from functools import reduce
from operator import add
from typing import Iterable
import pandas as pd
from consistent_df import enforce_schema

from .constants import POSTING_SCHEMA
from .model import Transaction


class AggregationError(ValueError):
    """Raised when a posting without a resolved balanced amount reaches the
    report engine. Upstream validation should make this impossible, so the
    error signals a defect and no report is produced."""


def postings_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Flatten a transaction stream into one row per posting.

    Args:
        transactions (Iterable[Transaction]): Chronologically ordered stream.

    Returns:
        pd.DataFrame: Postings following POSTING_SCHEMA, in stream order,
            with exact `Fraction` amounts.

    Raises:
        AggregationError: If any posting lacks a balanced amount. All
            offending postings are listed in the message.
    """
    rows, missing = [], []
    for txn in transactions:
        for posting in txn.postings:
            if posting.balanced_amount is None:
                missing.append(f"{posting.account} ({txn.header})")
            else:
                commodity, amount = posting.balanced_amount
                rows.append((posting.account, commodity, amount))
    if missing:
        raise AggregationError(
            f"{len(missing)} posting(s) without balanced amount: {_preview(missing)}"
        )

    df = pd.DataFrame(rows, columns=POSTING_SCHEMA["column"].tolist())
    return enforce_schema(df, POSTING_SCHEMA)


def _preview(items: list[str], n: int = 5) -> str:
    result = items[:n]
    if len(items) > n:
        result.append("...")
    return ", ".join(result)


def _exact_sum(amounts: pd.Series) -> Fraction:
    # Start from the first amount so that no float or int zero enters the sum
    return reduce(add, amounts)


def account_balances(postings: pd.DataFrame) -> dict[str, dict[str, Fraction]]:
    """Sum posting amounts per account and commodity.

    Args:
        postings (pd.DataFrame): Output of `postings_frame()`.

    Returns:
        dict[str, dict[str, Fraction]]: Account label mapped to commodity
            mapped to the exact summed amount. Accounts and commodities
            within an account are ordered lexicographically.
    """
    result = {}
    if postings.empty:
        return result
    grouped = postings.groupby(["account", "commodity"], sort=True)["amount"].agg(_exact_sum)
    for (account, commodity), amount in grouped.items():
        result.setdefault(account, {})[commodity] = amount
    return result


def grand_total(postings: pd.DataFrame) -> dict[str, Fraction]:
    """Sum all posting amounts per commodity, across all accounts.

    Returns:
        dict[str, Fraction]: Commodity mapped to its exact total, ordered
            lexicographically by commodity.
    """
    if postings.empty:
        return {}
    grouped = postings.groupby("commodity", sort=True)["amount"].agg(_exact_sum)
    return dict(grouped.items())


def is_balanced(total: dict[str, Fraction]) -> bool:
    """True if every commodity total is exactly zero, including no totals at all."""
    return all(amount == 0 for amount in total.values())
