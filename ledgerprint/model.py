"""Read-only ledger model consumed by the report engine.

A ledger is an ordered collection of journals, each holding an ordered list
of transactions. Ordering is established upstream and taken as chronological.
"""

from enum import Enum
from typing import Iterator, NamedTuple
import pandas as pd
from consistent_df import enforce_schema

from .amount import CommodityAmount, to_fraction
from .constants import JOURNAL_SCHEMA


class State(Enum):
    """Clearing state of a transaction."""

    CLEARED = "*"
    UNCLEARED = ""
    PENDING = "!"

    @property
    def marker(self) -> str:
        """Separator placed between date and description in report headers."""
        return " " if self is State.UNCLEARED else f" {self.value} "

    @classmethod
    def parse(cls, symbol) -> "State":
        if symbol is None or pd.isna(symbol):
            return cls.UNCLEARED
        return cls(str(symbol).strip())


class Posting(NamedTuple):
    account: str
    balanced_amount: CommodityAmount | None


class Transaction(NamedTuple):
    date: str
    description: str
    postings: list[Posting]
    state: State = State.UNCLEARED

    @property
    def header(self) -> str:
        return f"{self.date}{self.state.marker}{self.description}"


class Journal(NamedTuple):
    transactions: list[Transaction]
    name: str = ""


class Ledger(NamedTuple):
    journals: list[Journal]

    def transactions(self) -> Iterator[Transaction]:
        """Flatten journals into one transaction stream, journal order first."""
        for journal in self.journals:
            yield from journal.transactions

    @classmethod
    def from_journal(cls, df: pd.DataFrame) -> "Ledger":
        """Build a ledger from tabular journal entries.

        Rows sharing the same `journal` and `id` form one transaction, taken in
        order of first appearance. Date, state and description are read from
        the first row of each transaction; later rows may leave them empty.
        A row with missing commodity or amount produces a posting without a
        balanced amount, which the report engine rejects.

        Args:
            df (pd.DataFrame): Journal entries following JOURNAL_SCHEMA.

        Returns:
            Ledger: Journals in order of first appearance.
        """
        df = enforce_schema(df, JOURNAL_SCHEMA)
        df["journal"] = df["journal"].fillna("")

        journals = {}
        for (journal, _), txn in df.groupby(["journal", "id"], sort=False, dropna=False):
            first = txn.iloc[0]
            postings = [
                Posting(account, _balanced_amount(commodity, amount))
                for account, commodity, amount
                in zip(txn["account"], txn["commodity"], txn["amount"])
            ]
            journals.setdefault(journal, []).append(Transaction(
                date=_text(first["date"]),
                description=_text(first["description"]),
                postings=postings,
                state=State.parse(first["state"]),
            ))

        return cls([Journal(transactions, name) for name, transactions in journals.items()])


def _text(x) -> str:
    return "" if pd.isna(x) else str(x)


def _balanced_amount(commodity, amount) -> CommodityAmount | None:
    amount = to_fraction(amount)
    if amount is None or pd.isna(commodity):
        return None
    return CommodityAmount(str(commodity), amount)
