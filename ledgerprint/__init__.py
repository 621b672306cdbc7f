# flake8: noqa: F401

"""ledgerprint package

**ledgerprint** renders human-readable text reports from a double entry
accounting ledger: a flat balance report with per-account commodity totals
and a grand total, and a register report listing transactions in
chronological order with running per-commodity balances.

Amounts are exact rationals throughout, so totals accumulated over any number
of transactions never drift. Columns are measured over the complete report
before any line is rendered, so all rows share one aligned grid.

See README.md for usage.
"""

from .report_engine import ReportEngine
from .aggregate import AggregationError, account_balances, grand_total, postings_frame
from .running_total import RunningTotal, running_totals
from .amount import CommodityAmount, format_amount, to_fraction
from .model import Ledger, Journal, Transaction, Posting, State
from .import constants
