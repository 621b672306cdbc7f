"""This module defines the engine that renders flat balance and register reports."""

import logging
import sys
from fractions import Fraction
from pathlib import Path
from typing import Iterable, TextIO
import yaml

from .aggregate import account_balances, grand_total, is_balanced, postings_frame
from .amount import format_amount, is_negative
from .constants import ANSI_RED, ANSI_RESET, DEFAULT_CONFIGURATION
from .layout import (
    Cell,
    RegisterAccount,
    RegisterRow,
    measure_balance,
    measure_register,
    plain,
    render_flat_balance,
    render_register,
)
from .model import Ledger, Transaction
from .running_total import running_totals


class ReportEngine:
    """
    Render human-readable reports from an ordered ledger.

    The engine never modifies the ledger. Every report call rescans the full
    transaction stream and builds its own aggregation structures, which are
    discarded once the text is produced.
    """

    _logger = None

    # ----------------------------------------------------------------------
    # Constructor

    def __init__(self, configuration: dict | None = None):
        self._logger = logging.getLogger("ledgerprint")
        self.configuration = DEFAULT_CONFIGURATION if configuration is None else configuration

    # ----------------------------------------------------------------------
    # Configuration

    @property
    def configuration(self) -> dict:
        return self._configuration.copy()

    @configuration.setter
    def configuration(self, configuration: dict):
        self._configuration = self.standardize_configuration(configuration)

    @staticmethod
    def standardize_configuration(configuration: dict) -> dict:
        """Validate a configuration and fill in defaults.

        Args:
            configuration (dict): Partial or complete configuration.

        Returns:
            dict: Configuration with every key of DEFAULT_CONFIGURATION.

        Raises:
            ValueError: If `configuration` is not a dict, contains unknown keys,
                or holds values of the wrong type.
        """
        if not isinstance(configuration, dict):
            raise ValueError("'configuration' must be a dict.")
        unknown = set(configuration) - set(DEFAULT_CONFIGURATION)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}.")

        result = DEFAULT_CONFIGURATION | configuration
        if not isinstance(result["color"], bool):
            raise ValueError("Configuration 'color' must be a boolean.")
        places = result["max_decimal_places"]
        if isinstance(places, bool) or not isinstance(places, int) or places < 0:
            raise ValueError("Configuration 'max_decimal_places' must be a non-negative integer.")
        return result

    def read_configuration_file(self, file: Path | str) -> dict:
        """Load configuration from a YAML file and apply it.

        If the file does not exist, DEFAULT_CONFIGURATION is applied instead,
        so reports can be produced without any settings in place.

        Args:
            file (Path | str): Path to the YAML configuration file.

        Returns:
            dict: The standardized configuration now in effect.
        """
        file = Path(file).expanduser()
        if file.exists():
            with open(file, "r") as f:
                result = yaml.safe_load(f) or {}
        else:
            self._logger.warning("configuration file missing, reverting to default configuration.")
            result = DEFAULT_CONFIGURATION
        self.configuration = result
        return self.configuration

    def write_configuration_file(self, file: Path | str) -> None:
        """Save the current configuration as YAML."""
        with open(Path(file).expanduser(), "w") as f:
            yaml.dump(self.configuration, f, default_flow_style=False)

    # ----------------------------------------------------------------------
    # Formatting

    def cell(self, amount: Fraction) -> Cell:
        """Format an amount, deciding on highlighting from its exact sign."""
        text = format_amount(amount, max_decimal_places=self._configuration["max_decimal_places"])
        return Cell(text, is_negative(amount))

    def highlight(self, text: str) -> str:
        if not self._configuration["color"]:
            return plain(text)
        return f"{ANSI_RED}{text}{ANSI_RESET}"

    # ----------------------------------------------------------------------
    # Flat balance

    def flat_balance(self, transactions: Ledger | Iterable[Transaction]) -> str:
        """Render per-account commodity balances followed by a grand total.

        Args:
            transactions (Ledger | Iterable[Transaction]): A ledger, or an
                already filtered, chronologically ordered transaction stream.

        Returns:
            str: The complete report.

        Raises:
            AggregationError: If a posting lacks a balanced amount.
        """
        postings = postings_frame(_stream(transactions))
        balances = account_balances(postings)
        total = grand_total(postings)

        balance_cells = {
            account: {commodity: self.cell(amount) for commodity, amount in amounts.items()}
            for account, amounts in balances.items()
        }
        total_cells = {commodity: self.cell(amount) for commodity, amount in total.items()}
        width = measure_balance(balance_cells, total_cells)
        self._logger.debug(
            f"Flat balance: {len(postings)} postings, {len(balances)} accounts, "
            f"{len(total)} commodities, width {width}."
        )
        return render_flat_balance(
            balance_cells, total_cells, balanced=is_balanced(total), width=width,
            highlight=self.highlight,
        )

    def print_flat_balance(
        self, transactions: Ledger | Iterable[Transaction], file: TextIO | None = None
    ) -> None:
        """Write the flat balance report to `file`, standard output by default."""
        report = self.flat_balance(transactions)
        (sys.stdout if file is None else file).write(report)

    # ----------------------------------------------------------------------
    # Register

    def register_rows(self, transactions: Ledger | Iterable[Transaction]) -> list[RegisterRow]:
        """Build one register row per transaction, annotated with running totals.

        Raises:
            AggregationError: If a posting lacks a balanced amount.
        """
        transactions = list(_stream(transactions))
        snapshots = running_totals(transactions)
        rows = []
        for txn in transactions:
            accounts = []
            for _ in txn.postings:
                snapshot = next(snapshots)
                commodity, amount = snapshot.posting.balanced_amount
                accounts.append(RegisterAccount(
                    name=snapshot.posting.account,
                    commodity=commodity,
                    amount=self.cell(amount),
                    total={c: self.cell(a) for c, a in snapshot.totals.items()},
                ))
            rows.append(RegisterRow(txn.header, accounts))
        return rows

    def register(self, transactions: Ledger | Iterable[Transaction]) -> str:
        """Render a chronological transaction list with running totals.

        Args:
            transactions (Ledger | Iterable[Transaction]): A ledger, or an
                already filtered, chronologically ordered transaction stream.

        Returns:
            str: The complete report.

        Raises:
            AggregationError: If a posting lacks a balanced amount.
        """
        rows = self.register_rows(transactions)
        widths = measure_register(rows)
        self._logger.debug(f"Register: {len(rows)} rows, column widths {tuple(widths)}.")
        return render_register(rows, widths, highlight=self.highlight)

    def print_register(
        self, transactions: Ledger | Iterable[Transaction], file: TextIO | None = None
    ) -> None:
        """Write the register report to `file`, standard output by default."""
        report = self.register(transactions)
        (sys.stdout if file is None else file).write(report)


def _stream(transactions: Ledger | Iterable[Transaction]) -> Iterable[Transaction]:
    if isinstance(transactions, Ledger):
        return transactions.transactions()
    return transactions
