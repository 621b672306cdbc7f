"""Two-pass text layout for balance and register reports.

Column widths are measured over the complete row set first; rendering then
aligns every row to that grid, including rows whose own content is short.
"""

from typing import Callable, NamedTuple

from .constants import WIDTH_OFFSET


class Cell(NamedTuple):
    """Formatted amount together with the sign of the exact value."""

    text: str
    negative: bool = False


class RegisterAccount(NamedTuple):
    name: str
    commodity: str
    amount: Cell
    total: dict[str, Cell]


class RegisterRow(NamedTuple):
    header: str
    accounts: list[RegisterAccount]


class ColumnWidths(NamedTuple):
    header: int
    account: int
    commodity: int
    amount: int
    total: int

    @property
    def continuation(self) -> int:
        """Indent of running-total lines beyond the first one."""
        return (
            self.header + WIDTH_OFFSET
            + self.account + WIDTH_OFFSET
            + self.commodity + self.amount
            + WIDTH_OFFSET * 2
        )


def plain(text: str) -> str:
    return text


def _styled(text: str, cell: Cell, highlight: Callable[[str], str]) -> str:
    return highlight(text) if cell.negative else text


# ----------------------------------------------------------------------
# Register

def measure_register(rows: list[RegisterRow]) -> ColumnWidths:
    """Maximum content width of each register column across all sub-lines."""
    accounts = [account for row in rows for account in row.accounts]
    return ColumnWidths(
        header=max((len(row.header) for row in rows), default=0),
        account=max((len(a.name) for a in accounts), default=0),
        commodity=max((len(a.commodity) for a in accounts), default=0),
        amount=max((len(a.amount.text) for a in accounts), default=0),
        total=max((len(t.text) for a in accounts for t in a.total.values()), default=0),
    )


def render_register(
    rows: list[RegisterRow],
    widths: ColumnWidths,
    highlight: Callable[[str], str] = plain,
) -> str:
    """Render register rows on the grid given by `widths`.

    The first posting of a transaction shares its line with the header; later
    postings start a new line with a blank header column. The first running
    total sits at the end of the posting line, further commodities are stacked
    below it on continuation lines.

    Args:
        rows (list[RegisterRow]): Rows in stream order.
        widths (ColumnWidths): Result of `measure_register()` over all rows.
        highlight (Callable[[str], str]): Applied to negative amount cells.

    Returns:
        str: Report text, one newline-terminated block per row.
    """
    lines = []
    for row in rows:
        line = row.header.ljust(widths.header + WIDTH_OFFSET)
        for index, account in enumerate(row.accounts):
            if index > 0:
                lines.append(line)
                line = " " * (widths.header + WIDTH_OFFSET)
            line += account.name.ljust(widths.account + WIDTH_OFFSET)
            amount = (
                account.commodity.rjust(widths.commodity)
                + account.amount.text.rjust(widths.amount)
                + " " * (WIDTH_OFFSET * 2)
            )
            line += _styled(amount, account.amount, highlight)
            for position, (commodity, total) in enumerate(account.total.items()):
                text = commodity.rjust(widths.commodity) + total.text.rjust(widths.total)
                if position > 0:
                    lines.append(line)
                    line = " " * widths.continuation
                line += _styled(text, total, highlight)
        lines.append(line)
    return "".join(f"{line}\n" for line in lines)


# ----------------------------------------------------------------------
# Flat balance

def measure_balance(
    balances: dict[str, dict[str, Cell]], total: dict[str, Cell]
) -> int:
    """Widest `commodity + amount` over all account lines and total lines."""
    amounts = [item for cells in balances.values() for item in cells.items()]
    amounts += list(total.items())
    return max((len(commodity) + len(cell.text) for commodity, cell in amounts), default=0)


def commodity_amount(
    commodity: str, cell: Cell, width: int, highlight: Callable[[str], str] = plain
) -> str:
    """Commodity and amount right-aligned to `width`."""
    return _styled(f"{commodity}{cell.text}".rjust(width), cell, highlight)


def render_flat_balance(
    balances: dict[str, dict[str, Cell]],
    total: dict[str, Cell],
    balanced: bool,
    width: int,
    highlight: Callable[[str], str] = plain,
) -> str:
    """Render per-account commodity lines, a separator rule and the total.

    Each account's commodity lines are stacked, with the account label on the
    last one. A group with several commodities is followed by a blank line if
    another account follows. When `balanced` is True the total collapses to a
    single `0` line.

    Args:
        balances (dict[str, dict[str, Cell]]): Ordered account balances.
        total (dict[str, Cell]): Ordered grand total per commodity.
        balanced (bool): Whether every commodity total is exactly zero.
        width (int): Result of `measure_balance()`.
        highlight (Callable[[str], str]): Applied to negative amount cells.

    Returns:
        str: Report text.
    """
    lines = []
    for index, (account, cells) in enumerate(balances.items()):
        items = list(cells.items())
        for commodity, cell in items[:-1]:
            lines.append(commodity_amount(commodity, cell, width, highlight))
        commodity, cell = items[-1]
        lines.append(f"{commodity_amount(commodity, cell, width, highlight)} {account}")
        if len(items) > 1 and index < len(balances) - 1:
            lines.append("")

    lines.append("-" * width)
    if balanced:
        lines.append("0".rjust(width))
    else:
        lines.extend(
            commodity_amount(commodity, cell, width, highlight)
            for commodity, cell in total.items()
        )
    return "".join(f"{line}\n" for line in lines)
