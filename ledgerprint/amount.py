"""Exact commodity amounts and their canonical decimal representation."""

from decimal import Decimal
from fractions import Fraction
from typing import NamedTuple
import pandas as pd

from .constants import DEFAULT_MAX_DECIMAL_PLACES


class CommodityAmount(NamedTuple):
    """An exact amount denominated in a single commodity."""

    commodity: str
    amount: Fraction

    def __add__(self, other: "CommodityAmount") -> "CommodityAmount":
        if not isinstance(other, CommodityAmount):
            return NotImplemented
        if other.commodity != self.commodity:
            raise ValueError(
                f"Cannot add {other.commodity} to {self.commodity}: "
                "amounts of different commodities are never summed."
            )
        return CommodityAmount(self.commodity, self.amount + other.amount)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return is_negative(self.amount)


def to_fraction(x) -> Fraction | None:
    """Convert a numeric value to an exact fraction.

    Strings and Decimals are converted without loss. Floats are converted via
    their shortest decimal representation, so `0.1` becomes `1/10` rather than
    the binary approximation.

    Args:
        x: Fraction, int, Decimal, decimal string, float, or a missing value.

    Returns:
        Fraction | None: The exact value, or None if `x` is missing.

    Examples:
        >>> to_fraction("12.50")
        Fraction(25, 2)
        >>> to_fraction(0.1)
        Fraction(1, 10)
        >>> to_fraction(None) is None
        True
    """
    if x is None or (not isinstance(x, (Fraction, Decimal)) and pd.isna(x)):
        return None
    if isinstance(x, bool):
        raise ValueError(f"Cannot interpret boolean {x} as an amount.")
    if isinstance(x, float):
        return Fraction(repr(x))
    if isinstance(x, str):
        return Fraction(x.strip())
    return Fraction(x)


def is_negative(amount: Fraction) -> bool:
    """Exact sign test, independent of any string representation."""
    return amount < 0


def _terminating_places(denominator: int) -> int | None:
    """Number of decimal places needed to represent 1/denominator exactly,
    or None if the decimal expansion does not terminate."""
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    return max(twos, fives) if denominator == 1 else None


def format_amount(amount: Fraction, max_decimal_places: int = DEFAULT_MAX_DECIMAL_PLACES) -> str:
    """Format an exact amount as a canonical decimal string.

    Negative values carry a leading '-', positive values no sign. There are no
    thousands separators and no trailing zeros beyond what the value needs.
    Values without a terminating decimal expansion are rounded half-to-even
    to `max_decimal_places`.

    Args:
        amount (Fraction): The value to format.
        max_decimal_places (int): Precision for non-terminating values.

    Returns:
        str: The formatted amount.

    Examples:
        >>> format_amount(Fraction(100))
        '100'
        >>> format_amount(Fraction(-1, 4))
        '-0.25'
        >>> format_amount(Fraction(2, 3), max_decimal_places=4)
        '0.6667'
    """
    amount = Fraction(amount)
    places = _terminating_places(amount.denominator)
    if places is None or places > max_decimal_places:
        places = max_decimal_places
    scaled = round(amount * 10 ** places)

    sign = "-" if scaled < 0 else ""
    digits = str(abs(scaled)).rjust(places + 1, "0")
    split = len(digits) - places
    integer, fraction = digits[:split], digits[split:].rstrip("0")
    return f"{sign}{integer}.{fraction}" if fraction else f"{sign}{integer}"
