"""Decimal arithmetic utilities for cash balances and prices.

All prices, amounts, and balances use decimal.Decimal. No float.
Values are kept exact; rounding to cents happens only for display.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """Convert a quote or stored amount into Decimal.

    Floats go through ``str`` so 178.45 becomes Decimal("178.45"), not the
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_to_display(value: Decimal) -> str:
    """Convert an amount to a display string: 98215.5 -> '$98,215.50', -12 -> '-$12.00'."""
    rounded = round_cents(value)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
