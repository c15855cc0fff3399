"""Money rounding and display."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round to whole cents, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Format as '$35.00' or '-$35.00'. Values that round to zero print unsigned."""
    rounded = quantize_money(value)
    if rounded < 0:
        return f"-${-rounded:.2f}"
    return f"${abs(rounded):.2f}"
