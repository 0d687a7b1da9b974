"""
Money helpers - all amounts are integers in minor units (pence, cents)
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

DEFAULT_CURRENCY = "GBP"

# Only the storefront's primary currencies get their own symbol
CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
}
FALLBACK_SYMBOL = "€"


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """
    Round to the nearest integer, halves away from zero for positives

    Python's round() uses banker's rounding, which would give 12 for 12.5.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def currency_symbol(currency: Optional[str]) -> str:
    return CURRENCY_SYMBOLS.get((currency or DEFAULT_CURRENCY).upper(), FALLBACK_SYMBOL)


def to_major_units(amount: int) -> Decimal:
    """Convert minor units to a two-place Decimal"""
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


def format_price(amount: int, currency: Optional[str] = DEFAULT_CURRENCY) -> str:
    """
    Format a minor-unit amount for display

    Args:
        amount: Amount in minor units
        currency: ISO 4217 code (GBP -> £, USD -> $, anything else -> €)

    Returns:
        String such as "£17.00"
    """
    return f"{currency_symbol(currency)}{to_major_units(amount)}"
