# backend/app/utils/decimal_utils.py
"""
Decimal helpers shared by the ledger calculators.

Record fields may be None (legacy rows, partially filled test doubles) or
plain ints. Calculators coerce through to_decimal() so every sum stays a
Decimal and missing values count as zero.
"""

from decimal import Decimal

_ZERO = Decimal("0")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """
    Coerce a numeric record field to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion.

    Example:
        >>> to_decimal(None)
        Decimal('0')
        >>> to_decimal(2.5)
        Decimal('2.5')
    """
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning 0 when the denominator is not positive."""
    if denominator <= 0:
        return _ZERO
    return numerator / denominator


def format_amount(value: Decimal) -> str:
    """
    Render an amount without trailing zeros or exponent notation.

    Example:
        >>> format_amount(Decimal("2.50000000"))
        '2.5'
        >>> format_amount(Decimal("100.00"))
        '100'
    """
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal("1")))
    return format(normalized, "f")
