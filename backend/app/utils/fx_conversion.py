# backend/app/utils/fx_conversion.py
"""
FX Rate Conversion Utilities

This module clarifies the two exchange rate orientations stored on
platform transactions:

1. DEPOSIT RATE (Deposit.effective_exchange_rate):
   Convention: "1 base_currency = X platform_currency" (received / sent)
   Example: base CAD, platform USD, rate=0.74 means 1 CAD bought 0.74 USD
   Usage: To convert platform → base, DIVIDE by rate (or multiply by 1/rate)

2. WITHDRAWAL RATE (Withdrawal.effective_exchange_rate):
   Convention: "1 platform_currency = X base_currency" (received / requested)
   Example: platform USD, base CAD, rate=1.35 means 1 USD came back as 1.35 CAD
   Usage: To convert platform → base, MULTIPLY by rate

The valuation ledger works with a single "platform → base" multiplier,
so deposit rates are inverted before use and withdrawal rates are not.

Session records carry a third, user-entered rate (exchange_rate_to_base)
seeded from default_exchange_rate().
"""

from decimal import Decimal

ONE = Decimal("1")


def deposit_rate_to_base_rate(deposit_rate: Decimal) -> Decimal:
    """
    Convert a deposit's stored rate to a platform → base multiplier.

    Example:
        - Deposit: 1000 CAD sent, 740 USD received
        - Stored rate: 0.74 (1 CAD = 0.74 USD)
        - Base rate: 1 / 0.74 = 1.3514 (1 USD = 1.3514 CAD)

    Args:
        deposit_rate: Stored deposit rate (platform units per base unit)

    Returns:
        Base units per platform unit
    """
    if deposit_rate == 0:
        raise ValueError("Deposit rate cannot be zero")
    return ONE / deposit_rate


def convert_to_base(amount_platform: Decimal, base_rate: Decimal) -> Decimal:
    """
    Convert a platform-currency amount to the base currency.

    Args:
        amount_platform: Amount in platform currency
        base_rate: Base units per platform unit

    Returns:
        Amount in base currency
    """
    return amount_platform * base_rate


def convert_from_base(amount_base: Decimal, base_rate: Decimal) -> Decimal:
    """
    Convert a base-currency amount to the platform currency.

    Args:
        amount_base: Amount in base currency
        base_rate: Base units per platform unit

    Returns:
        Amount in platform currency
    """
    if base_rate == 0:
        raise ValueError("Base rate cannot be zero")
    return amount_base / base_rate


def default_exchange_rate(
    session_currency: str,
    base_currency: str,
    usd_to_base: Decimal,
    eur_to_base: Decimal,
    usd_to_eur: Decimal,
) -> Decimal:
    """
    Default session → base rate offered for a new session.

    The configured rates describe USD→CAD, EUR→CAD and USD→EUR; the reverse
    pairs are their inverses. Unknown pairs default to 1.

    Args:
        session_currency: Currency the session was played in
        base_currency: Reporting currency
        usd_to_base: Configured USD → CAD rate
        eur_to_base: Configured EUR → CAD rate
        usd_to_eur: Configured USD → EUR rate

    Returns:
        Base units per session unit

    Example:
        >>> default_exchange_rate("USD", "CAD", Decimal("1.36"), Decimal("1.47"), Decimal("0.92"))
        Decimal('1.36')
    """
    if session_currency == base_currency:
        return ONE

    # Fallbacks apply only when a configured rate is not positive
    rates = {
        ("USD", "CAD"): usd_to_base,
        ("EUR", "CAD"): eur_to_base,
        ("USD", "EUR"): usd_to_eur,
        ("CAD", "USD"): ONE / usd_to_base if usd_to_base > 0 else Decimal("0.73"),
        ("CAD", "EUR"): ONE / eur_to_base if eur_to_base > 0 else Decimal("0.68"),
        ("EUR", "USD"): ONE / usd_to_eur if usd_to_eur > 0 else Decimal("1.09"),
    }
    return rates.get((session_currency, base_currency), ONE)
