# backend/app/services/constants.py
"""
Centralized constants for the Bankroll Ledger services.

This module provides a single source of truth for the business constants
used across the application: reference lists shown to clients, display
placeholders for missing record fields, and rate limits.

Usage:
    from app.services.constants import (
        ZERO,
        ONE,
        SUPPORTED_CURRENCIES,
        UNKNOWN_PLATFORM_NAME,
    )
"""

from decimal import Decimal


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")

# Identity rate, used whenever no usable conversion rate exists
ONE: Decimal = Decimal("1")

HUNDRED: Decimal = Decimal("100")

SECONDS_PER_HOUR: Decimal = Decimal("3600")
MINUTES_PER_HOUR: Decimal = Decimal("60")


# =============================================================================
# CURRENCIES
# =============================================================================

# Currencies a platform, session or adjustment may be denominated in
SUPPORTED_CURRENCIES: tuple[str, ...] = (
    "CAD",
    "USD",
    "EUR",
    "GBP",
    "AUD",
    "MXN",
    "BTC",
    "ETH",
)

DEFAULT_BASE_CURRENCY: str = "CAD"


# =============================================================================
# DISPLAY DEFAULTS
# =============================================================================
# Placeholders for record fields that were never filled in

UNKNOWN_PLATFORM_NAME: str = "Unknown Platform"
DEFAULT_PLATFORM_CURRENCY: str = "USD"

UNKNOWN_SESSION_PLATFORM: str = "Unknown"
DEFAULT_GAME_TYPE: str = "Hold'em"
UNKNOWN_LOCATION: str = "Unknown Location"


# =============================================================================
# REFERENCE LISTS
# =============================================================================

GAME_TYPES: tuple[str, ...] = (
    "No Limit Hold'em",
    "Pot Limit Omaha",
    "Pot Limit Omaha 5",
    "Pot Limit Omaha Hi-Lo",
    "7 Card Stud",
    "Mixed Games",
)

DEPOSIT_METHODS: tuple[str, ...] = (
    "E-Transfer",
    "Bank Transfer",
    "Credit Card",
    "Crypto",
    "PayPal",
    "Other",
)

WITHDRAWAL_METHODS: tuple[str, ...] = (
    "E-Transfer",
    "Bank Transfer",
    "Check",
    "Crypto",
    "PayPal",
    "Other",
)


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Default rate limit for read endpoints
RATE_LIMIT_DEFAULT: str = "100/minute"

# Statistics recompute over every record on each call
RATE_LIMIT_STATS: str = "30/minute"

# Higher limit for monitoring tools that poll frequently
RATE_LIMIT_HEALTH: str = "300/minute"
