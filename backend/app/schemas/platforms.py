# backend/app/schemas/platforms.py
"""
Pydantic schemas for platform valuation.

These schemas handle:
- One platform's valuation (totals, rates, both net results)
- The cost-basis parcels behind a platform's balance
- The bankroll summary over every platform
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# COST BASIS
# =============================================================================

class CostBasisParcelResponse(BaseModel):
    """Platform currency acquired by one deposit."""

    model_config = ConfigDict(from_attributes=True)

    date: dt.datetime | None = Field(..., description="Deposit date")
    amount: Decimal = Field(..., description="Platform-currency units received")
    cost_per_unit: Decimal = Field(..., description="Base units paid per platform unit")
    cost: Decimal = Field(..., description="amount × cost_per_unit, in base currency")


# =============================================================================
# PLATFORM VALUATION
# =============================================================================

class PlatformValuationResponse(BaseModel):
    """
    Valuation of one platform.

    Money is in base currency unless the field name says native.
    """

    model_config = ConfigDict(from_attributes=True)

    platform_id: int
    name: str = Field(..., description="Display name")
    currency: str = Field(..., description="Platform currency")
    base_currency: str = Field(..., description="Reporting currency")

    current_balance: Decimal = Field(..., description="Balance in platform currency")
    current_balance_base: Decimal = Field(..., description="Balance at the latest rate")

    latest_rate: Decimal = Field(
        ...,
        description="Base units per platform unit from the most recent FX transaction (1 if none)"
    )
    average_deposit_rate: Decimal = Field(
        ...,
        description="Σ received / Σ sent over FX deposits (1 if none)"
    )

    total_deposited: Decimal
    total_withdrawn: Decimal
    total_adjustments: Decimal
    net_result: Decimal = Field(
        ...,
        description="withdrawn + balance × rate − deposited + adjustments (0 if unseeded)"
    )
    net_result_native: Decimal = Field(
        ...,
        description="Net result in platform currency, derived from native amounts"
    )

    deposit_count: int
    withdrawal_count: int
    adjustment_count: int
    is_seeded: bool = Field(..., description="False until the platform has a deposit or withdrawal")

    cost_basis: list[CostBasisParcelResponse] = Field(default_factory=list)


# =============================================================================
# BANKROLL SUMMARY
# =============================================================================

class PlatformSummaryItem(BaseModel):
    """One row of the bankroll summary."""

    model_config = ConfigDict(from_attributes=True)

    platform_id: int
    name: str
    currency: str
    current_balance: Decimal
    current_balance_base: Decimal
    latest_rate: Decimal
    net_result: Decimal
    net_result_native: Decimal
    session_count: int = Field(..., description="Online sessions played on this platform")


class BankrollSummaryResponse(BaseModel):
    """Every platform plus totals in base currency."""

    base_currency: str
    platforms: list[PlatformSummaryItem]
    total_net_result: Decimal
    total_deposited: Decimal
    total_withdrawn: Decimal
    total_adjustments: Decimal
    total_balance_base: Decimal
