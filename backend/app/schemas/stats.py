# backend/app/schemas/stats.py
"""
Pydantic schemas for statistics.

These schemas handle:
- Statistics over a filtered set of sessions (with derived ratios)
- Filter options a client builds period/scope queries from
- The adjustments summary
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# APPLIED FILTERS
# =============================================================================

class AppliedFilters(BaseModel):
    """Echo of the filters a statistics response was computed with."""

    period: str
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    scope: str
    platform_id: int | None = None
    game_type: str | None = None
    location: str | None = None
    show_adjustments: bool


# =============================================================================
# STATISTICS
# =============================================================================

class StatsResponse(BaseModel):
    """
    Statistics over the filtered sessions.

    Money is in base currency. Ratios are 0 when their denominator is 0.
    """

    model_config = ConfigDict(from_attributes=True)

    filters: AppliedFilters

    # Totals
    net_result: Decimal = Field(..., description="Session results plus adjustments")
    net_result_no_adj: Decimal = Field(..., description="Session results only")
    adjustments_total: Decimal
    total_hours: Decimal
    total_hands: int
    total_bb_won: Decimal
    total_buy_in: Decimal
    total_tips: Decimal

    # Counts
    session_count: int
    win_count: int
    lose_count: int

    # Extremes
    biggest_win: Decimal
    biggest_loss: Decimal
    longest_session: Decimal = Field(..., description="Hours")
    longest_win_streak: int
    longest_lose_streak: int

    # Derived
    hourly_rate: Decimal
    avg_result: Decimal
    avg_session_duration: Decimal
    avg_buy_in: Decimal
    win_rate: Decimal = Field(..., description="Fraction of sessions won, 0..1")
    bb_per_hour: Decimal
    bb_per_100: Decimal


# =============================================================================
# FILTER OPTIONS
# =============================================================================

class PlatformOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    platform_id: int
    name: str
    currency: str


class FilterOptionsResponse(BaseModel):
    """Values accepted by scope=platform, scope=game_type and scope=location."""

    periods: list[str]
    scopes: list[str]
    platforms: list[PlatformOptionResponse]
    game_types: list[str]
    locations: list[str]


# =============================================================================
# ADJUSTMENTS
# =============================================================================

class AdjustmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    adjustment_id: int
    name: str
    date: dt.datetime | None
    amount: Decimal
    currency: str
    amount_base: Decimal
    is_online: bool
    platform_id: int | None


class AdjustmentsSummaryResponse(BaseModel):
    """Adjustments in the period, newest first."""

    period: str
    adjustments: list[AdjustmentResponse]
    total_base: Decimal
    count: int
