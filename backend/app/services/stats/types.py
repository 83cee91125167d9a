# backend/app/services/stats/types.py
"""
Internal data types for the Statistics Aggregator.

These dataclasses are NOT Pydantic schemas - those are defined in
app/schemas/stats.py for API serialization.

Filters are closed sets of frozen dataclasses. DateFilter and SessionFilter
are the unions; app/services/stats/filters.py holds the only dispatch over
them.

Type Hierarchy:
    DateFilter      = AllTime | ThisMonth | ThisYear | CustomRange
    SessionFilter   = AllSessions | LiveOnly | OnlineOnly
                      | PlatformScope | GameTypeScope | LocationScope
    StatsResult     - Aggregated statistics with derived ratios
    PlatformOption  - Platform choice for a PlatformScope filter
    FilterOptions   - Values a client can build filters from
    AdjustmentsSummary - Adjustments for a period with their total
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Union

from app.services.constants import HUNDRED, ZERO
from app.utils.decimal_utils import safe_divide


# =============================================================================
# DATE FILTERS
# =============================================================================

@dataclass(frozen=True)
class AllTime:
    pass


@dataclass(frozen=True)
class ThisMonth:
    """Same calendar month and year as "now"."""
    pass


@dataclass(frozen=True)
class ThisYear:
    """Same calendar year as "now"."""
    pass


@dataclass(frozen=True)
class CustomRange:
    """Inclusive range: start <= date <= end."""

    start: datetime
    end: datetime


DateFilter = Union[AllTime, ThisMonth, ThisYear, CustomRange]


# =============================================================================
# SESSION FILTERS
# =============================================================================

@dataclass(frozen=True)
class AllSessions:
    pass


@dataclass(frozen=True)
class LiveOnly:
    pass


@dataclass(frozen=True)
class OnlineOnly:
    pass


@dataclass(frozen=True)
class PlatformScope:
    """Online sessions of one platform. Live sessions have no platform."""

    platform_id: int


@dataclass(frozen=True)
class GameTypeScope:
    """Sessions of both kinds with this game type."""

    game_type: str


@dataclass(frozen=True)
class LocationScope:
    """Live sessions at this location. Online sessions have no location."""

    location: str


SessionFilter = Union[AllSessions, LiveOnly, OnlineOnly, PlatformScope, GameTypeScope, LocationScope]


# =============================================================================
# RESULT
# =============================================================================

@dataclass(frozen=True)
class StatsResult:
    """
    Consolidated statistics over a filtered set of sessions.

    All money is in base currency except where noted. Every derived ratio
    is 0 when its denominator is 0.

    Attributes:
        net_result: net_result_no_adj + adjustments_total
        net_result_no_adj: Sum of session results (base)
        total_hours: Sum of computed durations
        total_hands: Sum of effective hands
        session_count: Sessions after filtering
        win_count: Sessions with a positive native result
        lose_count: All other sessions (no push bucket)
        adjustments_total: Sum of included adjustments (0 when hidden)
        total_bb_won: Sum of bb_won (big-blind units)
        total_buy_in: Sum of buy-in in base currency
        total_tips: Live tips in base currency
        biggest_win: Largest single base result (0 if no winning session)
        biggest_loss: Smallest single base result (0 if no losing session)
        longest_session: Longest computed duration in hours
        longest_win_streak / longest_lose_streak: Chronological runs
    """

    net_result: Decimal = ZERO
    net_result_no_adj: Decimal = ZERO
    total_hours: Decimal = ZERO
    total_hands: int = 0
    session_count: int = 0
    win_count: int = 0
    lose_count: int = 0
    adjustments_total: Decimal = ZERO
    total_bb_won: Decimal = ZERO
    total_buy_in: Decimal = ZERO
    total_tips: Decimal = ZERO
    biggest_win: Decimal = ZERO
    biggest_loss: Decimal = ZERO
    longest_session: Decimal = ZERO
    longest_win_streak: int = 0
    longest_lose_streak: int = 0

    @property
    def hourly_rate(self) -> Decimal:
        return safe_divide(self.net_result, self.total_hours)

    @property
    def avg_result(self) -> Decimal:
        return safe_divide(self.net_result, Decimal(self.session_count))

    @property
    def avg_session_duration(self) -> Decimal:
        return safe_divide(self.total_hours, Decimal(self.session_count))

    @property
    def avg_buy_in(self) -> Decimal:
        return safe_divide(self.total_buy_in, Decimal(self.session_count))

    @property
    def win_rate(self) -> Decimal:
        """Fraction of sessions won, 0..1."""
        return safe_divide(Decimal(self.win_count), Decimal(self.session_count))

    @property
    def bb_per_hour(self) -> Decimal:
        return safe_divide(self.total_bb_won, self.total_hours)

    @property
    def bb_per_100(self) -> Decimal:
        return safe_divide(self.total_bb_won, Decimal(self.total_hands)) * HUNDRED


# =============================================================================
# FILTER OPTIONS & SUMMARIES
# =============================================================================

@dataclass(frozen=True)
class PlatformOption:
    platform_id: int
    name: str
    currency: str


@dataclass(frozen=True)
class FilterOptions:
    platforms: tuple[PlatformOption, ...] = ()
    game_types: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()


@dataclass(frozen=True)
class AdjustmentEntry:
    adjustment_id: int
    name: str
    date: datetime | None
    amount: Decimal
    currency: str
    amount_base: Decimal
    is_online: bool
    platform_id: int | None


@dataclass(frozen=True)
class AdjustmentsSummary:
    entries: tuple[AdjustmentEntry, ...] = field(default_factory=tuple)
    total_base: Decimal = ZERO
