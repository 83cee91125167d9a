# backend/app/services/stats/__init__.py
"""
Statistics Aggregator Package.

Reduces online sessions, live sessions and adjustments into one
StatsResult under a date filter and a session filter.

Usage:
    from app.services.stats import compute_stats, ThisMonth, AllSessions

    stats = compute_stats(online, live, adjustments, ThisMonth(), AllSessions(),
                          show_adjustments=True, hands_per_hour=HandsPerHour())
    stats.hourly_rate

Architecture:
    stats/
    ├── __init__.py      # This file - package exports
    ├── types.py         # Filters, StatsResult, filter options
    ├── filters.py       # Single dispatch site over the filter unions
    ├── streaks.py       # Longest win / lose runs
    ├── aggregator.py    # compute_stats (pure)
    └── service.py       # StatsService (loads records, calls compute_stats)
"""

from app.services.stats.types import (
    AllTime,
    ThisMonth,
    ThisYear,
    CustomRange,
    DateFilter,
    AllSessions,
    LiveOnly,
    OnlineOnly,
    PlatformScope,
    GameTypeScope,
    LocationScope,
    SessionFilter,
    StatsResult,
    PlatformOption,
    FilterOptions,
    AdjustmentEntry,
    AdjustmentsSummary,
)
from app.services.stats.filters import (
    build_date_filter,
    build_session_filter,
)
from app.services.stats.streaks import longest_streaks
from app.services.stats.aggregator import compute_stats, sum_adjustments
from app.services.stats.service import StatsService

__all__ = [
    # Filters
    "AllTime",
    "ThisMonth",
    "ThisYear",
    "CustomRange",
    "DateFilter",
    "AllSessions",
    "LiveOnly",
    "OnlineOnly",
    "PlatformScope",
    "GameTypeScope",
    "LocationScope",
    "SessionFilter",
    "build_date_filter",
    "build_session_filter",
    # Results
    "StatsResult",
    "PlatformOption",
    "FilterOptions",
    "AdjustmentEntry",
    "AdjustmentsSummary",
    # Functions and service
    "compute_stats",
    "sum_adjustments",
    "longest_streaks",
    "StatsService",
]
