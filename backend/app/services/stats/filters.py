# backend/app/services/stats/filters.py
"""
Date and session filters for the statistics aggregator.

This module is the single dispatch site over the DateFilter and
SessionFilter unions. Adding a filter kind means adding a dataclass in
types.py and a branch here; unknown kinds raise TypeError so a missing
branch fails loudly in tests.

build_date_filter() and build_session_filter() turn request parameters
into filter values and raise InvalidFilterError on bad combinations.

"now" is injected so calendar filters are deterministic under test.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, TypeVar

from app.services.exceptions import InvalidFilterError
from app.services.sessions.metrics import SessionMetrics
from app.services.stats.types import (
    AllSessions,
    AllTime,
    CustomRange,
    DateFilter,
    GameTypeScope,
    LiveOnly,
    LocationScope,
    OnlineOnly,
    PlatformScope,
    SessionFilter,
    ThisMonth,
    ThisYear,
)
from app.utils.date_utils import end_of_day, same_month, same_year, start_of_day

M = TypeVar("M", bound=SessionMetrics)


# =============================================================================
# DATE FILTER
# =============================================================================

def date_included(date_filter: DateFilter, value: datetime, now: datetime) -> bool:
    """
    Check whether a date passes the filter.

    Args:
        date_filter: Filter to apply
        value: Date being tested
        now: Reference instant for ThisMonth / ThisYear
    """
    if isinstance(date_filter, AllTime):
        return True
    if isinstance(date_filter, ThisMonth):
        return same_month(value, now)
    if isinstance(date_filter, ThisYear):
        return same_year(value, now)
    if isinstance(date_filter, CustomRange):
        return date_filter.start <= value <= date_filter.end
    raise TypeError(f"Unknown date filter: {date_filter!r}")


def filter_by_date(sessions: Iterable[M], date_filter: DateFilter, now: datetime) -> list[M]:
    return [s for s in sessions if date_included(date_filter, s.session_date, now)]


# =============================================================================
# SESSION FILTER
# =============================================================================

def apply_session_filter(
        session_filter: SessionFilter,
        online: list[M],
        live: list[M],
) -> tuple[list[M], list[M]]:
    """
    Narrow online and live sessions to the filter's scope.

    Returns:
        (online, live) after filtering
    """
    if isinstance(session_filter, AllSessions):
        return online, live
    if isinstance(session_filter, LiveOnly):
        return [], live
    if isinstance(session_filter, OnlineOnly):
        return online, []
    if isinstance(session_filter, PlatformScope):
        return [s for s in online if s.platform_id == session_filter.platform_id], []
    if isinstance(session_filter, GameTypeScope):
        return (
            [s for s in online if s.game_type == session_filter.game_type],
            [s for s in live if s.game_type == session_filter.game_type],
        )
    if isinstance(session_filter, LocationScope):
        return [], [s for s in live if s.location == session_filter.location]
    raise TypeError(f"Unknown session filter: {session_filter!r}")


def adjustment_platform_scope(session_filter: SessionFilter) -> int | None:
    """Platform the adjustments are restricted to, or None for no restriction."""
    if isinstance(session_filter, PlatformScope):
        return session_filter.platform_id
    return None


# =============================================================================
# CONSTRUCTION FROM REQUEST PARAMETERS
# =============================================================================

DATE_PERIODS = ("all_time", "this_month", "this_year", "custom")
SESSION_SCOPES = ("all", "live", "online", "platform", "game_type", "location")


def build_date_filter(
        period: str,
        start_date: date | None = None,
        end_date: date | None = None,
) -> DateFilter:
    """
    Build a DateFilter from a period name.

    Custom ranges cover whole days: start_date 00:00 to end_date 23:59:59.999999.

    Raises:
        InvalidFilterError: Unknown period, or custom without a valid range
    """
    if period == "all_time":
        return AllTime()
    if period == "this_month":
        return ThisMonth()
    if period == "this_year":
        return ThisYear()
    if period == "custom":
        if start_date is None or end_date is None:
            raise InvalidFilterError(
                "Custom period requires both start_date and end_date",
                field="start_date" if start_date is None else "end_date",
            )
        if start_date > end_date:
            raise InvalidFilterError(
                f"start_date ({start_date}) must not be after end_date ({end_date})",
                field="start_date",
            )
        return CustomRange(start=start_of_day(start_date), end=end_of_day(end_date))
    raise InvalidFilterError(
        f"Invalid period: '{period}'. Valid options: {', '.join(DATE_PERIODS)}",
        field="period",
    )


def build_session_filter(
        scope: str,
        platform_id: int | None = None,
        game_type: str | None = None,
        location: str | None = None,
) -> SessionFilter:
    """
    Build a SessionFilter from a scope name and its argument.

    Raises:
        InvalidFilterError: Unknown scope, or a scope missing its argument
    """
    if scope == "all":
        return AllSessions()
    if scope == "live":
        return LiveOnly()
    if scope == "online":
        return OnlineOnly()
    if scope == "platform":
        if platform_id is None:
            raise InvalidFilterError("Scope 'platform' requires platform_id", field="platform_id")
        return PlatformScope(platform_id=platform_id)
    if scope == "game_type":
        if not game_type:
            raise InvalidFilterError("Scope 'game_type' requires game_type", field="game_type")
        return GameTypeScope(game_type=game_type)
    if scope == "location":
        if not location:
            raise InvalidFilterError("Scope 'location' requires location", field="location")
        return LocationScope(location=location)
    raise InvalidFilterError(
        f"Invalid scope: '{scope}'. Valid options: {', '.join(SESSION_SCOPES)}",
        field="scope",
    )
