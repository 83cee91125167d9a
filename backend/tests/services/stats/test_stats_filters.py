# backend/tests/services/stats/test_stats_filters.py
"""
Tests for date and session filters.

Covers:
- date_included for each period, including whole-day custom ranges
- build_date_filter / build_session_filter validation
- apply_session_filter for each scope
"""

from dataclasses import dataclass
from datetime import date, datetime

import pytest

from app.services.exceptions import InvalidFilterError
from app.services.stats.filters import (
    adjustment_platform_scope,
    apply_session_filter,
    build_date_filter,
    build_session_filter,
    date_included,
    filter_by_date,
)
from app.services.stats.types import (
    AllSessions,
    AllTime,
    CustomRange,
    GameTypeScope,
    LiveOnly,
    LocationScope,
    OnlineOnly,
    PlatformScope,
    ThisMonth,
    ThisYear,
)

NOW = datetime(2024, 3, 15, 12, 0)


# =============================================================================
# MOCK OBJECTS
# =============================================================================

@dataclass
class MockMetrics:
    session_date: datetime = NOW
    platform_id: int | None = None
    game_type: str = "No Limit Hold'em"
    location: str | None = None


# =============================================================================
# DATE FILTERS
# =============================================================================

class TestDateIncluded:

    def test_all_time(self):
        assert date_included(AllTime(), datetime.min, NOW) is True

    @pytest.mark.parametrize(
        "value, expected",
        [
            (datetime(2024, 3, 1, 0, 0), True),
            (datetime(2024, 3, 31, 23, 59), True),
            (datetime(2024, 2, 29, 23, 59), False),
            (datetime(2023, 3, 15, 12, 0), False),
        ],
    )
    def test_this_month(self, value, expected):
        assert date_included(ThisMonth(), value, NOW) is expected

    def test_this_year(self):
        assert date_included(ThisYear(), datetime(2024, 12, 31), NOW) is True
        assert date_included(ThisYear(), datetime(2023, 12, 31), NOW) is False

    def test_custom_range_is_inclusive(self):
        custom = build_date_filter("custom", date(2024, 3, 1), date(2024, 3, 10))

        assert date_included(custom, datetime(2024, 3, 1, 0, 0), NOW) is True
        assert date_included(custom, datetime(2024, 3, 10, 23, 30), NOW) is True
        assert date_included(custom, datetime(2024, 3, 11, 0, 0), NOW) is False
        assert date_included(custom, datetime(2024, 2, 29, 23, 59), NOW) is False

    def test_unknown_filter_type(self):
        with pytest.raises(TypeError):
            date_included("this_month", NOW, NOW)

    def test_filter_by_date(self):
        sessions = [MockMetrics(session_date=datetime(2024, 3, 2)), MockMetrics(session_date=datetime(2024, 1, 2))]

        assert filter_by_date(sessions, ThisMonth(), NOW) == [sessions[0]]


class TestBuildDateFilter:

    @pytest.mark.parametrize(
        "period, expected",
        [("all_time", AllTime()), ("this_month", ThisMonth()), ("this_year", ThisYear())],
    )
    def test_named_periods(self, period, expected):
        assert build_date_filter(period) == expected

    def test_custom_covers_whole_days(self):
        custom = build_date_filter("custom", date(2024, 3, 1), date(2024, 3, 1))

        assert isinstance(custom, CustomRange)
        assert custom.start == datetime(2024, 3, 1, 0, 0)
        assert custom.end.date() == date(2024, 3, 1)
        assert custom.end.hour == 23

    def test_custom_missing_end(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_date_filter("custom", date(2024, 3, 1), None)
        assert exc_info.value.field == "end_date"

    def test_custom_missing_start(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_date_filter("custom", None, date(2024, 3, 1))
        assert exc_info.value.field == "start_date"

    def test_custom_reversed(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_date_filter("custom", date(2024, 3, 10), date(2024, 3, 1))
        assert exc_info.value.field == "start_date"

    def test_unknown_period(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_date_filter("last_week")
        assert exc_info.value.field == "period"


class TestBuildSessionFilter:

    def test_simple_scopes(self):
        assert build_session_filter("all") == AllSessions()
        assert build_session_filter("live") == LiveOnly()
        assert build_session_filter("online") == OnlineOnly()

    def test_scopes_with_argument(self):
        assert build_session_filter("platform", platform_id=3) == PlatformScope(platform_id=3)
        assert build_session_filter("game_type", game_type="PLO") == GameTypeScope(game_type="PLO")
        assert build_session_filter("location", location="Bellagio") == LocationScope(location="Bellagio")

    @pytest.mark.parametrize("scope, field", [
        ("platform", "platform_id"),
        ("game_type", "game_type"),
        ("location", "location"),
    ])
    def test_missing_argument(self, scope, field):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_session_filter(scope)
        assert exc_info.value.field == field

    def test_unknown_scope(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            build_session_filter("tournaments")
        assert exc_info.value.field == "scope"


# =============================================================================
# SESSION FILTERS
# =============================================================================

class TestApplySessionFilter:

    @pytest.fixture
    def sessions(self):
        online = [
            MockMetrics(platform_id=1, game_type="No Limit Hold'em"),
            MockMetrics(platform_id=2, game_type="Pot Limit Omaha"),
        ]
        live = [
            MockMetrics(location="Casino Niagara", game_type="Pot Limit Omaha"),
            MockMetrics(location="Bellagio", game_type="No Limit Hold'em"),
        ]
        return online, live

    def test_all(self, sessions):
        online, live = sessions
        assert apply_session_filter(AllSessions(), online, live) == (online, live)

    def test_live_only(self, sessions):
        online, live = sessions
        assert apply_session_filter(LiveOnly(), online, live) == ([], live)

    def test_online_only(self, sessions):
        online, live = sessions
        assert apply_session_filter(OnlineOnly(), online, live) == (online, [])

    def test_platform_drops_live(self, sessions):
        online, live = sessions
        assert apply_session_filter(PlatformScope(platform_id=2), online, live) == ([online[1]], [])

    def test_game_type_keeps_both_kinds(self, sessions):
        online, live = sessions
        result = apply_session_filter(GameTypeScope(game_type="Pot Limit Omaha"), online, live)
        assert result == ([online[1]], [live[0]])

    def test_location_drops_online(self, sessions):
        online, live = sessions
        assert apply_session_filter(LocationScope(location="Bellagio"), online, live) == ([], [live[1]])

    def test_idempotent(self, sessions):
        scope = GameTypeScope(game_type="No Limit Hold'em")
        once = apply_session_filter(scope, *sessions)
        assert apply_session_filter(scope, *once) == once

    def test_unknown_filter_type(self, sessions):
        with pytest.raises(TypeError):
            apply_session_filter("live", *sessions)

    def test_adjustment_platform_scope(self):
        assert adjustment_platform_scope(PlatformScope(platform_id=4)) == 4
        assert adjustment_platform_scope(OnlineOnly()) is None
