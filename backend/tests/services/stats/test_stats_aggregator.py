# backend/tests/services/stats/test_stats_aggregator.py
"""
Unit tests for compute_stats.

Three sessions and three adjustments, reduced under different date
filters, scopes and adjustment settings.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pytest

from app.services.sessions.types import HandsPerHour
from app.services.stats.aggregator import compute_stats, sum_adjustments
from app.services.stats.types import (
    AllSessions,
    AllTime,
    LiveOnly,
    PlatformScope,
    StatsResult,
    CustomRange,
    GameTypeScope,
    ThisMonth,
)

NOW = datetime(2024, 3, 15, 12, 0)
HPH = HandsPerHour(online=60, live=25)


# =============================================================================
# MOCK OBJECTS
# =============================================================================

@dataclass
class MockOnlineSession:
    start_time: datetime | None
    end_time: datetime | None
    net_profit_loss: Decimal
    net_profit_loss_base: Decimal
    platform_id: int | None = 1
    balance_before: Decimal = Decimal("0")
    exchange_rate_to_base: Decimal = Decimal("0")
    duration: Decimal = Decimal("0")
    break_minutes: int = 0
    tables: int = 1
    hands_count: int = 0
    game_type: str | None = "No Limit Hold'em"
    small_blind: Decimal = Decimal("0.25")
    big_blind: Decimal = Decimal("0.50")
    straddle: Decimal = Decimal("0")
    ante: Decimal = Decimal("0")


@dataclass
class MockLiveSession:
    start_time: datetime | None
    end_time: datetime | None
    buy_in: Decimal
    cash_out: Decimal
    tips: Decimal = Decimal("0")
    location: str | None = "Casino Niagara"
    duration: Decimal = Decimal("0")
    break_minutes: int = 0
    hands_count: int = 0
    game_type: str | None = "No Limit Hold'em"
    small_blind: Decimal = Decimal("1")
    big_blind: Decimal = Decimal("2")
    straddle: Decimal = Decimal("0")
    ante: Decimal = Decimal("0")
    exchange_rate_to_base: Decimal = Decimal("0")
    exchange_rate_buy_in: Decimal = Decimal("0")
    exchange_rate_cash_out: Decimal = Decimal("0")


@dataclass
class MockAdjustment:
    amount_base: Decimal
    date: datetime | None
    platform_id: int | None = None


@pytest.fixture
def records():
    online = [
        MockOnlineSession(
            start_time=datetime(2024, 3, 1, 20, 0),
            end_time=datetime(2024, 3, 1, 22, 0),
            net_profit_loss=Decimal("50"),
            net_profit_loss_base=Decimal("68"),
            platform_id=1,
            balance_before=Decimal("500"),
            exchange_rate_to_base=Decimal("1.36"),
        ),
        MockOnlineSession(
            start_time=datetime(2024, 3, 2, 20, 0),
            end_time=datetime(2024, 3, 2, 21, 0),
            net_profit_loss=Decimal("-20"),
            net_profit_loss_base=Decimal("-27.2"),
            platform_id=2,
            balance_before=Decimal("400"),
            exchange_rate_to_base=Decimal("1.36"),
        ),
    ]
    live = [
        MockLiveSession(
            start_time=datetime(2024, 3, 3, 19, 0),
            end_time=datetime(2024, 3, 3, 23, 0),
            buy_in=Decimal("300"),
            cash_out=Decimal("480"),
            tips=Decimal("20"),
        ),
    ]
    adjustments = [
        MockAdjustment(amount_base=Decimal("40"), date=datetime(2024, 3, 5), platform_id=1),
        MockAdjustment(amount_base=Decimal("-10"), date=None),
        MockAdjustment(amount_base=Decimal("25"), date=datetime(2024, 2, 1), platform_id=2),
    ]
    return online, live, adjustments


def _stats(records, date_filter=AllTime(), session_filter=AllSessions(), show_adjustments=True) -> StatsResult:
    online, live, adjustments = records
    return compute_stats(
        online=online,
        live=live,
        adjustments=adjustments,
        date_filter=date_filter,
        session_filter=session_filter,
        show_adjustments=show_adjustments,
        hands_per_hour=HPH,
        now=NOW,
    )


# =============================================================================
# TESTS
# =============================================================================

class TestComputeStats:

    def test_totals(self, records):
        stats = _stats(records)

        assert stats.net_result_no_adj == Decimal("220.8")
        assert stats.adjustments_total == Decimal("55")
        assert stats.net_result == Decimal("275.8")
        assert stats.total_hours == Decimal("7")
        assert stats.total_hands == 280
        assert stats.total_bb_won == Decimal("150")
        assert stats.total_buy_in == Decimal("1524")
        assert stats.total_tips == Decimal("20")

    def test_counts(self, records):
        stats = _stats(records)

        assert stats.session_count == 3
        assert stats.win_count == 2
        assert stats.lose_count == 1
        assert stats.win_count + stats.lose_count == stats.session_count

    def test_extremes_and_streaks(self, records):
        stats = _stats(records)

        assert stats.biggest_win == Decimal("180")
        assert stats.biggest_loss == Decimal("-27.2")
        assert stats.longest_session == Decimal("4")
        assert (stats.longest_win_streak, stats.longest_lose_streak) == (1, 1)

    def test_ratios(self, records):
        stats = _stats(records)

        assert stats.hourly_rate == Decimal("275.8") / Decimal("7")
        assert stats.avg_result == Decimal("275.8") / Decimal("3")
        assert stats.avg_buy_in == Decimal("508")
        assert stats.win_rate == Decimal("2") / Decimal("3")
        assert stats.bb_per_hour == Decimal("150") / Decimal("7")
        assert stats.bb_per_100 == Decimal("150") / Decimal("280") * 100

    def test_hidden_adjustments(self, records):
        stats = _stats(records, show_adjustments=False)

        assert stats.adjustments_total == Decimal("0")
        assert stats.net_result == stats.net_result_no_adj == Decimal("220.8")

    def test_platform_scope_limits_adjustments(self, records):
        stats = _stats(records, session_filter=PlatformScope(platform_id=1))

        assert stats.session_count == 1
        assert stats.adjustments_total == Decimal("40")
        assert stats.net_result == Decimal("108")

    def test_this_month_excludes_old_and_undated_adjustments(self, records):
        stats = _stats(records, date_filter=ThisMonth())

        assert stats.session_count == 3
        assert stats.adjustments_total == Decimal("40")

    def test_no_losing_session(self, records):
        stats = _stats(records, session_filter=LiveOnly(), show_adjustments=False)

        assert stats.session_count == 1
        assert stats.biggest_loss == Decimal("0")
        assert stats.biggest_win == Decimal("180")

    def test_empty_input(self):
        stats = _stats(([], [], []))

        assert stats == StatsResult()
        assert stats.hourly_rate == Decimal("0")
        assert stats.avg_result == Decimal("0")
        assert stats.win_rate == Decimal("0")
        assert stats.bb_per_100 == Decimal("0")

    def test_net_result_identity(self, records):
        for show in (True, False):
            stats = _stats(records, show_adjustments=show)
            assert stats.net_result == stats.net_result_no_adj + stats.adjustments_total

    def test_same_filters_give_same_result(self, records):
        date_filter = CustomRange(start=datetime(2024, 3, 1), end=datetime(2024, 3, 2))
        scope = PlatformScope(platform_id=1)

        first = _stats(records, date_filter=date_filter, session_filter=scope)
        second = _stats(records, date_filter=date_filter, session_filter=scope)

        assert first.session_count == 1
        assert first == second

    def test_game_type_scope_skips_unset_game_type(self):
        live = [
            MockLiveSession(
                start_time=datetime(2024, 3, 3, 19, 0),
                end_time=datetime(2024, 3, 3, 23, 0),
                buy_in=Decimal("300"),
                cash_out=Decimal("400"),
                game_type="Hold'em",
            ),
            MockLiveSession(
                start_time=datetime(2024, 3, 4, 19, 0),
                end_time=datetime(2024, 3, 4, 23, 0),
                buy_in=Decimal("300"),
                cash_out=Decimal("200"),
                game_type=None,
            ),
        ]
        online = [
            MockOnlineSession(
                start_time=datetime(2024, 3, 5, 20, 0),
                end_time=datetime(2024, 3, 5, 21, 0),
                net_profit_loss=Decimal("10"),
                net_profit_loss_base=Decimal("10"),
                game_type=None,
            ),
        ]

        stats = _stats((online, live, []), session_filter=GameTypeScope(game_type="Hold'em"))

        assert stats.session_count == 1
        assert stats.net_result == Decimal("100")


class TestSumAdjustments:

    def test_all_time_includes_undated(self, records):
        _, _, adjustments = records
        assert sum_adjustments(adjustments, AllTime(), NOW) == Decimal("55")

    def test_platform_filter(self, records):
        _, _, adjustments = records
        assert sum_adjustments(adjustments, AllTime(), NOW, platform_id=2) == Decimal("25")
