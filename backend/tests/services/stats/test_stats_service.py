# backend/tests/services/stats/test_stats_service.py
"""
Tests for StatsService against an in-memory database.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from app.services.sessions.types import HandsPerHour
from app.services.stats import AllSessions, AllTime, StatsService, ThisYear

from conftest import (
    create_adjustment,
    create_live_session,
    create_online_session,
    create_platform,
)

NOW = datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def service() -> StatsService:
    return StatsService(hands_per_hour=HandsPerHour(online=60, live=25))


@pytest.fixture
def seeded(db):
    stars = create_platform(db, name="PokerStars")
    ggpoker = create_platform(db, name="GGPoker")
    create_online_session(
        db, stars, datetime(2024, 6, 1, 20, 0), datetime(2024, 6, 1, 22, 0), net="40",
        game_type="Pot Limit Omaha",
    )
    create_online_session(
        db, ggpoker, datetime(2024, 6, 2, 20, 0), datetime(2024, 6, 2, 21, 0), net="-15",
    )
    create_live_session(
        db, datetime(2024, 6, 3, 19, 0), datetime(2024, 6, 3, 23, 0), buy_in="300", cash_out="400",
        location="Playground",
    )
    create_live_session(
        db, datetime(2024, 5, 3, 19, 0), datetime(2024, 5, 3, 23, 0), buy_in="300", cash_out="200",
        location="Casino Niagara", game_type=None,
    )
    create_adjustment(db, "30", date=datetime(2024, 6, 10), platform=stars)
    create_adjustment(db, "-5", date=datetime(2023, 12, 31), name="Parking")
    create_adjustment(db, "12", date=None, name="Bonus")
    return stars, ggpoker


class TestGetStats:

    def test_default_includes_adjustments(self, db, service, seeded):
        stats = service.get_stats(db, AllTime(), AllSessions(), now=NOW)

        assert stats.session_count == 4
        assert stats.net_result_no_adj == Decimal("25")
        assert stats.adjustments_total == Decimal("37")
        assert stats.net_result == Decimal("62")

    def test_request_overrides_default(self, db, service, seeded):
        stats = service.get_stats(db, AllTime(), AllSessions(), show_adjustments=False, now=NOW)
        assert stats.net_result == Decimal("25")

    def test_configured_default(self, db, seeded):
        service = StatsService(show_adjustments_default=False)

        stats = service.get_stats(db, AllTime(), AllSessions(), now=NOW)

        assert stats.adjustments_total == Decimal("0")

    def test_this_year(self, db, service, seeded):
        stats = service.get_stats(db, ThisYear(), AllSessions(), now=NOW)

        assert stats.session_count == 4
        assert stats.adjustments_total == Decimal("30")


class TestFilterOptions:

    def test_options(self, db, service, seeded):
        stars, ggpoker = seeded

        options = service.get_filter_options(db)

        assert [(p.platform_id, p.name, p.currency) for p in options.platforms] == [
            (stars.id, "PokerStars", "USD"),
            (ggpoker.id, "GGPoker", "USD"),
        ]
        assert options.game_types == ("No Limit Hold'em", "Pot Limit Omaha")
        assert options.locations == ("Casino Niagara", "Playground")

    def test_empty(self, db, service):
        options = service.get_filter_options(db)

        assert options.platforms == ()
        assert options.game_types == ()
        assert options.locations == ()


class TestAdjustments:

    def test_newest_first_undated_last(self, db, service, seeded):
        summary = service.get_adjustments(db, AllTime(), now=NOW)

        assert [e.name for e in summary.entries] == ["Rakeback", "Parking", "Bonus"]
        assert summary.total_base == Decimal("37")
        assert summary.entries[0].is_online is True
        assert summary.entries[1].platform_id is None

    def test_period(self, db, service, seeded):
        summary = service.get_adjustments(db, ThisYear(), now=NOW)

        assert [e.name for e in summary.entries] == ["Rakeback"]
        assert summary.total_base == Decimal("30")
