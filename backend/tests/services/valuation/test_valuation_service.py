# backend/tests/services/valuation/test_valuation_service.py
"""
Integration tests for ValuationService against an in-memory SQLite database.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from app.services.exceptions import PlatformNotFoundError
from app.services.valuation import ValuationService
from conftest import (
    create_adjustment,
    create_deposit,
    create_online_session,
    create_platform,
    create_withdrawal,
)


@pytest.fixture
def service() -> ValuationService:
    return ValuationService(base_currency="CAD")


class TestGetPlatformValuation:

    def test_values_stored_platform(self, db, service):
        platform = create_platform(db, name="PokerStars", currency="USD", current_balance="1200")
        create_deposit(db, platform, "800", "1000", date=datetime(2024, 1, 1), rate="1.25")
        create_adjustment(db, "40", date=datetime(2024, 1, 5), platform=platform)

        valuation = service.get_platform_valuation(db, platform.id)

        assert valuation.name == "PokerStars"
        assert valuation.base_currency == "CAD"
        assert valuation.latest_rate == Decimal("0.8")
        assert valuation.net_result == Decimal("200")
        assert valuation.net_result_native == Decimal("250")
        assert valuation.adjustment_count == 1

    def test_missing_platform_raises(self, db, service):
        with pytest.raises(PlatformNotFoundError) as exc_info:
            service.get_platform_valuation(db, 999)

        assert exc_info.value.platform_id == 999
        assert "999" in str(exc_info.value)

    def test_unseeded_platform(self, db, service):
        platform = create_platform(db, current_balance="500")

        valuation = service.get_platform_valuation(db, platform.id)

        assert valuation.net_result == Decimal("0")
        assert valuation.net_result_native == Decimal("0")


class TestGetBankrollSummary:

    def test_empty_database(self, db, service):
        summary = service.get_bankroll_summary(db)

        assert summary.platforms == ()
        assert summary.total_net_result == Decimal("0")
        assert summary.total_balance_base == Decimal("0")

    def test_totals_across_platforms(self, db, service):
        usd = create_platform(db, name="PokerStars", currency="USD", current_balance="1200")
        create_deposit(db, usd, "800", "1000", date=datetime(2024, 1, 1), rate="1.25")

        cad = create_platform(db, name="PlayNow", currency="CAD", current_balance="300")
        create_deposit(db, cad, "500", "500", date=datetime(2024, 1, 2))
        create_withdrawal(db, cad, "100", "100", date=datetime(2024, 2, 1))

        create_online_session(db, usd, datetime(2024, 1, 3, 20), datetime(2024, 1, 3, 22), net="50")
        create_online_session(db, usd, datetime(2024, 1, 4, 20), datetime(2024, 1, 4, 22), net="-20")

        summary = service.get_bankroll_summary(db)

        assert [v.name for v in summary.platforms] == ["PokerStars", "PlayNow"]
        # 160 + (100 + 300 - 500)
        assert summary.total_net_result == Decimal("60")
        assert summary.total_deposited == Decimal("1300")
        assert summary.total_withdrawn == Decimal("100")
        assert summary.total_balance_base == Decimal("1260")
        assert summary.session_counts == {usd.id: 2, cad.id: 0}
