# backend/tests/routers/test_settings_api.py
"""Integration tests for GET /settings."""

from decimal import Decimal


class TestSettings:

    def test_defaults(self, client):
        response = client.get("/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["base_currency"] == "CAD"
        assert data["hands_per_hour"] == {"online": 85, "live": 25}
        assert data["show_adjustments_in_stats"] is True
        assert "USD" in data["supported_currencies"]
        assert "No Limit Hold'em" in data["game_types"]
        assert "E-Transfer" in data["deposit_methods"]
        assert "Check" in data["withdrawal_methods"]
        assert len(data["default_rates"]) == len(data["supported_currencies"])

    def test_default_rates(self, client):
        rates = {r["currency"]: Decimal(r["rate"]) for r in client.get("/settings").json()["default_rates"]}

        assert rates["CAD"] == Decimal("1")
        assert rates["USD"] == Decimal("1.36")
        assert rates["EUR"] == Decimal("1.47")
        assert rates["GBP"] == Decimal("1")

    def test_single_currency(self, client):
        data = client.get("/settings", params={"currency": "usd"}).json()

        assert data["default_rates"] == [
            {"currency": "USD", "base_currency": "CAD", "rate": "1.36"},
        ]

    def test_unsupported_currency(self, client):
        response = client.get("/settings", params={"currency": "XYZ"})

        assert response.status_code == 400
        assert response.json()["error"] == "UnsupportedCurrencyError"
