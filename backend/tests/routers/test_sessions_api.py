# backend/tests/routers/test_sessions_api.py
"""Integration tests for GET /sessions."""

from datetime import datetime, timedelta
from decimal import Decimal

from conftest import create_live_session, create_online_session, create_platform


class TestSessionFeed:

    def test_grouped_by_month(self, client, db):
        platform = create_platform(db, name="GGPoker")
        create_online_session(db, platform, datetime(2024, 3, 5, 20), datetime(2024, 3, 5, 21), net="12.50")
        create_live_session(db, datetime(2024, 3, 20, 19), datetime(2024, 3, 20, 22), buy_in="300", cash_out="360")
        create_live_session(db, datetime(2024, 1, 8, 19), datetime(2024, 1, 8, 22), buy_in="300", cash_out="0")

        response = client.get("/sessions")

        assert response.status_code == 200
        data = response.json()
        assert data["session_count"] == 3
        assert [m["month"] for m in data["months"]] == ["2024-03", "2024-01"]

        march = data["months"][0]
        assert Decimal(march["net_result_base"]) == Decimal("72.50")
        assert [s["kind"] for s in march["sessions"]] == ["live", "online"]
        assert march["sessions"][1]["venue"] == "GGPoker"
        assert march["sessions"][0]["venue"] == "Casino Niagara"
        assert march["sessions"][0]["blinds"] == "1/2"

    def test_scope_online(self, client, db):
        platform = create_platform(db)
        create_online_session(db, platform, datetime(2024, 3, 5, 20), datetime(2024, 3, 5, 21), net="10")
        create_live_session(db, datetime(2024, 3, 6, 19), datetime(2024, 3, 6, 22), buy_in="100", cash_out="50")

        data = client.get("/sessions", params={"scope": "online"}).json()

        assert data["session_count"] == 1
        assert data["months"][0]["sessions"][0]["kind"] == "online"

    def test_active_session(self, client, db):
        started = datetime.now().replace(microsecond=0) - timedelta(hours=1)
        create_live_session(db, started, None, buy_in="200", cash_out="0")

        data = client.get("/sessions").json()
        session = data["months"][0]["sessions"][0]

        assert session["is_active"] is True

    def test_empty(self, client):
        data = client.get("/sessions").json()
        assert data == {"session_count": 0, "months": []}

    def test_invalid_scope(self, client):
        response = client.get("/sessions", params={"scope": "location"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "location"}
