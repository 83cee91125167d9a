# backend/tests/test_correlation_id.py
"""
Tests for correlation ID middleware and context management.
"""

from app.utils.context import (
    clear_correlation_id,
    clear_request_context,
    get_correlation_id,
    get_request_context,
    set_correlation_id,
    set_request_context,
)


class TestCorrelationIdContext:
    """Tests for correlation ID context functions."""

    def test_get_returns_none_when_not_set(self):
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        clear_correlation_id()

    def test_clear_correlation_id(self):
        set_correlation_id("test-correlation-456")
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_request_context(self):
        set_request_context("path", "/stats")
        assert get_request_context()["path"] == "/stats"

        clear_request_context()
        assert get_request_context() == {}


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id_when_not_provided(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        correlation_id = response.headers["X-Correlation-ID"]
        assert len(correlation_id) == 36  # UUID length
        assert correlation_id.count("-") == 4

    def test_uses_provided_correlation_id(self, client):
        custom_id = "my-custom-trace-id-123"
        response = client.get("/health", headers={"X-Correlation-ID": custom_id})

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"] == custom_id

    def test_uses_request_id_header_as_fallback(self, client):
        custom_id = "my-request-id-456"
        response = client.get("/health/live", headers={"X-Request-ID": custom_id})

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"] == custom_id

    def test_prefers_correlation_id_over_request_id(self, client):
        response = client.get(
            "/health",
            headers={
                "X-Correlation-ID": "correlation-123",
                "X-Request-ID": "request-456",
            }
        )

        assert response.headers["X-Correlation-ID"] == "correlation-123"

    def test_present_on_error_responses(self, client):
        response = client.get("/platforms/999/valuation")

        assert response.status_code == 404
        assert "X-Correlation-ID" in response.headers

    def test_different_requests_get_different_ids(self, client):
        id1 = client.get("/health/live").headers["X-Correlation-ID"]
        id2 = client.get("/health/live").headers["X-Correlation-ID"]

        assert id1 != id2
