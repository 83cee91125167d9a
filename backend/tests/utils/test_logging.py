# backend/tests/utils/test_logging.py
"""Tests for the log filter, JSON formatter and setup."""

import json
import logging

import pytest

from app.utils.context import (
    clear_correlation_id,
    clear_request_context,
    set_correlation_id,
    set_request_context,
)
from app.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
)


def _record(message: str = "Stats computed", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.services.stats.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationIdFilter:

    def test_outside_request(self):
        clear_correlation_id()
        clear_request_context()
        record = _record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == NO_CORRELATION_ID
        assert record.request_path is None

    def test_inside_request(self):
        set_correlation_id("abc-123")
        set_request_context("path", "/stats")
        try:
            record = _record()
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()
            clear_request_context()

        assert record.correlation_id == "abc-123"
        assert record.request_path == "/stats"


class TestJsonFormatter:

    def test_fields(self):
        record = _record(correlation_id="abc-123", request_path="/sessions")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "app.services.stats.service"
        assert entry["correlation_id"] == "abc-123"
        assert entry["path"] == "/sessions"
        assert entry["message"] == "Stats computed"
        assert "extra" not in entry

    def test_extra_fields(self):
        record = _record(correlation_id="abc-123", request_path=None, session_count=42, when=object())

        entry = json.loads(JsonFormatter().format(record))

        assert "path" not in entry
        assert entry["extra"]["session_count"] == 42
        assert isinstance(entry["extra"]["when"], str)


class TestLogLevel:

    def test_case_insensitive(self):
        assert _get_log_level(" warning ") == logging.WARNING

    def test_invalid(self):
        with pytest.raises(ValueError):
            _get_log_level("LOUD")
