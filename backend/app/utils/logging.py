# backend/app/utils/logging.py
"""
Logging configuration for the Bankroll Ledger.

One stdout handler on the root logger, in either format:
- text: "timestamp | LEVEL | correlation-id | logger | message"
- json: one object per line, for log shippers

Every record carries the correlation ID of the request being served
(see CorrelationIdMiddleware), so the lines one /stats call produces can
be grepped together.

Usage:
    from app.utils.logging import setup_logging

    setup_logging()                      # LOG_LEVEL / LOG_FORMAT from settings
    setup_logging(level="DEBUG")         # override for a local run

Log Levels:
    DEBUG   - Record counts loaded, per-platform valuation detail
    INFO    - Requests served, summaries computed
    WARNING - Rejected filters, missing platforms, rate limits
    ERROR   - Database failures, unexpected exceptions
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from app.config import settings
from app.utils.context import get_correlation_id, get_request_context

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# Raised to WARNING unless DEBUG=true asks for SQL echo
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "slowapi",
    "httpx",
    "httpcore",
    "asyncio",
]

# LogRecord attributes that are not user-supplied `extra` fields
_STANDARD_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "correlation_id", "request_path", "message", "taskName",
})

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


# =============================================================================
# FILTER
# =============================================================================

class CorrelationIdFilter(logging.Filter):
    """
    Stamps records with correlation_id and request_path.

    Outside a request the ID is NO_CORRELATION_ID and the path is None.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        record.request_path = get_request_context().get("path")
        return True


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JsonFormatter(logging.Formatter):
    """
    One JSON object per record:

    {
        "timestamp": "2026-01-15T10:30:00.123+00:00",
        "level": "INFO",
        "logger": "app.services.stats.service",
        "correlation_id": "abc-123-def",
        "path": "/stats",
        "message": "Stats computed over 42 sessions",
        "extra": {...}
    }

    "path" appears only inside a request, "extra" only when the call
    passed extra fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        request_path = getattr(record, "request_path", None)
        if request_path:
            log_entry["path"] = request_path

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_RECORD_ATTRS:
                continue
            try:
                json.dumps(value)
                extra[key] = value
            except (TypeError, ValueError):
                extra[key] = str(value)

        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry)


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
) -> None:
    """
    Configure the root logger. Call once, before the app is created.

    Args:
        level: Overrides settings.log_level
        log_format: "text" or "json"; overrides settings.log_format
        suppress_noisy_loggers: Raise NOISY_LOGGERS to WARNING

    Raises:
        ValueError: Unknown level name
    """
    log_level_str = level or settings.log_level
    log_level = _get_log_level(log_level_str)
    format_type = (log_format or settings.log_format).lower()

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=DEFAULT_TEXT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if suppress_noisy_loggers and not settings.debug:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={log_level_str}, format={format_type}",
        extra={"config": {"level": log_level_str, "format": format_type}},
    )


def _get_log_level(level_str: str) -> int:
    """Map a case-insensitive level name to its logging constant."""
    key = level_str.upper().strip()
    if key not in _LEVELS:
        raise ValueError(
            f"Invalid log level: '{level_str}'. "
            f"Valid levels are: {', '.join(_LEVELS)}"
        )
    return _LEVELS[key]
