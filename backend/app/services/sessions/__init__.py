# backend/app/services/sessions/__init__.py
"""
Session Normalization Package.

Gives online and live cash sessions one analytic contract (SessionMetrics)
so statistics reduce over a single sequence.

Usage:
    from app.services.sessions import OnlineCashMetrics, HandsPerHour

    metrics = OnlineCashMetrics(session, HandsPerHour(online=60, live=25))
    metrics.computed_duration
    metrics.effective_hands

Architecture:
    sessions/
    ├── __init__.py     # This file - package exports
    ├── types.py        # HandsPerHour, feed data classes
    ├── metrics.py      # OnlineCashMetrics, LiveCashMetrics, format_blinds
    └── feed.py         # SessionFeedService (month-grouped listing)
"""

from app.services.sessions.types import (
    HandsPerHour,
    SettledResult,
    SessionSummary,
    SessionMonth,
    SessionFeed,
)
from app.services.sessions.metrics import (
    SessionMetrics,
    OnlineCashMetrics,
    LiveCashMetrics,
    format_blinds,
    normalize_sessions,
    settle_online_result,
)
from app.services.sessions.feed import SessionFeedService

__all__ = [
    "HandsPerHour",
    "SettledResult",
    "SessionSummary",
    "SessionMonth",
    "SessionFeed",
    "SessionMetrics",
    "OnlineCashMetrics",
    "LiveCashMetrics",
    "format_blinds",
    "normalize_sessions",
    "settle_online_result",
    "SessionFeedService",
]
