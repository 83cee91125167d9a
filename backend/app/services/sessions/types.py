# backend/app/services/sessions/types.py
"""
Internal data types for session normalization.

Design Principles:
- Immutable (frozen=True) value objects
- Use Decimal for ALL financial values (never float)
- Settings the metrics depend on are passed in, never looked up

Type Hierarchy:
    HandsPerHour       - Hand-count estimates for sessions without a logged count
    SettledResult      - Native and base result of a finished online session
    SessionSummary     - One normalized session, ready for listing
    SessionMonth       - Sessions of one calendar month with their total
    SessionFeed        - Month groups, newest first
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class HandsPerHour:
    """
    Hands-per-hour estimates.

    Attributes:
        online: Hands per hour for ONE online table
        live: Hands per hour at a live table
    """

    online: int = 85
    live: int = 25


@dataclass(frozen=True)
class SettledResult:
    """Result of an online session as stored when it is settled."""

    net_profit_loss: Decimal
    net_profit_loss_base: Decimal
    exchange_rate_to_base: Decimal


@dataclass(frozen=True)
class SessionSummary:
    """
    A normalized session of either kind.

    Attributes:
        session_id: Database ID within its own kind
        kind: "online" or "live"
        venue: Platform name for online, location for live
        net_result: Native currency
        net_result_base: Base currency
    """

    session_id: int
    kind: str
    session_date: datetime
    game_type: str
    blinds: str
    venue: str
    duration_hours: Decimal
    hands: int
    net_result: Decimal
    net_result_base: Decimal
    bb_won: Decimal
    bb_per_100: Decimal
    is_active: bool


@dataclass(frozen=True)
class SessionMonth:
    """Sessions of one calendar month, newest first."""

    month: str
    sessions: tuple[SessionSummary, ...]
    net_result_base: Decimal


@dataclass(frozen=True)
class SessionFeed:
    months: tuple[SessionMonth, ...]
    session_count: int
