# backend/app/services/sessions/metrics.py
"""
Session normalization: one analytic view over online and live sessions.

OnlineCashMetrics and LiveCashMetrics wrap a session record and expose the
same read-only properties (the SessionMetrics protocol). The statistics
aggregator and the session feed reduce over SessionMetrics and never
branch on the session kind.

Rules shared by both kinds:
    computed_duration = max(0, (end − start) / 3600 − break_minutes / 60)
                        falls back to the legacy duration when a timestamp is missing
    bb_won            = net_result / big_blind           (0 if big_blind ≤ 0)
    bb_per_100        = bb_won / effective_hands × 100   (0 if no hands)
    is_win            = native net_result > 0

Online:
    effective_hands   = hands_count, else int(hours × hph_online × max(1, tables))
    net_result_base   = stored net_profit_loss_base
    buy_in_base       = balance_before × exchange_rate_to_base (×1 when unset)

Live:
    net_result        = cash_out − buy_in (tips excluded)
    net_result_base   = cash_out × rate_cash_out − buy_in × rate_buy_in when both
                        dual rates are set, else net_result × exchange_rate_to_base
                        (×1 when unset)
    effective_hands   = hands_count, else int(hours × hph_live)

Usage:
    metrics = LiveCashMetrics(session, HandsPerHour(online=85, live=25))
    metrics.net_result_base
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Protocol

from app.services.constants import (
    DEFAULT_GAME_TYPE,
    HUNDRED,
    MINUTES_PER_HOUR,
    ONE,
    SECONDS_PER_HOUR,
    UNKNOWN_LOCATION,
    ZERO,
)
from app.services.protocols import LiveSessionRecord, OnlineSessionRecord
from app.services.sessions.types import HandsPerHour, SettledResult
from app.utils.decimal_utils import format_amount, safe_divide, to_decimal

logger = logging.getLogger(__name__)


# =============================================================================
# SHARED CONTRACT
# =============================================================================

class SessionMetrics(Protocol):
    """Read-only analytic view of one session."""

    @property
    def session_date(self) -> datetime: ...

    @property
    def computed_duration(self) -> Decimal: ...

    @property
    def effective_hands(self) -> int: ...

    @property
    def display_blinds(self) -> str: ...

    @property
    def net_result(self) -> Decimal: ...

    @property
    def net_result_base(self) -> Decimal: ...

    @property
    def bb_won(self) -> Decimal: ...

    @property
    def bb_per_100(self) -> Decimal: ...

    @property
    def buy_in_base(self) -> Decimal: ...

    @property
    def tips_base(self) -> Decimal: ...

    @property
    def is_win(self) -> bool: ...

    @property
    def is_live(self) -> bool: ...

    @property
    def is_active(self) -> bool: ...

    @property
    def game_type(self) -> str | None: ...

    @property
    def display_game_type(self) -> str: ...

    @property
    def platform_id(self) -> int | None: ...

    @property
    def location(self) -> str | None: ...


# =============================================================================
# HELPERS
# =============================================================================

def format_blinds(
        small_blind: Decimal,
        big_blind: Decimal,
        straddle: Decimal = ZERO,
        ante: Decimal = ZERO,
) -> str:
    """
    Format a blind structure as "SB/BB[/straddle][ (ante)]".

    Returns "" when either blind is 0.

    Example:
        >>> format_blinds(Decimal("1"), Decimal("2"), Decimal("4"), Decimal("0.5"))
        '1/2/4 (0.5)'
    """
    if small_blind == 0 or big_blind == 0:
        return ""

    text = f"{format_amount(small_blind)}/{format_amount(big_blind)}"
    if straddle != 0:
        text += f"/{format_amount(straddle)}"
    if ante != 0:
        text += f" ({format_amount(ante)})"
    return text


def _hours_between(start: datetime, end: datetime) -> Decimal:
    delta: timedelta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return seconds / SECONDS_PER_HOUR


def _computed_duration(
        start: datetime | None,
        end: datetime | None,
        break_minutes: int | None,
        legacy_duration: Decimal | None,
) -> Decimal:
    if start is None or end is None:
        return max(ZERO, to_decimal(legacy_duration))

    hours = _hours_between(start, end) - to_decimal(break_minutes) / MINUTES_PER_HOUR
    return max(ZERO, hours)


def _positive_or(rate: Decimal, fallback: Decimal) -> Decimal:
    return rate if rate > 0 else fallback


def settle_online_result(
        balance_before: Decimal,
        balance_after: Decimal,
        exchange_rate_to_base: Decimal | None,
        same_currency: bool = False,
) -> SettledResult:
    """
    Derive the stored result fields of a finished online session.

    The native result is the balance change; the base result converts it
    with the session's rate (1 when unset, or when the platform already
    holds the base currency). Sessions store the base result
    so later rate changes on the platform do not rewrite history.
    """
    rate = ONE if same_currency else _positive_or(to_decimal(exchange_rate_to_base), ONE)
    net = to_decimal(balance_after) - to_decimal(balance_before)
    return SettledResult(
        net_profit_loss=net,
        net_profit_loss_base=net * rate,
        exchange_rate_to_base=rate,
    )


# =============================================================================
# BASE
# =============================================================================

class _BaseCashMetrics(ABC):
    """Properties computed the same way for both session kinds."""

    def __init__(self, record, hands_per_hour: HandsPerHour, now: datetime | None = None) -> None:
        self.record = record
        self.hands_per_hour = hands_per_hour
        self._now = now

    @property
    def session_date(self) -> datetime:
        """Start time; an unstarted session is dated "now"."""
        if self.record.start_time is not None:
            return self.record.start_time
        return self._now if self._now is not None else datetime.now()

    @property
    def computed_duration(self) -> Decimal:
        return _computed_duration(
            self.record.start_time,
            self.record.end_time,
            self.record.break_minutes,
            self.record.duration,
        )

    @property
    def effective_hands(self) -> int:
        hands = int(self.record.hands_count or 0)
        if hands > 0:
            return hands
        return self._estimated_hands()

    @abstractmethod
    def _estimated_hands(self) -> int:
        """Hand estimate when no count was logged."""

    @property
    def display_blinds(self) -> str:
        return format_blinds(
            to_decimal(self.record.small_blind),
            to_decimal(self.record.big_blind),
            to_decimal(self.record.straddle),
            to_decimal(self.record.ante),
        )

    @property
    @abstractmethod
    def net_result(self) -> Decimal:
        """Native result of the session."""

    @property
    def bb_won(self) -> Decimal:
        return safe_divide(self.net_result, to_decimal(self.record.big_blind))

    @property
    def bb_per_100(self) -> Decimal:
        hands = self.effective_hands
        if hands <= 0 or to_decimal(self.record.big_blind) <= 0:
            return ZERO
        return self.bb_won / Decimal(hands) * HUNDRED

    @property
    def is_win(self) -> bool:
        return self.net_result > 0

    @property
    def is_active(self) -> bool:
        """Started and not yet ended."""
        return self.record.start_time is not None and self.record.end_time is None

    @property
    def game_type(self) -> str | None:
        return self.record.game_type

    @property
    def display_game_type(self) -> str:
        return self.record.game_type or DEFAULT_GAME_TYPE


# =============================================================================
# ONLINE
# =============================================================================

class OnlineCashMetrics(_BaseCashMetrics):
    """Normalized view of an online cash session."""

    record: OnlineSessionRecord

    is_live = False
    location = None

    @property
    def platform_id(self) -> int | None:
        return self.record.platform_id

    def _estimated_hands(self) -> int:
        tables = max(1, int(self.record.tables or 0))
        return int(self.computed_duration * self.hands_per_hour.online * tables)

    @property
    def net_result(self) -> Decimal:
        return to_decimal(self.record.net_profit_loss)

    @property
    def net_result_base(self) -> Decimal:
        return to_decimal(self.record.net_profit_loss_base)

    @property
    def buy_in_base(self) -> Decimal:
        rate = _positive_or(to_decimal(self.record.exchange_rate_to_base), ONE)
        return to_decimal(self.record.balance_before) * rate

    @property
    def tips_base(self) -> Decimal:
        return ZERO


# =============================================================================
# LIVE
# =============================================================================

class LiveCashMetrics(_BaseCashMetrics):
    """Normalized view of a live cash session."""

    record: LiveSessionRecord

    is_live = True
    platform_id = None

    @property
    def location(self) -> str | None:
        return self.record.location

    @property
    def display_location(self) -> str:
        return self.record.location or UNKNOWN_LOCATION

    def _estimated_hands(self) -> int:
        return int(self.computed_duration * self.hands_per_hour.live)

    def _single_rate(self) -> Decimal:
        return _positive_or(to_decimal(self.record.exchange_rate_to_base), ONE)

    @property
    def net_result(self) -> Decimal:
        return to_decimal(self.record.cash_out) - to_decimal(self.record.buy_in)

    @property
    def net_result_base(self) -> Decimal:
        rate_buy_in = to_decimal(self.record.exchange_rate_buy_in)
        rate_cash_out = to_decimal(self.record.exchange_rate_cash_out)

        if rate_buy_in > 0 and rate_cash_out > 0:
            return (
                to_decimal(self.record.cash_out) * rate_cash_out
                - to_decimal(self.record.buy_in) * rate_buy_in
            )
        return self.net_result * self._single_rate()

    @property
    def buy_in_base(self) -> Decimal:
        rate = _positive_or(to_decimal(self.record.exchange_rate_buy_in), self._single_rate())
        return to_decimal(self.record.buy_in) * rate

    @property
    def tips_base(self) -> Decimal:
        rate = _positive_or(to_decimal(self.record.exchange_rate_cash_out), self._single_rate())
        return to_decimal(self.record.tips) * rate


def normalize_sessions(
        online: list[OnlineSessionRecord],
        live: list[LiveSessionRecord],
        hands_per_hour: HandsPerHour,
        now: datetime | None = None,
) -> tuple[list[OnlineCashMetrics], list[LiveCashMetrics]]:
    """Wrap raw session records in their metrics views."""
    online_metrics = [OnlineCashMetrics(s, hands_per_hour, now) for s in online]
    live_metrics = [LiveCashMetrics(s, hands_per_hour, now) for s in live]
    logger.debug(f"Normalized {len(online_metrics)} online and {len(live_metrics)} live sessions")
    return online_metrics, live_metrics
