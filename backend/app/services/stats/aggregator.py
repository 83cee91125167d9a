# backend/app/services/stats/aggregator.py
"""
Statistics aggregator: one StatsResult from the full record set.

compute_stats() is a pure reduction. Steps, in order:
    1. Date filter on online and live sessions independently
    2. Session filter (scope)
    3. Reduce online sessions
    4. Reduce live sessions (adds tips)
    5. Streaks over both kinds in date order
    6. Adjustments by date (and platform, under PlatformScope) when shown
    7. net_result = net_result_no_adj + adjustments_total

Usage:
    stats = compute_stats(
        online=online_rows,
        live=live_rows,
        adjustments=adjustment_rows,
        date_filter=ThisMonth(),
        session_filter=AllSessions(),
        show_adjustments=True,
        hands_per_hour=settings.hands_per_hour,
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from app.services.constants import ZERO
from app.services.protocols import AdjustmentRecord, LiveSessionRecord, OnlineSessionRecord
from app.services.sessions.metrics import SessionMetrics, normalize_sessions
from app.services.sessions.types import HandsPerHour
from app.services.stats.filters import (
    adjustment_platform_scope,
    apply_session_filter,
    date_included,
    filter_by_date,
)
from app.services.stats.streaks import longest_streaks
from app.services.stats.types import DateFilter, SessionFilter, StatsResult
from app.utils.date_utils import or_distant_past
from app.utils.decimal_utils import to_decimal

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    """Mutable running totals, frozen into a StatsResult at the end."""

    net_result_no_adj: Decimal = ZERO
    total_hours: Decimal = ZERO
    total_hands: int = 0
    session_count: int = 0
    win_count: int = 0
    lose_count: int = 0
    total_bb_won: Decimal = ZERO
    total_buy_in: Decimal = ZERO
    total_tips: Decimal = ZERO
    biggest_win: Decimal = ZERO
    biggest_loss: Decimal = ZERO
    longest_session: Decimal = ZERO
    outcomes: list[tuple[datetime, bool]] = field(default_factory=list)

    def add(self, session: SessionMetrics) -> None:
        result_base = session.net_result_base
        duration = session.computed_duration

        self.net_result_no_adj += result_base
        self.total_hours += duration
        self.total_hands += session.effective_hands
        self.session_count += 1
        if session.is_win:
            self.win_count += 1
        else:
            self.lose_count += 1
        self.total_bb_won += session.bb_won
        self.total_buy_in += session.buy_in_base
        self.total_tips += session.tips_base
        self.biggest_win = max(self.biggest_win, result_base)
        self.biggest_loss = min(self.biggest_loss, result_base)
        self.longest_session = max(self.longest_session, duration)
        self.outcomes.append((session.session_date, session.is_win))


def sum_adjustments(
        adjustments: Iterable[AdjustmentRecord],
        date_filter: DateFilter,
        now: datetime,
        platform_id: int | None = None,
) -> Decimal:
    """
    Sum amount_base of adjustments passing the date filter.

    Undated adjustments are treated as the distant past. When platform_id
    is given, only that platform's adjustments count.
    """
    total = ZERO
    for adjustment in adjustments:
        if not date_included(date_filter, or_distant_past(adjustment.date), now):
            continue
        if platform_id is not None and adjustment.platform_id != platform_id:
            continue
        total += to_decimal(adjustment.amount_base)
    return total


def compute_stats(
        online: Sequence[OnlineSessionRecord],
        live: Sequence[LiveSessionRecord],
        adjustments: Sequence[AdjustmentRecord],
        date_filter: DateFilter,
        session_filter: SessionFilter,
        show_adjustments: bool,
        hands_per_hour: HandsPerHour,
        now: datetime | None = None,
) -> StatsResult:
    """
    Aggregate sessions and adjustments into one StatsResult.

    Args:
        online: Online session records
        live: Live session records
        adjustments: Adjustment records
        date_filter: Period to include
        session_filter: Scope to include
        show_adjustments: Add adjustments to net_result
        hands_per_hour: Estimates for sessions without a hand count
        now: Reference instant (default: datetime.now())

    Returns:
        StatsResult; an empty input yields all zeros
    """
    if now is None:
        now = datetime.now()

    online_metrics, live_metrics = normalize_sessions(list(online), list(live), hands_per_hour, now)

    online_metrics = filter_by_date(online_metrics, date_filter, now)
    live_metrics = filter_by_date(live_metrics, date_filter, now)
    online_metrics, live_metrics = apply_session_filter(session_filter, online_metrics, live_metrics)

    acc = _Accumulator()
    for session in online_metrics:
        acc.add(session)
    for session in live_metrics:
        acc.add(session)

    longest_win, longest_lose = longest_streaks(acc.outcomes)

    adjustments_total = ZERO
    if show_adjustments:
        adjustments_total = sum_adjustments(
            adjustments,
            date_filter,
            now,
            platform_id=adjustment_platform_scope(session_filter),
        )

    logger.debug(
        f"Stats over {acc.session_count} sessions "
        f"({len(online_metrics)} online, {len(live_metrics)} live), "
        f"adjustments {adjustments_total}"
    )

    return StatsResult(
        net_result=acc.net_result_no_adj + adjustments_total,
        net_result_no_adj=acc.net_result_no_adj,
        total_hours=acc.total_hours,
        total_hands=acc.total_hands,
        session_count=acc.session_count,
        win_count=acc.win_count,
        lose_count=acc.lose_count,
        adjustments_total=adjustments_total,
        total_bb_won=acc.total_bb_won,
        total_buy_in=acc.total_buy_in,
        total_tips=acc.total_tips,
        biggest_win=acc.biggest_win,
        biggest_loss=acc.biggest_loss,
        longest_session=acc.longest_session,
        longest_win_streak=longest_win,
        longest_lose_streak=longest_lose,
    )
