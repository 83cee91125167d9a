# backend/app/services/sessions/feed.py
"""
Session Feed Service - normalized session list grouped by month.

Applies the same date and session filters as the statistics aggregator,
then lists sessions of both kinds newest first, grouped by calendar month
with each month's base-currency total.

Usage:
    service = SessionFeedService(hands_per_hour=settings.hands_per_hour)
    feed = service.get_feed(db, ThisYear(), AllSessions())
"""

from __future__ import annotations

import logging
from datetime import datetime
from itertools import groupby
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.services.constants import UNKNOWN_SESSION_PLATFORM, ZERO
from app.services.sessions.metrics import LiveCashMetrics, OnlineCashMetrics, normalize_sessions
from app.services.sessions.types import HandsPerHour, SessionFeed, SessionMonth, SessionSummary
from app.services.stats.filters import apply_session_filter, filter_by_date
from app.services.stats.types import DateFilter, SessionFilter
from app.services.valuation.ledger import PlatformLedger
from app.utils.date_utils import month_key

if TYPE_CHECKING:
    from app.services.protocols import LedgerRepositoryProtocol

logger = logging.getLogger(__name__)


class SessionFeedService:
    """
    Lists normalized sessions for display.

    Attributes:
        hands_per_hour: Estimates for sessions without a hand count
        _repository: Snapshot loader
    """

    def __init__(
            self,
            repository: LedgerRepositoryProtocol | None = None,
            hands_per_hour: HandsPerHour | None = None,
    ) -> None:
        if repository is None:
            from app.services.repository import LedgerRepository
            repository = LedgerRepository()

        self._repository: LedgerRepositoryProtocol = repository
        self.hands_per_hour = hands_per_hour or HandsPerHour()

    def get_feed(
            self,
            db: Session,
            date_filter: DateFilter,
            session_filter: SessionFilter,
            now: datetime | None = None,
    ) -> SessionFeed:
        """
        Build the grouped session list.

        Args:
            db: Database session
            date_filter: Period to include
            session_filter: Scope to include
            now: Reference instant (default: datetime.now())

        Returns:
            SessionFeed with months newest first
        """
        if now is None:
            now = datetime.now()

        platform_names = {
            p.id: PlatformLedger.from_platform(p).display_name
            for p in self._repository.list_platforms(db)
        }

        online, live = normalize_sessions(
            self._repository.list_online_sessions(db),
            self._repository.list_live_sessions(db),
            self.hands_per_hour,
            now,
        )
        online = filter_by_date(online, date_filter, now)
        live = filter_by_date(live, date_filter, now)
        online, live = apply_session_filter(session_filter, online, live)

        summaries = [self._summarize_online(s, platform_names) for s in online]
        summaries += [self._summarize_live(s) for s in live]
        summaries.sort(key=lambda s: s.session_date, reverse=True)

        months = tuple(
            self._month(key, list(group))
            for key, group in groupby(summaries, key=lambda s: month_key(s.session_date))
        )

        logger.info(f"Session feed: {len(summaries)} sessions in {len(months)} months")
        return SessionFeed(months=months, session_count=len(summaries))

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    @staticmethod
    def _month(key: str, sessions: list[SessionSummary]) -> SessionMonth:
        return SessionMonth(
            month=key,
            sessions=tuple(sessions),
            net_result_base=sum((s.net_result_base for s in sessions), ZERO),
        )

    @staticmethod
    def _summarize_online(session: OnlineCashMetrics, platform_names: dict[int, str]) -> SessionSummary:
        return SessionSummary(
            session_id=session.record.id,
            kind="online",
            session_date=session.session_date,
            game_type=session.display_game_type,
            blinds=session.display_blinds,
            venue=platform_names.get(session.platform_id, UNKNOWN_SESSION_PLATFORM),
            duration_hours=session.computed_duration,
            hands=session.effective_hands,
            net_result=session.net_result,
            net_result_base=session.net_result_base,
            bb_won=session.bb_won,
            bb_per_100=session.bb_per_100,
            is_active=session.is_active,
        )

    @staticmethod
    def _summarize_live(session: LiveCashMetrics) -> SessionSummary:
        return SessionSummary(
            session_id=session.record.id,
            kind="live",
            session_date=session.session_date,
            game_type=session.display_game_type,
            blinds=session.display_blinds,
            venue=session.display_location,
            duration_hours=session.computed_duration,
            hands=session.effective_hands,
            net_result=session.net_result,
            net_result_base=session.net_result_base,
            bb_won=session.bb_won,
            bb_per_100=session.bb_per_100,
            is_active=session.is_active,
        )
