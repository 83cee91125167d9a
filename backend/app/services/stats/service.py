# backend/app/services/stats/service.py
"""
Stats Service - loads records and runs the statistics aggregator.

Public API:
- get_stats(): compute_stats over every stored record
- get_filter_options(): platforms, game types and locations to filter by
- get_adjustments(): adjustments for a period with their base total

Design Principles:
- Dependency Injection: repository and settings values via constructor
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Stateless: statistics are recomputed from the full record set per call

Usage:
    service = StatsService(
        hands_per_hour=settings.hands_per_hour,
        show_adjustments_default=settings.show_adjustments_in_stats,
    )
    stats = service.get_stats(db, ThisMonth(), AllSessions())
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.services.constants import DEFAULT_PLATFORM_CURRENCY, ZERO
from app.services.sessions.types import HandsPerHour
from app.services.stats.aggregator import compute_stats
from app.services.stats.filters import date_included
from app.services.stats.types import (
    AdjustmentEntry,
    AdjustmentsSummary,
    DateFilter,
    FilterOptions,
    PlatformOption,
    SessionFilter,
    StatsResult,
)
from app.services.valuation.ledger import PlatformLedger
from app.utils.date_utils import or_distant_past
from app.utils.decimal_utils import to_decimal

if TYPE_CHECKING:
    from app.services.protocols import LedgerRepositoryProtocol

logger = logging.getLogger(__name__)


class StatsService:
    """
    Statistics over all stored sessions and adjustments.

    Attributes:
        hands_per_hour: Estimates for sessions without a hand count
        show_adjustments_default: Used when a request does not choose
        _repository: Snapshot loader
    """

    def __init__(
            self,
            repository: LedgerRepositoryProtocol | None = None,
            hands_per_hour: HandsPerHour | None = None,
            show_adjustments_default: bool = True,
    ) -> None:
        if repository is None:
            from app.services.repository import LedgerRepository
            repository = LedgerRepository()

        self._repository: LedgerRepositoryProtocol = repository
        self.hands_per_hour = hands_per_hour or HandsPerHour()
        self.show_adjustments_default = show_adjustments_default

        logger.info(
            f"StatsService initialized (hands/hour online={self.hands_per_hour.online}, "
            f"live={self.hands_per_hour.live})"
        )

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def get_stats(
            self,
            db: Session,
            date_filter: DateFilter,
            session_filter: SessionFilter,
            show_adjustments: bool | None = None,
            now: datetime | None = None,
    ) -> StatsResult:
        """
        Compute statistics for a period and scope.

        Args:
            db: Database session
            date_filter: Period to include
            session_filter: Scope to include
            show_adjustments: Include adjustments (default: configured value)
            now: Reference instant for calendar filters

        Returns:
            StatsResult
        """
        if show_adjustments is None:
            show_adjustments = self.show_adjustments_default

        stats = compute_stats(
            online=self._repository.list_online_sessions(db),
            live=self._repository.list_live_sessions(db),
            adjustments=self._repository.list_adjustments(db),
            date_filter=date_filter,
            session_filter=session_filter,
            show_adjustments=show_adjustments,
            hands_per_hour=self.hands_per_hour,
            now=now,
        )

        logger.info(
            f"Stats for {type(date_filter).__name__}/{type(session_filter).__name__}: "
            f"{stats.session_count} sessions, net {stats.net_result}"
        )
        return stats

    def get_filter_options(self, db: Session) -> FilterOptions:
        """
        Distinct values a client can build filters from.

        Game types come from both session kinds, locations from live
        sessions only. Unset values are skipped.
        """
        platforms = tuple(
            PlatformOption(
                platform_id=p.id,
                name=PlatformLedger.from_platform(p).display_name,
                currency=p.currency or DEFAULT_PLATFORM_CURRENCY,
            )
            for p in self._repository.list_platforms(db)
        )

        online = self._repository.list_online_sessions(db)
        live = self._repository.list_live_sessions(db)

        game_types = {s.game_type for s in online if s.game_type}
        game_types |= {s.game_type for s in live if s.game_type}
        locations = {s.location for s in live if s.location}

        return FilterOptions(
            platforms=platforms,
            game_types=tuple(sorted(game_types)),
            locations=tuple(sorted(locations)),
        )

    def get_adjustments(
            self,
            db: Session,
            date_filter: DateFilter,
            now: datetime | None = None,
    ) -> AdjustmentsSummary:
        """
        Adjustments for a period, newest first, with their base total.

        Undated adjustments are treated as the distant past.
        """
        if now is None:
            now = datetime.now()

        included = [
            a for a in self._repository.list_adjustments(db)
            if date_included(date_filter, or_distant_past(a.date), now)
        ]
        included.sort(key=lambda a: or_distant_past(a.date), reverse=True)

        entries = tuple(
            AdjustmentEntry(
                adjustment_id=a.id,
                name=a.name or "",
                date=a.date,
                amount=to_decimal(a.amount),
                currency=a.currency or DEFAULT_PLATFORM_CURRENCY,
                amount_base=to_decimal(a.amount_base),
                is_online=bool(a.is_online),
                platform_id=a.platform_id,
            )
            for a in included
        )
        return AdjustmentsSummary(
            entries=entries,
            total_base=sum((e.amount_base for e in entries), ZERO),
        )
