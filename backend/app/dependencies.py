# backend/app/dependencies.py
"""
Dependency injection module for FastAPI services.

Services are process-wide singletons, built lazily on first use from
settings. They hold no per-request state; the database session arrives
per call through get_db.

Usage in routers:
    from app.dependencies import get_stats_service

    @router.get("/stats")
    def get_stats(
        db: Session = Depends(get_db),
        service: StatsService = Depends(get_stats_service),
    ):
        ...

Tests replace these with app.dependency_overrides, or call
cache_clear() after changing settings.

get_filter_query parses the period/scope query parameters shared by
/stats and /sessions into filter values.
"""

import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from fastapi import Query

from app.config import settings
from app.services.repository import LedgerRepository
from app.services.sessions.feed import SessionFeedService
from app.services.stats.filters import (
    DATE_PERIODS,
    SESSION_SCOPES,
    build_date_filter,
    build_session_filter,
)
from app.services.stats.service import StatsService
from app.services.stats.types import DateFilter, SessionFilter
from app.services.valuation.service import ValuationService

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================
# Order matters: the repository is shared by every service below

@lru_cache(maxsize=1)
def get_ledger_repository() -> LedgerRepository:
    """Shared read-only repository."""
    logger.debug("Initializing singleton LedgerRepository")
    return LedgerRepository()


@lru_cache(maxsize=1)
def get_valuation_service() -> ValuationService:
    """Platform valuation in the configured base currency."""
    logger.debug("Initializing singleton ValuationService")
    return ValuationService(
        repository=get_ledger_repository(),
        base_currency=settings.base_currency,
    )


@lru_cache(maxsize=1)
def get_stats_service() -> StatsService:
    """Statistics with the configured hands-per-hour estimates."""
    logger.debug("Initializing singleton StatsService")
    return StatsService(
        repository=get_ledger_repository(),
        hands_per_hour=settings.hands_per_hour,
        show_adjustments_default=settings.show_adjustments_in_stats,
    )


@lru_cache(maxsize=1)
def get_session_feed_service() -> SessionFeedService:
    logger.debug("Initializing singleton SessionFeedService")
    return SessionFeedService(
        repository=get_ledger_repository(),
        hands_per_hour=settings.hands_per_hour,
    )


# =============================================================================
# QUERY FILTERS
# =============================================================================

@dataclass(frozen=True)
class FilterQuery:
    """Period and scope query parameters plus the filters built from them."""

    period: str
    start_date: date | None
    end_date: date | None
    scope: str
    platform_id: int | None
    game_type: str | None
    location: str | None
    date_filter: DateFilter
    session_filter: SessionFilter


def get_filter_query(
        period: str = Query(
            default="all_time",
            description=f"One of: {', '.join(DATE_PERIODS)}"
        ),
        start_date: date | None = Query(default=None, description="First day (period=custom)"),
        end_date: date | None = Query(default=None, description="Last day, inclusive (period=custom)"),
        scope: str = Query(
            default="all",
            description=f"One of: {', '.join(SESSION_SCOPES)}"
        ),
        platform_id: int | None = Query(default=None, description="Required for scope=platform"),
        game_type: str | None = Query(default=None, description="Required for scope=game_type"),
        location: str | None = Query(default=None, description="Required for scope=location"),
) -> FilterQuery:
    """
    Parse the shared period/scope parameters of /stats and /sessions.

    Raises:
        InvalidFilterError: Unknown period or scope, or a missing argument (400)
    """
    return FilterQuery(
        period=period,
        start_date=start_date,
        end_date=end_date,
        scope=scope,
        platform_id=platform_id,
        game_type=game_type,
        location=location,
        date_filter=build_date_filter(period, start_date, end_date),
        session_filter=build_session_filter(scope, platform_id, game_type, location),
    )
