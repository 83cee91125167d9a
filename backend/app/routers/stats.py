# backend/app/routers/stats.py
"""
Statistics endpoints.

- GET /stats - Statistics for a period and scope
- GET /stats/filters - Values the period/scope parameters accept
- GET /adjustments - Adjustments in a period with their base total

Statistics are recomputed from every stored record on each call, so
/stats carries a tighter rate limit than the default.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import FilterQuery, get_filter_query, get_stats_service
from app.middleware.rate_limit import RATE_LIMIT_STATS, limiter
from app.schemas.stats import (
    AdjustmentResponse,
    AdjustmentsSummaryResponse,
    AppliedFilters,
    FilterOptionsResponse,
    PlatformOptionResponse,
    StatsResponse,
)
from app.services.stats import StatsService
from app.services.stats.filters import DATE_PERIODS, SESSION_SCOPES, build_date_filter

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(tags=["Statistics"])


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _map_applied_filters(query: FilterQuery, show_adjustments: bool) -> AppliedFilters:
    return AppliedFilters(
        period=query.period,
        start_date=query.start_date,
        end_date=query.end_date,
        scope=query.scope,
        platform_id=query.platform_id,
        game_type=query.game_type,
        location=query.location,
        show_adjustments=show_adjustments,
    )


def _map_stats(stats, filters: AppliedFilters) -> StatsResponse:
    """Map internal StatsResult (including derived ratios) to Pydantic schema."""
    return StatsResponse(
        filters=filters,
        net_result=stats.net_result,
        net_result_no_adj=stats.net_result_no_adj,
        adjustments_total=stats.adjustments_total,
        total_hours=stats.total_hours,
        total_hands=stats.total_hands,
        total_bb_won=stats.total_bb_won,
        total_buy_in=stats.total_buy_in,
        total_tips=stats.total_tips,
        session_count=stats.session_count,
        win_count=stats.win_count,
        lose_count=stats.lose_count,
        biggest_win=stats.biggest_win,
        biggest_loss=stats.biggest_loss,
        longest_session=stats.longest_session,
        longest_win_streak=stats.longest_win_streak,
        longest_lose_streak=stats.longest_lose_streak,
        hourly_rate=stats.hourly_rate,
        avg_result=stats.avg_result,
        avg_session_duration=stats.avg_session_duration,
        avg_buy_in=stats.avg_buy_in,
        win_rate=stats.win_rate,
        bb_per_hour=stats.bb_per_hour,
        bb_per_100=stats.bb_per_100,
    )


def _map_adjustment(entry) -> AdjustmentResponse:
    return AdjustmentResponse(
        adjustment_id=entry.adjustment_id,
        name=entry.name,
        date=entry.date,
        amount=entry.amount,
        currency=entry.currency,
        amount_base=entry.amount_base,
        is_online=entry.is_online,
        platform_id=entry.platform_id,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Get statistics",
    response_description="Totals, counts, extremes, streaks and derived ratios",
)
@limiter.limit(RATE_LIMIT_STATS)
def get_stats(
        request: Request,
        query: FilterQuery = Depends(get_filter_query),
        show_adjustments: bool | None = Query(
            default=None,
            description="Include adjustments in net_result (default: server setting)"
        ),
        db: Session = Depends(get_db),
        service: StatsService = Depends(get_stats_service),
) -> StatsResponse:
    """
    Compute statistics over the sessions matching a period and scope.

    **Periods:** `all_time`, `this_month`, `this_year`, `custom`
    (with `start_date` and `end_date`, both days included).

    **Scopes:** `all`, `live`, `online`, `platform` (with `platform_id`),
    `game_type` (with `game_type`), `location` (with `location`).

    A session is a win when its native result is positive; every other
    session counts as a loss, so `win_count + lose_count == session_count`.

    Raises **400** for an unknown period or scope, or a missing argument.
    """
    if show_adjustments is None:
        show_adjustments = service.show_adjustments_default

    stats = service.get_stats(
        db,
        date_filter=query.date_filter,
        session_filter=query.session_filter,
        show_adjustments=show_adjustments,
    )
    return _map_stats(stats, _map_applied_filters(query, show_adjustments))


@router.get(
    "/stats/filters",
    response_model=FilterOptionsResponse,
    summary="Get filter options",
)
def get_filter_options(
        db: Session = Depends(get_db),
        service: StatsService = Depends(get_stats_service),
) -> FilterOptionsResponse:
    """
    Values a client can build `/stats` and `/sessions` queries from.

    Game types come from both session kinds; locations from live sessions.
    """
    options = service.get_filter_options(db)

    return FilterOptionsResponse(
        periods=list(DATE_PERIODS),
        scopes=list(SESSION_SCOPES),
        platforms=[
            PlatformOptionResponse(
                platform_id=p.platform_id,
                name=p.name,
                currency=p.currency,
            )
            for p in options.platforms
        ],
        game_types=list(options.game_types),
        locations=list(options.locations),
    )


@router.get(
    "/adjustments",
    response_model=AdjustmentsSummaryResponse,
    summary="List adjustments",
)
def get_adjustments(
        period: str = Query(default="all_time", description=f"One of: {', '.join(DATE_PERIODS)}"),
        start_date: date | None = Query(default=None),
        end_date: date | None = Query(default=None),
        db: Session = Depends(get_db),
        service: StatsService = Depends(get_stats_service),
) -> AdjustmentsSummaryResponse:
    """
    Adjustments in a period, newest first, with their base-currency total.

    Undated adjustments only appear under `all_time`.
    """
    summary = service.get_adjustments(db, build_date_filter(period, start_date, end_date))

    return AdjustmentsSummaryResponse(
        period=period,
        adjustments=[_map_adjustment(e) for e in summary.entries],
        total_base=summary.total_base,
        count=len(summary.entries),
    )
