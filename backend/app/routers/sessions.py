# backend/app/routers/sessions.py
"""
Session feed endpoint.

- GET /sessions - Online and live sessions grouped by month, newest first

Accepts the same period/scope parameters as /stats.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import FilterQuery, get_filter_query, get_session_feed_service
from app.schemas.sessions import (
    SessionFeedResponse,
    SessionMonthResponse,
    SessionSummaryResponse,
)
from app.services.sessions import SessionFeedService

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


def _map_session(session) -> SessionSummaryResponse:
    """Map internal SessionSummary to Pydantic schema."""
    return SessionSummaryResponse(
        session_id=session.session_id,
        kind=session.kind,
        session_date=session.session_date,
        game_type=session.game_type,
        blinds=session.blinds,
        venue=session.venue,
        duration_hours=session.duration_hours,
        hands=session.hands,
        net_result=session.net_result,
        net_result_base=session.net_result_base,
        bb_won=session.bb_won,
        bb_per_100=session.bb_per_100,
        is_active=session.is_active,
    )


@router.get(
    "",
    response_model=SessionFeedResponse,
    summary="List sessions",
    response_description="Sessions grouped by month with monthly totals",
)
def get_sessions(
        query: FilterQuery = Depends(get_filter_query),
        db: Session = Depends(get_db),
        service: SessionFeedService = Depends(get_session_feed_service),
) -> SessionFeedResponse:
    """
    List sessions of both kinds matching a period and scope.

    Sessions that have not started yet are dated now. Active sessions
    (started, not ended) are included with `is_active: true`.

    Raises **400** for an unknown period or scope, or a missing argument.
    """
    feed = service.get_feed(db, query.date_filter, query.session_filter)

    return SessionFeedResponse(
        session_count=feed.session_count,
        months=[
            SessionMonthResponse(
                month=month.month,
                net_result_base=month.net_result_base,
                sessions=[_map_session(s) for s in month.sessions],
            )
            for month in feed.months
        ],
    )
