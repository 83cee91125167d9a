# backend/app/schemas/sessions.py
"""
Pydantic schemas for the session feed.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SessionSummaryResponse(BaseModel):
    """One normalized session of either kind."""

    model_config = ConfigDict(from_attributes=True)

    session_id: int
    kind: str = Field(..., description="'online' or 'live'")
    session_date: dt.datetime
    game_type: str
    blinds: str = Field(..., description="SB/BB[/straddle][ (ante)], empty when unset")
    venue: str = Field(..., description="Platform name (online) or location (live)")
    duration_hours: Decimal
    hands: int
    net_result: Decimal = Field(..., description="Native currency")
    net_result_base: Decimal = Field(..., description="Base currency")
    bb_won: Decimal
    bb_per_100: Decimal
    is_active: bool


class SessionMonthResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str = Field(..., description="YYYY-MM")
    net_result_base: Decimal
    sessions: list[SessionSummaryResponse]


class SessionFeedResponse(BaseModel):
    """Filtered sessions grouped by month, newest first."""

    session_count: int
    months: list[SessionMonthResponse]
