# backend/app/schemas/__init__.py
"""
Pydantic schemas for API responses.

Organized by domain:
- errors: Error response formats
- platforms: Platform valuation and bankroll summary
- sessions: Session feed grouped by month
- settings: Read-only configuration
- stats: Statistics, filter options, adjustments summary

Usage:
    from app.schemas import StatsResponse, PlatformValuationResponse
"""

from app.schemas.errors import ErrorDetail, ValidationErrorDetail
from app.schemas.platforms import (
    CostBasisParcelResponse,
    PlatformValuationResponse,
    PlatformSummaryItem,
    BankrollSummaryResponse,
)
from app.schemas.sessions import (
    SessionSummaryResponse,
    SessionMonthResponse,
    SessionFeedResponse,
)
from app.schemas.settings import (
    HandsPerHourResponse,
    DefaultRateResponse,
    SettingsResponse,
)
from app.schemas.stats import (
    AppliedFilters,
    StatsResponse,
    PlatformOptionResponse,
    FilterOptionsResponse,
    AdjustmentResponse,
    AdjustmentsSummaryResponse,
)

__all__ = [
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
    # Platforms
    "CostBasisParcelResponse",
    "PlatformValuationResponse",
    "PlatformSummaryItem",
    "BankrollSummaryResponse",
    # Sessions
    "SessionSummaryResponse",
    "SessionMonthResponse",
    "SessionFeedResponse",
    # Settings
    "HandsPerHourResponse",
    "DefaultRateResponse",
    "SettingsResponse",
    # Stats
    "AppliedFilters",
    "StatsResponse",
    "PlatformOptionResponse",
    "FilterOptionsResponse",
    "AdjustmentResponse",
    "AdjustmentsSummaryResponse",
]
