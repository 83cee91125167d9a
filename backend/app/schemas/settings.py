# backend/app/schemas/settings.py
"""
Pydantic schemas for the read-only configuration endpoint.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class HandsPerHourResponse(BaseModel):
    online: int = Field(..., description="Per online table")
    live: int


class DefaultRateResponse(BaseModel):
    """Rate a new session in `currency` would be prefilled with."""

    currency: str
    base_currency: str
    rate: Decimal


class SettingsResponse(BaseModel):
    """Configuration the statistics are computed with, plus reference lists."""

    base_currency: str
    hands_per_hour: HandsPerHourResponse
    show_adjustments_in_stats: bool
    supported_currencies: list[str]
    game_types: list[str]
    deposit_methods: list[str]
    withdrawal_methods: list[str]
    default_rates: list[DefaultRateResponse]
