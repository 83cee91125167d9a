# backend/app/routers/settings.py
"""
Read-only configuration endpoint.

- GET /settings - Base currency, hands-per-hour estimates, reference lists
  and the default rate offered for each supported session currency

Settings come from the environment (see app/config.py); there is no
write endpoint.
"""

from fastapi import APIRouter, Query

from app.config import settings
from app.schemas.settings import DefaultRateResponse, HandsPerHourResponse, SettingsResponse
from app.services.constants import (
    DEPOSIT_METHODS,
    GAME_TYPES,
    SUPPORTED_CURRENCIES,
    WITHDRAWAL_METHODS,
)
from app.services.exceptions import UnsupportedCurrencyError
from app.utils.fx_conversion import default_exchange_rate

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
)


def _default_rate(currency: str) -> DefaultRateResponse:
    return DefaultRateResponse(
        currency=currency,
        base_currency=settings.base_currency,
        rate=default_exchange_rate(
            currency,
            settings.base_currency,
            usd_to_base=settings.default_rate_usd_to_base,
            eur_to_base=settings.default_rate_eur_to_base,
            usd_to_eur=settings.default_rate_usd_to_eur,
        ),
    )


@router.get(
    "",
    response_model=SettingsResponse,
    summary="Get configuration",
)
def get_settings(
        currency: str | None = Query(
            default=None,
            description="Only report the default rate for this session currency"
        ),
) -> SettingsResponse:
    """
    Configuration the statistics are computed with.

    `default_rates` lists, per session currency, the conversion rate a new
    session would be prefilled with (1 for the base currency itself).

    Raises **400** if `currency` is not supported.
    """
    if currency is not None:
        code = currency.strip().upper()
        if code not in SUPPORTED_CURRENCIES:
            raise UnsupportedCurrencyError(currency)
        currencies = [code]
    else:
        currencies = list(SUPPORTED_CURRENCIES)

    return SettingsResponse(
        base_currency=settings.base_currency,
        hands_per_hour=HandsPerHourResponse(
            online=settings.hands_per_hour_online,
            live=settings.hands_per_hour_live,
        ),
        show_adjustments_in_stats=settings.show_adjustments_in_stats,
        supported_currencies=list(SUPPORTED_CURRENCIES),
        game_types=list(GAME_TYPES),
        deposit_methods=list(DEPOSIT_METHODS),
        withdrawal_methods=list(WITHDRAWAL_METHODS),
        default_rates=[_default_rate(c) for c in currencies],
    )
