# backend/app/routers/platforms.py
"""
Platform valuation endpoints.

- GET /platforms - Bankroll summary: every platform plus totals
- GET /platforms/{id}/valuation - Full valuation of one platform

Money is reported in the configured base currency unless a field name
says native.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_valuation_service
from app.schemas.platforms import (
    BankrollSummaryResponse,
    CostBasisParcelResponse,
    PlatformSummaryItem,
    PlatformValuationResponse,
)
from app.services.valuation import ValuationService

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/platforms",
    tags=["Platforms"],
)


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _map_parcel(parcel) -> CostBasisParcelResponse:
    """Map internal CostBasisParcel to Pydantic schema."""
    return CostBasisParcelResponse(
        date=parcel.date,
        amount=parcel.amount,
        cost_per_unit=parcel.cost_per_unit,
        cost=parcel.cost,
    )


def _map_valuation(valuation) -> PlatformValuationResponse:
    """Map internal PlatformValuation to Pydantic schema."""
    return PlatformValuationResponse(
        platform_id=valuation.platform_id,
        name=valuation.name,
        currency=valuation.currency,
        base_currency=valuation.base_currency,
        current_balance=valuation.current_balance,
        current_balance_base=valuation.current_balance_base,
        latest_rate=valuation.latest_rate,
        average_deposit_rate=valuation.average_deposit_rate,
        total_deposited=valuation.total_deposited,
        total_withdrawn=valuation.total_withdrawn,
        total_adjustments=valuation.total_adjustments,
        net_result=valuation.net_result,
        net_result_native=valuation.net_result_native,
        deposit_count=valuation.deposit_count,
        withdrawal_count=valuation.withdrawal_count,
        adjustment_count=valuation.adjustment_count,
        is_seeded=valuation.is_seeded,
        cost_basis=[_map_parcel(p) for p in valuation.cost_basis],
    )


def _map_summary_item(valuation, session_count: int) -> PlatformSummaryItem:
    return PlatformSummaryItem(
        platform_id=valuation.platform_id,
        name=valuation.name,
        currency=valuation.currency,
        current_balance=valuation.current_balance,
        current_balance_base=valuation.current_balance_base,
        latest_rate=valuation.latest_rate,
        net_result=valuation.net_result,
        net_result_native=valuation.net_result_native,
        session_count=session_count,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "",
    response_model=BankrollSummaryResponse,
    summary="Bankroll summary",
    response_description="Every platform's valuation plus totals in base currency",
)
def get_bankroll_summary(
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> BankrollSummaryResponse:
    """
    Value every platform and total the results.

    Platforms without deposits or withdrawals report a net result of 0
    whatever their balance.
    """
    summary = service.get_bankroll_summary(db)

    return BankrollSummaryResponse(
        base_currency=summary.base_currency,
        platforms=[
            _map_summary_item(v, summary.session_counts.get(v.platform_id, 0))
            for v in summary.platforms
        ],
        total_net_result=summary.total_net_result,
        total_deposited=summary.total_deposited,
        total_withdrawn=summary.total_withdrawn,
        total_adjustments=summary.total_adjustments,
        total_balance_base=summary.total_balance_base,
    )


@router.get(
    "/{platform_id}/valuation",
    response_model=PlatformValuationResponse,
    summary="Get platform valuation",
    response_description="Totals, conversion rates, both net results and cost basis",
)
def get_platform_valuation(
        platform_id: int,
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> PlatformValuationResponse:
    """
    Get the complete valuation of one platform.

    - **latest_rate**: rate of the most recent FX deposit (inverted) or
      withdrawal, 1 when the platform has no FX history
    - **net_result**: base currency
    - **net_result_native**: platform currency, derived from native
      amounts rather than by dividing net_result

    Raises **404** if the platform does not exist.
    """
    # PlatformNotFoundError propagates to the global handler
    valuation = service.get_platform_valuation(db, platform_id)
    return _map_valuation(valuation)
