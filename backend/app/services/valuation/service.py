# backend/app/services/valuation/service.py
"""
Valuation Service - Main orchestrator for platform valuation.

This is the single entry point for valuation operations:
- get_platform_valuation(): Complete valuation of one platform
- get_bankroll_summary(): Every platform plus cross-platform totals

Design Principles:
- Dependency Injection: repository injected via constructor
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Composable: PlatformLedger does the arithmetic, this class loads data

Usage:
    from app.services.valuation import ValuationService

    service = ValuationService(base_currency="CAD")
    valuation = service.get_platform_valuation(db, platform_id=1)
    summary = service.get_bankroll_summary(db)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.services.constants import DEFAULT_BASE_CURRENCY, ZERO
from app.services.exceptions import PlatformNotFoundError
from app.services.valuation.ledger import PlatformLedger
from app.services.valuation.types import BankrollSummary, PlatformValuation

if TYPE_CHECKING:
    from app.services.protocols import LedgerRepositoryProtocol

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Main service for platform valuation operations.

    Attributes:
        base_currency: Reporting currency used to label results
        _repository: Snapshot loader
    """

    def __init__(
            self,
            repository: LedgerRepositoryProtocol | None = None,
            base_currency: str = DEFAULT_BASE_CURRENCY,
    ) -> None:
        if repository is None:
            from app.services.repository import LedgerRepository
            repository = LedgerRepository()

        self._repository: LedgerRepositoryProtocol = repository
        self.base_currency = base_currency

        logger.info(f"ValuationService initialized (base currency {base_currency})")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def get_platform_valuation(self, db: Session, platform_id: int) -> PlatformValuation:
        """
        Value one platform.

        Args:
            db: Database session
            platform_id: Platform to value

        Returns:
            PlatformValuation with totals, rates and both net results

        Raises:
            PlatformNotFoundError: If the platform does not exist
        """
        platform = self._repository.get_platform(db, platform_id)
        if platform is None:
            raise PlatformNotFoundError(platform_id)

        valuation = PlatformLedger.from_platform(platform).valuate(self.base_currency)

        logger.info(
            f"Valued platform {platform_id}: net {valuation.net_result} {self.base_currency} "
            f"(rate {valuation.latest_rate})"
        )
        return valuation

    def get_bankroll_summary(self, db: Session) -> BankrollSummary:
        """
        Value every platform and total the results.

        Returns:
            BankrollSummary; totals are 0 when no platforms exist
        """
        platforms = self._repository.list_platforms(db)
        session_counts = self._repository.count_online_sessions(db)

        valuations = tuple(
            PlatformLedger.from_platform(platform).valuate(self.base_currency)
            for platform in platforms
        )

        summary = BankrollSummary(
            base_currency=self.base_currency,
            platforms=valuations,
            session_counts={v.platform_id: session_counts.get(v.platform_id, 0) for v in valuations},
            total_net_result=sum((v.net_result for v in valuations), ZERO),
            total_deposited=sum((v.total_deposited for v in valuations), ZERO),
            total_withdrawn=sum((v.total_withdrawn for v in valuations), ZERO),
            total_adjustments=sum((v.total_adjustments for v in valuations), ZERO),
            total_balance_base=sum((v.current_balance_base for v in valuations), ZERO),
        )

        logger.info(
            f"Bankroll summary over {len(valuations)} platforms: "
            f"net {summary.total_net_result} {self.base_currency}"
        )
        return summary
