# backend/app/services/valuation/__init__.py
"""
Valuation Service Package.

This package values platforms from their deposit / withdrawal / adjustment
history under multi-currency conversion:
- Per-platform valuation (get_platform_valuation)
- Cross-platform bankroll summary (get_bankroll_summary)

Usage:
    from app.services.valuation import ValuationService, PlatformLedger

    service = ValuationService(base_currency="CAD")
    result = service.get_platform_valuation(db, platform_id=1)

    # Pure, no database
    ledger = PlatformLedger.from_platform(platform)
    ledger.net_result()

Architecture:
    valuation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Internal data classes
    ├── calculators.py           # Rate, cash flow, net result, cost basis
    ├── ledger.py                # PlatformLedger (per-platform facade)
    └── service.py               # ValuationService (orchestrator)

Data Flow:
    FX deposits + withdrawals → ExchangeRateCalculator → latest rate
    Records + rate → CashFlowCalculator → CashFlowTotals
    Totals + balance + rate → NetResultCalculator → net results
    Deposits → CostBasisCalculator → CostBasisParcel
    All Above → PlatformValuation → BankrollSummary
"""

# Calculators (for testing / direct usage)
from app.services.valuation.calculators import (
    ExchangeRateCalculator,
    CashFlowCalculator,
    NetResultCalculator,
    CostBasisCalculator,
)
from app.services.valuation.ledger import PlatformLedger, build_ledger
# Main service
from app.services.valuation.service import ValuationService
# Internal types
from app.services.valuation.types import (
    RateObservation,
    CostBasisParcel,
    CashFlowTotals,
    PlatformValuation,
    BankrollSummary,
)

__all__ = [
    # Main service
    "ValuationService",
    "PlatformLedger",
    "build_ledger",

    # Data types
    "RateObservation",
    "CostBasisParcel",
    "CashFlowTotals",
    "PlatformValuation",
    "BankrollSummary",

    # Calculators (for testing)
    "ExchangeRateCalculator",
    "CashFlowCalculator",
    "NetResultCalculator",
    "CostBasisCalculator",
]
