# backend/app/services/valuation/types.py
"""
Internal data types for the Valuation Service.

These dataclasses are used internally by the valuation calculators.
They are NOT Pydantic schemas - those are defined in app/schemas/platforms.py
for API serialization.

Design Principles:
- Immutable (frozen=True) value objects
- Use Decimal for ALL financial values (never float)
- "base" means the reporting currency, "native" the platform's own currency

Type Hierarchy:
    RateObservation     - One FX-flagged transaction's rate, oriented platform → base
    CostBasisParcel     - Platform currency acquired by one deposit, with its unit cost
    CashFlowTotals      - Deposit/withdrawal/adjustment sums in base and native currency
    PlatformValuation   - Complete valuation for one platform
    BankrollSummary     - All platforms plus cross-platform totals
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


# =============================================================================
# RATES
# =============================================================================

@dataclass(frozen=True)
class RateObservation:
    """
    A conversion rate taken from an FX-flagged deposit or withdrawal.

    Attributes:
        date: Transaction date (None for undated records)
        rate: Base units per platform unit
        source: "deposit" or "withdrawal"
    """

    date: datetime | None
    rate: Decimal
    source: str


@dataclass(frozen=True)
class CostBasisParcel:
    """
    Platform currency acquired by one deposit.

    Attributes:
        date: Deposit date
        amount: Platform-currency units received
        cost_per_unit: Base units paid per platform unit
    """

    date: datetime | None
    amount: Decimal
    cost_per_unit: Decimal

    @property
    def cost(self) -> Decimal:
        """Total base-currency cost of the parcel."""
        return self.amount * self.cost_per_unit


# =============================================================================
# TOTALS
# =============================================================================

@dataclass(frozen=True)
class CashFlowTotals:
    """
    Sums over a platform's cash movements.

    Base totals follow the conversion rules of CashFlowCalculator;
    native totals are raw platform-currency sums.
    """

    deposited_base: Decimal
    withdrawn_base: Decimal
    adjustments_base: Decimal
    deposited_native: Decimal
    withdrawn_native: Decimal
    deposit_count: int = 0
    withdrawal_count: int = 0

    @property
    def has_activity(self) -> bool:
        """False for an unseeded platform (no deposits and no withdrawals)."""
        return self.deposit_count > 0 or self.withdrawal_count > 0


# =============================================================================
# VALUATION RESULTS
# =============================================================================

@dataclass(frozen=True)
class PlatformValuation:
    """
    Complete valuation of one platform.

    Attributes:
        platform_id: Database ID of the platform
        name: Display name ("Unknown Platform" when unset)
        currency: Platform currency ("USD" when unset)
        base_currency: Reporting currency
        current_balance: Balance in platform currency
        current_balance_base: current_balance × latest_rate
        latest_rate: Base units per platform unit (1 when no FX history)
        average_deposit_rate: Σ received / Σ sent over FX deposits
        total_deposited: Base currency
        total_withdrawn: Base currency
        total_adjustments: Base currency
        net_result: Base currency
        net_result_native: Platform currency, derived independently
        deposit_count / withdrawal_count / adjustment_count: Record counts
        cost_basis: One parcel per deposit, oldest first
    """

    platform_id: int
    name: str
    currency: str
    base_currency: str
    current_balance: Decimal
    current_balance_base: Decimal
    latest_rate: Decimal
    average_deposit_rate: Decimal
    total_deposited: Decimal
    total_withdrawn: Decimal
    total_adjustments: Decimal
    net_result: Decimal
    net_result_native: Decimal
    deposit_count: int
    withdrawal_count: int
    adjustment_count: int
    cost_basis: tuple[CostBasisParcel, ...] = field(default_factory=tuple)

    @property
    def is_seeded(self) -> bool:
        """True once the platform has any deposit or withdrawal."""
        return self.deposit_count > 0 or self.withdrawal_count > 0


@dataclass(frozen=True)
class BankrollSummary:
    """
    Valuation of every platform plus cross-platform totals (base currency).

    Attributes:
        session_counts: Online session count keyed by platform_id
    """

    base_currency: str
    platforms: tuple[PlatformValuation, ...]
    session_counts: dict[int, int]
    total_net_result: Decimal
    total_deposited: Decimal
    total_withdrawn: Decimal
    total_adjustments: Decimal
    total_balance_base: Decimal
