# backend/app/services/valuation/ledger.py
"""
Per-platform ledger: the valuation properties of one platform snapshot.

PlatformLedger wraps a platform's records and exposes every valuation
figure as a method. Nothing is cached: each call recomputes from the
snapshot, so a ledger built once can be queried in any order.

Usage:
    ledger = PlatformLedger.from_platform(platform)

    ledger.latest_fx_conversion_rate()      # base per platform unit
    ledger.net_result()                     # base currency
    ledger.net_result_in_platform_currency()

    valuation = ledger.valuate(base_currency="CAD")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from app.services.constants import DEFAULT_PLATFORM_CURRENCY, UNKNOWN_PLATFORM_NAME
from app.services.protocols import (
    AdjustmentRecord,
    DepositRecord,
    PlatformRecord,
    WithdrawalRecord,
)
from app.services.valuation.calculators import (
    CashFlowCalculator,
    CostBasisCalculator,
    ExchangeRateCalculator,
    NetResultCalculator,
)
from app.services.valuation.types import CashFlowTotals, CostBasisParcel, PlatformValuation
from app.utils.decimal_utils import to_decimal
from app.utils.fx_conversion import convert_to_base

_rate_calc = ExchangeRateCalculator()
_cash_flow_calc = CashFlowCalculator()
_net_result_calc = NetResultCalculator()
_cost_basis_calc = CostBasisCalculator()


@dataclass(frozen=True)
class PlatformLedger:
    """
    Read-only snapshot of one platform's money movements.

    Attributes:
        platform_id: Database ID (0 for ad-hoc ledgers)
        name: Stored name, may be None
        currency: Stored currency code, may be None
        current_balance: Balance in platform currency
        deposits / withdrawals / adjustments: Child records
    """

    platform_id: int
    name: str | None
    currency: str | None
    current_balance: Decimal
    deposits: tuple[DepositRecord, ...] = ()
    withdrawals: tuple[WithdrawalRecord, ...] = ()
    adjustments: tuple[AdjustmentRecord, ...] = ()

    @classmethod
    def from_platform(cls, platform: PlatformRecord) -> PlatformLedger:
        """Snapshot a platform row (or anything shaped like one)."""
        return cls(
            platform_id=platform.id,
            name=platform.name,
            currency=platform.currency,
            current_balance=to_decimal(platform.current_balance),
            deposits=tuple(platform.deposits or ()),
            withdrawals=tuple(platform.withdrawals or ()),
            adjustments=tuple(platform.adjustments or ()),
        )

    # =========================================================================
    # DISPLAY
    # =========================================================================

    @property
    def display_name(self) -> str:
        return self.name or UNKNOWN_PLATFORM_NAME

    @property
    def display_currency(self) -> str:
        return self.currency or DEFAULT_PLATFORM_CURRENCY

    # =========================================================================
    # RATES
    # =========================================================================

    def latest_fx_conversion_rate(self) -> Decimal:
        """Base units per platform unit from the most recent FX transaction, else 1."""
        return _rate_calc.latest_rate(self.deposits, self.withdrawals)

    def average_deposit_rate(self) -> Decimal:
        return _rate_calc.average_deposit_rate(self.deposits)

    # =========================================================================
    # TOTALS
    # =========================================================================

    def total_deposited(self) -> Decimal:
        return _cash_flow_calc.total_deposited(self.deposits, self.latest_fx_conversion_rate())

    def total_withdrawn(self) -> Decimal:
        return _cash_flow_calc.total_withdrawn(self.withdrawals, self.latest_fx_conversion_rate())

    def total_adjustments(self) -> Decimal:
        return _cash_flow_calc.total_adjustments(self.adjustments)

    def cash_flows(self, rate: Decimal | None = None) -> CashFlowTotals:
        if rate is None:
            rate = self.latest_fx_conversion_rate()
        return _cash_flow_calc.calculate(self.deposits, self.withdrawals, self.adjustments, rate)

    # =========================================================================
    # NET RESULT
    # =========================================================================

    def net_result(self) -> Decimal:
        """Net result in base currency; 0 for an unseeded platform."""
        rate = self.latest_fx_conversion_rate()
        return _net_result_calc.net_result(self.cash_flows(rate), self.current_balance, rate)

    def net_result_in_platform_currency(self) -> Decimal:
        """Net result in platform currency, derived from native amounts."""
        rate = self.latest_fx_conversion_rate()
        return _net_result_calc.net_result_native(self.cash_flows(rate), self.current_balance, rate)

    def cost_basis_parcels(self) -> tuple[CostBasisParcel, ...]:
        return _cost_basis_calc.calculate(self.deposits)

    # =========================================================================
    # BUNDLE
    # =========================================================================

    def valuate(self, base_currency: str) -> PlatformValuation:
        """
        Compute every valuation figure against a single rate selection.

        Args:
            base_currency: Reporting currency code (labels the result only)
        """
        rate = self.latest_fx_conversion_rate()
        flows = self.cash_flows(rate)

        return PlatformValuation(
            platform_id=self.platform_id,
            name=self.display_name,
            currency=self.display_currency,
            base_currency=base_currency,
            current_balance=self.current_balance,
            current_balance_base=convert_to_base(self.current_balance, rate),
            latest_rate=rate,
            average_deposit_rate=self.average_deposit_rate(),
            total_deposited=flows.deposited_base,
            total_withdrawn=flows.withdrawn_base,
            total_adjustments=flows.adjustments_base,
            net_result=_net_result_calc.net_result(flows, self.current_balance, rate),
            net_result_native=_net_result_calc.net_result_native(flows, self.current_balance, rate),
            deposit_count=flows.deposit_count,
            withdrawal_count=flows.withdrawal_count,
            adjustment_count=len(self.adjustments),
            cost_basis=self.cost_basis_parcels(),
        )


def build_ledger(
        current_balance: Decimal,
        deposits: Sequence[DepositRecord] = (),
        withdrawals: Sequence[WithdrawalRecord] = (),
        adjustments: Sequence[AdjustmentRecord] = (),
        currency: str | None = None,
) -> PlatformLedger:
    """Ledger over loose records, for callers without a platform row."""
    return PlatformLedger(
        platform_id=0,
        name=None,
        currency=currency,
        current_balance=to_decimal(current_balance),
        deposits=tuple(deposits),
        withdrawals=tuple(withdrawals),
        adjustments=tuple(adjustments),
    )
