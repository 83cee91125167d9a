# backend/app/services/valuation/calculators.py
"""
Point-in-time platform valuation calculators.

Each calculator follows the Single Responsibility Principle:
- ExchangeRateCalculator: Picks the platform → base conversion rate
- CashFlowCalculator: Sums deposits, withdrawals and adjustments
- NetResultCalculator: Net result in base and in platform currency
- CostBasisCalculator: Per-deposit cost basis parcels

Design Principles:
- Stateless (no instance state, pure functions)
- Receives record snapshots explicitly (ORM rows or test doubles)
- Never raises: missing values count as zero, non-positive rates as absent
- Uses Decimal for ALL financial calculations

Rate orientation:
    The "latest rate" is always base units per platform unit. Deposits
    store the opposite orientation and are inverted; withdrawals are used
    as stored. See app/utils/fx_conversion.py.

Usage:
    rate_calc = ExchangeRateCalculator()
    rate = rate_calc.latest_rate(platform.deposits, platform.withdrawals)

    flows = CashFlowCalculator().calculate(
        deposits=platform.deposits,
        withdrawals=platform.withdrawals,
        adjustments=platform.adjustments,
        rate=rate,
    )
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Sequence

from app.services.constants import ZERO, ONE
from app.services.protocols import AdjustmentRecord, DepositRecord, WithdrawalRecord
from app.services.valuation.types import CashFlowTotals, CostBasisParcel, RateObservation
from app.utils.date_utils import or_distant_past
from app.utils.decimal_utils import to_decimal
from app.utils.fx_conversion import convert_from_base, convert_to_base, deposit_rate_to_base_rate

logger = logging.getLogger(__name__)


# =============================================================================
# EXCHANGE RATE CALCULATOR
# =============================================================================

class ExchangeRateCalculator:
    """
    Selects conversion rates from a platform's FX-flagged transactions.

    Only FX-flagged records with a positive effective_exchange_rate count.
    Nothing is averaged unless average_deposit_rate() is asked for.
    """

    def observations(
            self,
            deposits: Iterable[DepositRecord],
            withdrawals: Iterable[WithdrawalRecord],
    ) -> list[RateObservation]:
        """
        Collect rate observations, oldest first.

        Undated records sort first. The sort is stable and deposits are
        listed before withdrawals, so on an exact date tie the withdrawal
        comes last.

        Returns:
            Observations normalized to base units per platform unit
        """
        found: list[RateObservation] = []

        for deposit in deposits:
            rate = to_decimal(deposit.effective_exchange_rate)
            if deposit.is_foreign_exchange and rate > 0:
                found.append(RateObservation(
                    date=deposit.date,
                    rate=deposit_rate_to_base_rate(rate),
                    source="deposit",
                ))

        for withdrawal in withdrawals:
            rate = to_decimal(withdrawal.effective_exchange_rate)
            if withdrawal.is_foreign_exchange and rate > 0:
                found.append(RateObservation(
                    date=withdrawal.date,
                    rate=rate,
                    source="withdrawal",
                ))

        return sorted(found, key=lambda obs: or_distant_past(obs.date))

    def latest_rate(
            self,
            deposits: Iterable[DepositRecord],
            withdrawals: Iterable[WithdrawalRecord],
    ) -> Decimal:
        """
        Rate of the most recent FX-flagged transaction.

        Returns:
            Base units per platform unit, or 1 if no FX history exists
        """
        observations = self.observations(deposits, withdrawals)
        if not observations:
            return ONE

        latest = observations[-1]
        logger.debug(f"Latest rate {latest.rate} from {latest.source} dated {latest.date}")
        return latest.rate

    def average_deposit_rate(self, deposits: Iterable[DepositRecord]) -> Decimal:
        """
        Explicit average over FX deposits: Σ amount_received / Σ amount_sent.

        Returns:
            Platform units per base unit, or 1 when there are no FX deposits
            or nothing was sent
        """
        fx_deposits = [d for d in deposits if d.is_foreign_exchange]
        if not fx_deposits:
            return ONE

        total_sent = sum((to_decimal(d.amount_sent) for d in fx_deposits), ZERO)
        total_received = sum((to_decimal(d.amount_received) for d in fx_deposits), ZERO)
        if total_sent <= 0:
            return ONE
        return total_received / total_sent


# =============================================================================
# CASH FLOW CALCULATOR
# =============================================================================

class CashFlowCalculator:
    """
    Sums a platform's cash movements.

    Base-currency rules:
        Deposit:    FX-flagged → amount_sent as-is (already base)
                    otherwise  → amount_sent × rate
        Withdrawal: FX-flagged → amount_received as-is (already base)
                    otherwise  → amount_received × rate
        Adjustment: amount_base as-is
    """

    def total_deposited(self, deposits: Iterable[DepositRecord], rate: Decimal) -> Decimal:
        total = ZERO
        for deposit in deposits:
            sent = to_decimal(deposit.amount_sent)
            total += sent if deposit.is_foreign_exchange else convert_to_base(sent, rate)
        return total

    def total_withdrawn(self, withdrawals: Iterable[WithdrawalRecord], rate: Decimal) -> Decimal:
        total = ZERO
        for withdrawal in withdrawals:
            received = to_decimal(withdrawal.amount_received)
            total += received if withdrawal.is_foreign_exchange else convert_to_base(received, rate)
        return total

    def total_adjustments(self, adjustments: Iterable[AdjustmentRecord]) -> Decimal:
        return sum((to_decimal(a.amount_base) for a in adjustments), ZERO)

    def calculate(
            self,
            deposits: Sequence[DepositRecord],
            withdrawals: Sequence[WithdrawalRecord],
            adjustments: Sequence[AdjustmentRecord],
            rate: Decimal,
    ) -> CashFlowTotals:
        """
        Compute every cash-flow total in one pass over the snapshot.

        Native totals use the platform-side amounts: amount_received for
        deposits and amount_requested for withdrawals.
        """
        return CashFlowTotals(
            deposited_base=self.total_deposited(deposits, rate),
            withdrawn_base=self.total_withdrawn(withdrawals, rate),
            adjustments_base=self.total_adjustments(adjustments),
            deposited_native=sum((to_decimal(d.amount_received) for d in deposits), ZERO),
            withdrawn_native=sum((to_decimal(w.amount_requested) for w in withdrawals), ZERO),
            deposit_count=len(deposits),
            withdrawal_count=len(withdrawals),
        )


# =============================================================================
# NET RESULT CALCULATOR
# =============================================================================

class NetResultCalculator:
    """
    Net result of a platform in base and in platform currency.

    Both figures are 0 for an unseeded platform (no deposits and no
    withdrawals), whatever its balance. The platform-currency figure is
    derived from native amounts, not by dividing the base figure by the
    rate, so the two agree only approximately.
    """

    def net_result(self, totals: CashFlowTotals, balance: Decimal, rate: Decimal) -> Decimal:
        """
        withdrawn + balance × rate − deposited + adjustments (base currency)
        """
        if not totals.has_activity:
            return ZERO

        balance_base = convert_to_base(balance, rate)
        return totals.withdrawn_base + balance_base - totals.deposited_base + totals.adjustments_base

    def net_result_native(self, totals: CashFlowTotals, balance: Decimal, rate: Decimal) -> Decimal:
        """
        Σ requested + balance − Σ received + adjustments / rate (platform currency)

        Adjustments are added unconverted when the rate is not positive.
        """
        if not totals.has_activity:
            return ZERO

        if rate > 0:
            adjustments_native = convert_from_base(totals.adjustments_base, rate)
        else:
            adjustments_native = totals.adjustments_base

        return totals.withdrawn_native + balance - totals.deposited_native + adjustments_native


# =============================================================================
# COST BASIS CALCULATOR
# =============================================================================

class CostBasisCalculator:
    """
    Cost basis parcels for the platform currency, one per deposit.

    Cost per unit precedence:
        1. FX-flagged deposit with a positive rate → effective_exchange_rate
        2. amount_received > 0 → amount_sent / amount_received
        3. otherwise → 1
    """

    def calculate(self, deposits: Iterable[DepositRecord]) -> tuple[CostBasisParcel, ...]:
        ordered = sorted(deposits, key=lambda d: or_distant_past(d.date))
        return tuple(self._parcel(deposit) for deposit in ordered)

    @staticmethod
    def _parcel(deposit: DepositRecord) -> CostBasisParcel:
        sent = to_decimal(deposit.amount_sent)
        received = to_decimal(deposit.amount_received)
        rate = to_decimal(deposit.effective_exchange_rate)

        if deposit.is_foreign_exchange and rate > 0:
            cost_per_unit = rate
        elif received > 0:
            cost_per_unit = sent / received
        else:
            cost_per_unit = ONE

        return CostBasisParcel(date=deposit.date, amount=received, cost_per_unit=cost_per_unit)
