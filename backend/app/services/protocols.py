# backend/app/services/protocols.py
"""
Protocol interfaces for the ledger core and service dependency injection.

Using typing.Protocol enables structural subtyping:
- ORM rows (app.models) satisfy the record protocols without modification
- Test doubles are plain dataclasses with the same attributes
- The calculators never import SQLAlchemy

Record protocols describe the read-only snapshot the core consumes.
Numeric attributes may be None on legacy rows; the core treats None as 0.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.models import Platform


# =============================================================================
# RECORD SNAPSHOTS
# =============================================================================

class DepositRecord(Protocol):
    date: datetime | None
    amount_sent: Decimal | None
    amount_received: Decimal | None
    is_foreign_exchange: bool
    effective_exchange_rate: Decimal | None


class WithdrawalRecord(Protocol):
    date: datetime | None
    amount_requested: Decimal | None
    amount_received: Decimal | None
    is_foreign_exchange: bool
    effective_exchange_rate: Decimal | None


class AdjustmentRecord(Protocol):
    amount_base: Decimal | None
    date: datetime | None
    platform_id: int | None


class PlatformRecord(Protocol):
    id: int
    name: str | None
    currency: str | None
    current_balance: Decimal | None
    deposits: Sequence[DepositRecord]
    withdrawals: Sequence[WithdrawalRecord]
    adjustments: Sequence[AdjustmentRecord]


class OnlineSessionRecord(Protocol):
    start_time: datetime | None
    end_time: datetime | None
    duration: Decimal | None
    break_minutes: int | None
    tables: int | None
    hands_count: int | None
    game_type: str | None
    small_blind: Decimal | None
    big_blind: Decimal | None
    straddle: Decimal | None
    ante: Decimal | None
    balance_before: Decimal | None
    net_profit_loss: Decimal | None
    net_profit_loss_base: Decimal | None
    exchange_rate_to_base: Decimal | None
    platform_id: int | None


class LiveSessionRecord(Protocol):
    start_time: datetime | None
    end_time: datetime | None
    duration: Decimal | None
    break_minutes: int | None
    hands_count: int | None
    game_type: str | None
    location: str | None
    small_blind: Decimal | None
    big_blind: Decimal | None
    straddle: Decimal | None
    ante: Decimal | None
    buy_in: Decimal | None
    cash_out: Decimal | None
    tips: Decimal | None
    exchange_rate_to_base: Decimal | None
    exchange_rate_buy_in: Decimal | None
    exchange_rate_cash_out: Decimal | None


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

class LedgerRepositoryProtocol(Protocol):
    """Interface required by ValuationService, StatsService and SessionFeedService."""

    def get_platform(self, db: Session, platform_id: int) -> Platform | None:
        ...

    def list_platforms(self, db: Session) -> list[Platform]:
        ...

    def count_online_sessions(self, db: Session) -> dict[int, int]:
        ...

    def list_online_sessions(self, db: Session) -> list[OnlineSessionRecord]:
        ...

    def list_live_sessions(self, db: Session) -> list[LiveSessionRecord]:
        ...

    def list_adjustments(self, db: Session) -> list[AdjustmentRecord]:
        ...
