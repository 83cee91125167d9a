# backend/app/models.py
"""
SQLAlchemy models for the bankroll ledger.

A Platform is a money-holding account (an online poker site, a wallet at a
card room). Deposits, withdrawals, online sessions and platform-bound
adjustments reference it by id. Live sessions and standalone adjustments
have no platform.

Money and rates use Numeric(18, 8) so values come back as Decimal.
Session and transaction timestamps are naive local datetimes: statistics
filters compare them against the local calendar ("this month").
"""
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Numeric, Boolean, Integer, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Platform(Base):
    __tablename__ = "platforms"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # Both may be missing on imported records; display defaults apply
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    # Native-currency balance as of the last manual sync
    current_balance: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    deposits: Mapped[list["Deposit"]] = relationship(
        back_populates="platform",
        cascade="all, delete-orphan"
    )
    withdrawals: Mapped[list["Withdrawal"]] = relationship(
        back_populates="platform",
        cascade="all, delete-orphan"
    )
    online_sessions: Mapped[list["OnlineCashSession"]] = relationship(
        back_populates="platform",
        cascade="all, delete-orphan"
    )
    adjustments: Mapped[list["Adjustment"]] = relationship(
        back_populates="platform",
        cascade="all, delete-orphan"
    )


class Deposit(Base):
    """
    Money moved onto a platform.

    amount_sent is in the base currency, amount_received in the platform
    currency. For FX deposits, effective_exchange_rate is the stored
    "platform units per base unit" rate (received / sent).
    """
    __tablename__ = "deposits"
    __table_args__ = (
        Index('ix_deposit_platform_date', 'platform_id', 'date'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(ForeignKey("platforms.id"), index=True)
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    amount_sent: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    amount_received: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    is_foreign_exchange: Mapped[bool] = mapped_column(Boolean, default=False)
    effective_exchange_rate: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    processing_fee: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    method: Mapped[str | None] = mapped_column(String, nullable=True)

    platform: Mapped["Platform"] = relationship(back_populates="deposits")


class Withdrawal(Base):
    """
    Money moved off a platform.

    amount_requested is in the platform currency, amount_received in the
    base currency. For FX withdrawals, effective_exchange_rate is the
    "base units per platform unit" rate (received / requested).
    """
    __tablename__ = "withdrawals"
    __table_args__ = (
        Index('ix_withdrawal_platform_date', 'platform_id', 'date'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(ForeignKey("platforms.id"), index=True)
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    amount_requested: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    amount_received: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    is_foreign_exchange: Mapped[bool] = mapped_column(Boolean, default=False)
    effective_exchange_rate: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    processing_fee: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    method: Mapped[str | None] = mapped_column(String, nullable=True)

    platform: Mapped["Platform"] = relationship(back_populates="withdrawals")


class OnlineCashSession(Base):
    """
    An online cash-game session played on a platform.

    net_profit_loss is in the platform currency; net_profit_loss_base is the
    base-currency result stored when the session was settled.
    """
    __tablename__ = "online_cash_sessions"
    __table_args__ = (
        Index('ix_online_session_platform_start', 'platform_id', 'start_time'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int | None] = mapped_column(ForeignKey("platforms.id"), nullable=True, index=True)

    # =========================================================================
    # TIMING
    # =========================================================================
    start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)  # None = still running
    duration: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))  # Legacy hours
    break_minutes: Mapped[int] = mapped_column(Integer, default=0)

    # =========================================================================
    # GAME
    # =========================================================================
    game_type: Mapped[str | None] = mapped_column(String, nullable=True)
    small_blind: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    big_blind: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    straddle: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    ante: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    table_size: Mapped[int] = mapped_column(Integer, default=6)
    tables: Mapped[int] = mapped_column(Integer, default=1)
    hands_count: Mapped[int] = mapped_column(Integer, default=0)  # 0 = estimate from duration

    # =========================================================================
    # MONEY
    # =========================================================================
    balance_before: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    balance_after: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    net_profit_loss: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    net_profit_loss_base: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    exchange_rate_to_base: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))  # 0 = unset

    notes: Mapped[str | None] = mapped_column(String, nullable=True)

    platform: Mapped["Platform | None"] = relationship(back_populates="online_sessions")


class LiveCashSession(Base):
    """
    A cash-game session played at a live venue.

    Amounts are in the session currency. exchange_rate_buy_in and
    exchange_rate_cash_out convert each leg separately; the single
    exchange_rate_to_base is kept for sessions recorded before dual rates.
    """
    __tablename__ = "live_cash_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # =========================================================================
    # TIMING
    # =========================================================================
    start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    duration: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    break_minutes: Mapped[int] = mapped_column(Integer, default=0)

    # =========================================================================
    # GAME
    # =========================================================================
    location: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    game_type: Mapped[str | None] = mapped_column(String, nullable=True)
    small_blind: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    big_blind: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    straddle: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    ante: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    table_size: Mapped[int] = mapped_column(Integer, default=9)
    hands_count: Mapped[int] = mapped_column(Integer, default=0)

    # =========================================================================
    # MONEY
    # =========================================================================
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    buy_in: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    cash_out: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    tips: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    exchange_rate_to_base: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    exchange_rate_buy_in: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    exchange_rate_cash_out: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))

    notes: Mapped[str | None] = mapped_column(String, nullable=True)


class Adjustment(Base):
    """
    A manual bankroll correction (rakeback, bonus, expense).

    amount is in `currency`; amount_base is the base-currency value used by
    every calculation. platform_id is set only for platform-bound entries.
    """
    __tablename__ = "adjustments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int | None] = mapped_column(ForeignKey("platforms.id"), nullable=True, index=True)

    name: Mapped[str | None] = mapped_column(String, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    exchange_rate_to_base: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(1))
    amount_base: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    is_online: Mapped[bool] = mapped_column(Boolean, default=False)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(String, nullable=True)

    platform: Mapped["Platform | None"] = relationship(back_populates="adjustments")
