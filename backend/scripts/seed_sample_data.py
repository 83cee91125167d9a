#!/usr/bin/env python3
# backend/scripts/seed_sample_data.py
"""
Seed a small bankroll for local exploration of the API.

Creates (once) an online platform funded through a USD→CAD transfer, a
few online sessions settled at the platform's rate, two live sessions and
a standalone adjustment. Re-running finds the platform by name and stops.

    python backend/scripts/seed_sample_data.py
"""
import logging
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Setup path to import app modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import select

from app.config import settings
from app.database import SessionLocal, engine
from app.models import (
    Adjustment,
    Base,
    Deposit,
    LiveCashSession,
    OnlineCashSession,
    Platform,
    Withdrawal,
)
from app.services.sessions.metrics import settle_online_result
from app.utils.fx_conversion import deposit_rate_to_base_rate

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_PLATFORM = "PokerStars"

# USD received per CAD sent, as a deposit stores it
DEPOSIT_RATE = Decimal("0.74074074")


def _online_session(platform: Platform, start: datetime, hours: int, before: str, after: str) -> OnlineCashSession:
    rate = deposit_rate_to_base_rate(DEPOSIT_RATE)
    settled = settle_online_result(
        Decimal(before),
        Decimal(after),
        rate,
        same_currency=platform.currency == settings.base_currency,
    )
    return OnlineCashSession(
        platform=platform,
        start_time=start,
        end_time=start + timedelta(hours=hours),
        duration=Decimal(hours),
        game_type="No Limit Hold'em",
        small_blind=Decimal("0.25"),
        big_blind=Decimal("0.50"),
        table_size=6,
        tables=2,
        balance_before=Decimal(before),
        balance_after=Decimal(after),
        net_profit_loss=settled.net_profit_loss,
        net_profit_loss_base=settled.net_profit_loss_base,
        exchange_rate_to_base=settled.exchange_rate_to_base,
    )


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        logger.info("Starting database seeding...")

        existing = db.scalars(select(Platform).where(Platform.name == SAMPLE_PLATFORM)).first()
        if existing is not None:
            logger.info(f"Platform exists: {existing.name} (id={existing.id}), nothing to do")
            return

        now = datetime.now().replace(microsecond=0)

        # 1. Platform funded in USD from a CAD bank account
        platform = Platform(name=SAMPLE_PLATFORM, currency="USD", current_balance=Decimal("812.50"))
        platform.deposits.append(Deposit(
            date=now - timedelta(days=40),
            amount_sent=Decimal("1350"),
            amount_received=Decimal("1000"),
            is_foreign_exchange=True,
            effective_exchange_rate=DEPOSIT_RATE,
            method="E-Transfer",
        ))
        platform.withdrawals.append(Withdrawal(
            date=now - timedelta(days=5),
            amount_requested=Decimal("300"),
            amount_received=Decimal("405"),
            is_foreign_exchange=True,
            effective_exchange_rate=Decimal("1.35"),
            method="Bank Transfer",
        ))
        platform.adjustments.append(Adjustment(
            name="Rakeback",
            amount=Decimal("25"),
            currency="USD",
            exchange_rate_to_base=Decimal("1.35"),
            amount_base=Decimal("33.75"),
            date=now - timedelta(days=3),
            is_online=True,
        ))
        db.add(platform)
        logger.info(f"Created platform: {platform.name}")

        # 2. Online sessions
        db.add_all([
            _online_session(platform, now - timedelta(days=30), 3, "1000", "1062.50"),
            _online_session(platform, now - timedelta(days=20), 2, "1062.50", "980"),
            _online_session(platform, now - timedelta(days=10), 4, "980", "1087.50"),
        ])

        # 3. Live sessions, one with dual rates
        db.add_all([
            LiveCashSession(
                start_time=now - timedelta(days=14),
                end_time=now - timedelta(days=14) + timedelta(hours=4),
                duration=Decimal(4),
                location="Casino Niagara",
                game_type="No Limit Hold'em",
                small_blind=Decimal("1"),
                big_blind=Decimal("2"),
                currency="CAD",
                buy_in=Decimal("300"),
                cash_out=Decimal("480"),
                tips=Decimal("20"),
                exchange_rate_to_base=Decimal("1"),
            ),
            LiveCashSession(
                start_time=now - timedelta(days=7),
                end_time=now - timedelta(days=7) + timedelta(hours=5, minutes=30),
                break_minutes=30,
                location="Bellagio",
                game_type="No Limit Hold'em",
                small_blind=Decimal("2"),
                big_blind=Decimal("5"),
                currency="USD",
                buy_in=Decimal("1000"),
                cash_out=Decimal("740"),
                tips=Decimal("15"),
                exchange_rate_buy_in=Decimal("1.36"),
                exchange_rate_cash_out=Decimal("1.38"),
            ),
        ])

        # 4. Standalone adjustment (no platform)
        db.add(Adjustment(
            name="Tournament freeroll prize",
            amount=Decimal("50"),
            currency="CAD",
            amount_base=Decimal("50"),
            date=now - timedelta(days=2),
            location="Casino Niagara",
        ))

        db.commit()
        logger.info("Seeding completed")

    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
