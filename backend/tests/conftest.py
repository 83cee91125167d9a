# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Environment defaults (set before any app module is imported)
- Database session fixtures (in-memory SQLite)
- TestClient with the database dependency overridden
- Factory functions that seed ledger rows

Unit tests of the pure calculators do not touch the database; they use
small mock dataclasses defined in their own modules.
"""

import os

# Settings are read once, at import of app.config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test App")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.models import (
    Adjustment,
    Base,
    Deposit,
    LiveCashSession,
    OnlineCashSession,
    Platform,
    Withdrawal,
)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """
    Create TestClient with database dependency override.

    This ensures all API calls use the test database.
    """
    from app.main import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def create_platform(
        db: Session,
        name: str | None = "PokerStars",
        currency: str | None = "USD",
        current_balance: str = "0",
) -> Platform:
    platform = Platform(name=name, currency=currency, current_balance=Decimal(current_balance))
    db.add(platform)
    db.commit()
    db.refresh(platform)
    return platform


def create_deposit(
        db: Session,
        platform: Platform,
        amount_sent: str,
        amount_received: str,
        date: datetime | None = None,
        rate: str | None = None,
) -> Deposit:
    """FX-flagged when a rate is given."""
    deposit = Deposit(
        platform_id=platform.id,
        date=date,
        amount_sent=Decimal(amount_sent),
        amount_received=Decimal(amount_received),
        is_foreign_exchange=rate is not None,
        effective_exchange_rate=Decimal(rate) if rate is not None else None,
    )
    db.add(deposit)
    db.commit()
    return deposit


def create_withdrawal(
        db: Session,
        platform: Platform,
        amount_requested: str,
        amount_received: str,
        date: datetime | None = None,
        rate: str | None = None,
) -> Withdrawal:
    """FX-flagged when a rate is given."""
    withdrawal = Withdrawal(
        platform_id=platform.id,
        date=date,
        amount_requested=Decimal(amount_requested),
        amount_received=Decimal(amount_received),
        is_foreign_exchange=rate is not None,
        effective_exchange_rate=Decimal(rate) if rate is not None else None,
    )
    db.add(withdrawal)
    db.commit()
    return withdrawal


def create_adjustment(
        db: Session,
        amount_base: str,
        date: datetime | None = None,
        platform: Platform | None = None,
        name: str = "Rakeback",
        currency: str = "CAD",
) -> Adjustment:
    adjustment = Adjustment(
        platform_id=platform.id if platform is not None else None,
        name=name,
        amount=Decimal(amount_base),
        currency=currency,
        amount_base=Decimal(amount_base),
        date=date,
        is_online=platform is not None,
    )
    db.add(adjustment)
    db.commit()
    return adjustment


def create_online_session(
        db: Session,
        platform: Platform | None,
        start_time: datetime | None,
        end_time: datetime | None,
        net: str,
        rate: str = "1",
        big_blind: str = "0.50",
        game_type: str | None = "No Limit Hold'em",
        hands_count: int = 0,
        tables: int = 1,
) -> OnlineCashSession:
    """Session settled at `rate`: balance goes from 1000 to 1000 + net."""
    session = OnlineCashSession(
        platform_id=platform.id if platform is not None else None,
        start_time=start_time,
        end_time=end_time,
        game_type=game_type,
        small_blind=Decimal(big_blind) / 2,
        big_blind=Decimal(big_blind),
        tables=tables,
        hands_count=hands_count,
        balance_before=Decimal("1000"),
        balance_after=Decimal("1000") + Decimal(net),
        net_profit_loss=Decimal(net),
        net_profit_loss_base=Decimal(net) * Decimal(rate),
        exchange_rate_to_base=Decimal(rate),
    )
    db.add(session)
    db.commit()
    return session


def create_live_session(
        db: Session,
        start_time: datetime | None,
        end_time: datetime | None,
        buy_in: str,
        cash_out: str,
        location: str | None = "Casino Niagara",
        tips: str = "0",
        big_blind: str = "2",
        game_type: str | None = "No Limit Hold'em",
        rate: str = "0",
) -> LiveCashSession:
    session = LiveCashSession(
        start_time=start_time,
        end_time=end_time,
        location=location,
        game_type=game_type,
        small_blind=Decimal(big_blind) / 2,
        big_blind=Decimal(big_blind),
        currency="CAD",
        buy_in=Decimal(buy_in),
        cash_out=Decimal(cash_out),
        tips=Decimal(tips),
        exchange_rate_to_base=Decimal(rate),
    )
    db.add(session)
    db.commit()
    return session
