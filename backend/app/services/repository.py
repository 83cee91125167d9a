# backend/app/services/repository.py
"""
Read-only repository over the ledger tables.

Loads the snapshots the pure calculators consume. The services depend on
LedgerRepositoryProtocol, so tests can swap in an in-memory fake.

Platforms are loaded with their child collections eagerly (selectinload)
because every valuation walks all of them.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.models import Adjustment, LiveCashSession, OnlineCashSession, Platform

logger = logging.getLogger(__name__)


class LedgerRepository:
    """SQLAlchemy implementation of LedgerRepositoryProtocol."""

    @staticmethod
    def _platform_query():
        return select(Platform).options(
            selectinload(Platform.deposits),
            selectinload(Platform.withdrawals),
            selectinload(Platform.adjustments),
        )

    def get_platform(self, db: Session, platform_id: int) -> Platform | None:
        query = self._platform_query().where(Platform.id == platform_id)
        return db.scalars(query).first()

    def list_platforms(self, db: Session) -> list[Platform]:
        query = self._platform_query().order_by(Platform.id)
        platforms = list(db.scalars(query).all())
        logger.debug(f"Loaded {len(platforms)} platforms")
        return platforms

    def count_online_sessions(self, db: Session) -> dict[int, int]:
        """Online session count per platform_id."""
        query = (
            select(OnlineCashSession.platform_id, func.count(OnlineCashSession.id))
            .where(OnlineCashSession.platform_id.is_not(None))
            .group_by(OnlineCashSession.platform_id)
        )
        return {platform_id: count for platform_id, count in db.execute(query).all()}

    def list_online_sessions(self, db: Session) -> list[OnlineCashSession]:
        query = select(OnlineCashSession).order_by(OnlineCashSession.id)
        return list(db.scalars(query).all())

    def list_live_sessions(self, db: Session) -> list[LiveCashSession]:
        query = select(LiveCashSession).order_by(LiveCashSession.id)
        return list(db.scalars(query).all())

    def list_adjustments(self, db: Session) -> list[Adjustment]:
        query = select(Adjustment).order_by(Adjustment.id)
        return list(db.scalars(query).all())
