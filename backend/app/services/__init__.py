# backend/app/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive database sessions as parameters (not via Depends)
- Are easily testable via dependency injection

The calculators underneath (valuation ledger, session metrics, statistics
aggregator) are pure and never touch the database.

Usage:
    from app.services import ValuationService, StatsService, SessionFeedService
    from app.services import PlatformNotFoundError, InvalidFilterError

Architecture:
    services/
    ├── __init__.py          # This file - main exports
    ├── exceptions.py        # Domain exceptions
    ├── constants.py         # Business constants and limits
    ├── protocols.py         # Record and repository interfaces
    ├── repository.py        # SQLAlchemy LedgerRepository
    ├── valuation/           # Per-platform valuation
    │   ├── types.py
    │   ├── calculators.py
    │   ├── ledger.py
    │   └── service.py
    ├── sessions/            # Session normalization
    │   ├── types.py
    │   ├── metrics.py
    │   └── feed.py
    └── stats/               # Statistics aggregator
        ├── types.py
        ├── filters.py
        ├── streaks.py
        ├── aggregator.py
        └── service.py
"""

from app.services.exceptions import (
    ServiceError,
    ValidationError,
    InvalidFilterError,
    UnsupportedCurrencyError,
    NotFoundError,
    PlatformNotFoundError,
)
from app.services.repository import LedgerRepository
from app.services.valuation import ValuationService
from app.services.sessions import SessionFeedService
from app.services.stats import StatsService

__all__ = [
    # Services
    "LedgerRepository",
    "ValuationService",
    "SessionFeedService",
    "StatsService",
    # Exceptions
    "ServiceError",
    "ValidationError",
    "InvalidFilterError",
    "UnsupportedCurrencyError",
    "NotFoundError",
    "PlatformNotFoundError",
]
