# backend/app/routers/__init__.py
"""
API routers for the Bankroll Ledger.

Each router handles a specific domain:
- platforms: Platform valuation and bankroll summary
- stats: Statistics, filter options, adjustments summary
- sessions: Session feed grouped by month
- settings: Read-only configuration
"""

from app.routers.platforms import router as platforms_router
from app.routers.sessions import router as sessions_router
from app.routers.settings import router as settings_router
from app.routers.stats import router as stats_router

__all__ = [
    "platforms_router",
    "sessions_router",
    "settings_router",
    "stats_router",
]
