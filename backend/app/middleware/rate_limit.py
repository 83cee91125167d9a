# backend/app/middleware/rate_limit.py
"""
Rate limiting for the read-only API.

Uses slowapi, keyed by client IP. Every endpoint gets RATE_LIMIT_DEFAULT
through SlowAPIMiddleware; statistics endpoints, which recompute over the
whole record set, and health checks carry their own limits.

Storage: In-memory (single-instance deployment)

Usage:
    from app.middleware.rate_limit import limiter, RATE_LIMIT_STATS

    @router.get("/stats")
    @limiter.limit(RATE_LIMIT_STATS)
    def get_stats(request: Request, ...):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.services.constants import (
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_STATS,
)

logger = logging.getLogger(__name__)

# Seconds a limited client is told to wait
RETRY_AFTER_SECONDS = 60


def _get_client_ip(request: Request) -> str:
    """
    Client IP used as the rate-limit key.

    X-Forwarded-For is honoured only when the direct peer is a trusted
    proxy, so clients cannot pick their own key.
    """
    direct_ip = get_remote_address(request)

    if settings.trust_proxy_headers or direct_ip in settings.trusted_proxy_ips:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    return direct_ip


# =============================================================================
# LIMITER INSTANCE
# =============================================================================

limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=settings.rate_limit_enabled,
)


# =============================================================================
# RATE LIMIT EXCEEDED HANDLER
# =============================================================================

async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """
    429 response in the common error body format, with Retry-After.
    """
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"

    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitError",
            "message": f"Too many requests. {limit_info}",
            "details": {"retry_after": RETRY_AFTER_SECONDS},
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_STATS",
]
