# backend/app/main.py
"""
FastAPI application entry point.

This file:
- Configures application-wide logging
- Creates the FastAPI application
- Registers global exception handlers
- Registers all routers
- Defines global endpoints (health checks)
"""

import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import check_database_health, get_db
from app.middleware import (
    CorrelationIdMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_HEALTH,
)
from app.routers import (
    platforms_router,
    sessions_router,
    settings_router,
    stats_router,
)
from app.schemas.errors import ErrorDetail, ValidationErrorDetail
from app.services.exceptions import (
    ServiceError,
    ValidationError,
    NotFoundError,
    PlatformNotFoundError,
)
from app.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# LOGGING SETUP (must be before app creation)
# =============================================================================

setup_logging()

# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Read-only bankroll valuation and session statistics API",
    version="0.1.0",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================
# Origins are configured via CORS_ORIGINS environment variable

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


# =============================================================================
# MIDDLEWARE (order matters: last added = first executed)
# =============================================================================

# Required by slowapi
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)

# Outermost, so the request log line covers rate-limited responses too
app.add_middleware(CorrelationIdMiddleware)

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
# Most specific first; FastAPI picks the handler by walking the exception's MRO

@app.exception_handler(PlatformNotFoundError)
async def platform_not_found_handler(
    request: Request, exc: PlatformNotFoundError
) -> JSONResponse:
    """Handle missing platform (404)."""
    logger.warning(f"Platform not found: {exc.resource_id}")
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error="PlatformNotFoundError",
            message=str(exc),
            details={"platform_id": exc.resource_id},
        ).model_dump(),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle any other missing resource (404)."""
    logger.warning(f"{exc.resource_type} not found: {exc.resource_id}")
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error=type(exc).__name__,
            message=str(exc),
            details={
                "resource_type": exc.resource_type,
                "resource_id": exc.resource_id,
            },
        ).model_dump(),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle rejected filters and other bad parameters (400)."""
    logger.warning(f"Validation error on {exc.field}: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error=type(exc).__name__,
            message=str(exc),
            details={"field": exc.field} if exc.field else None,
        ).model_dump(),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle generic service errors (500)."""
    logger.error(f"Service error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="ServiceError",
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle all HTTPExceptions, FastAPI's and Starlette's, with consistent error format.

    Converts FastAPI's default {"detail": "..."} format (unknown routes,
    wrong methods) to the ErrorDetail format.
    """
    error_types = {
        400: "BadRequestError",
        404: "NotFoundError",
        405: "MethodNotAllowedError",
        422: "ValidationError",
        429: "RateLimitError",
        500: "InternalServerError",
        503: "ServiceUnavailableError",
    }
    error_type = error_types.get(exc.status_code, "HTTPError")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorDetail(
            error=error_type,
            message=str(exc.detail) if exc.detail else "An error occurred",
            details=None,
        ).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed query parameters (422).

    A non-numeric platform_id or a badly formatted date ends up here;
    an unknown period or scope is a ValidationError (400) instead.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=422,
        content=ValidationErrorDetail(
            error="ValidationError",
            message="Request validation failed",
            details=errors,
        ).model_dump(),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(platforms_router)  # /platforms/*
app.include_router(stats_router)  # /stats, /stats/filters, /adjustments
app.include_router(sessions_router)  # /sessions
app.include_router(settings_router)  # /settings


# =============================================================================
# GLOBAL ENDPOINTS
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    """
    API root - returns basic application info.
    """
    return {
        "message": f"Welcome to {settings.app_name}!",
        "base_currency": settings.base_currency,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Health check endpoint.

    **Response Status Codes:**
    - 200: Database reachable
    - 503: Database unreachable - do not route traffic here
    """
    try:
        db.execute(text("SELECT 1"))
        checks = {"database": {"status": "healthy", "critical": True}}
        healthy = True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        checks = {"database": {"status": "unhealthy", "critical": True, "error": str(e)}}
        healthy = False

    response_data = {
        "status": "healthy" if healthy else "unhealthy",
        "environment": settings.environment,
        "checks": checks,
    }

    if not healthy:
        return JSONResponse(status_code=503, content=response_data)

    return response_data


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """
    Liveness probe: 200 while the process is up. Checks no dependencies.
    """
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(request: Request):
    """
    Readiness probe against the application's own engine.

    Returns 503 while the database is unreachable; includes pool usage
    for pooled (PostgreSQL) engines.
    """
    health = check_database_health()
    if health["status"] != "healthy":
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "database": health},
        )
    return {"status": "ready", "database": health}
