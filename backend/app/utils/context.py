# backend/app/utils/context.py
"""
Request-scoped context for log enrichment.

Holds two values per request, both set by CorrelationIdMiddleware:
- the correlation ID, echoed back in the X-Correlation-ID header
- a small dict of request fields (method, path) that log records pick up

Backed by contextvars, so values follow a request across await points
and into the threadpool FastAPI uses for sync endpoints.

Usage:
    from app.utils.context import get_correlation_id, set_request_context

    set_request_context("path", "/stats")
    get_correlation_id()  # "abc-123" inside a request, None outside
"""

from contextvars import ContextVar
from typing import Any

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Never mutated in place; setters store a fresh copy
_request_context_var: ContextVar[dict[str, Any]] = ContextVar("request_context", default={})


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """Correlation ID of the request being served, or None."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id_var.set(None)


# =============================================================================
# REQUEST FIELDS
# =============================================================================

def get_request_context() -> dict[str, Any]:
    """
    Copy of the request fields recorded so far.

    Returns an empty dict outside a request.
    """
    return _request_context_var.get().copy()


def set_request_context(key: str, value: Any) -> None:
    """Record one request field (e.g. "method", "path")."""
    ctx = _request_context_var.get().copy()
    ctx[key] = value
    _request_context_var.set(ctx)


def clear_request_context() -> None:
    _request_context_var.set({})
