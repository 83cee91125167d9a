# backend/app/middleware/correlation.py
"""
Correlation ID middleware for request tracing.

This middleware:
1. Extracts or generates a correlation ID for each request
2. Stores it, plus the request method and path, in the request context
3. Logs one line per completed request with status and elapsed time
4. Adds the ID to response headers for client-side tracing

Correlation ID Sources (in order of precedence):
1. X-Correlation-ID header (from client or upstream service)
2. X-Request-ID header (alternative header name)
3. Generated UUID if neither header is present

Usage:
    app.add_middleware(CorrelationIdMiddleware)

Client Usage:
    curl -H "X-Correlation-ID: my-trace-123" http://localhost:8000/stats
    # Response includes X-Correlation-ID: my-trace-123
"""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.utils.context import (
    clear_correlation_id,
    clear_request_context,
    get_request_context,
    set_correlation_id,
    set_request_context,
)

logger = logging.getLogger(__name__)

# Header names for correlation ID
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware that manages correlation IDs and request context.

    For each request:
    1. Extracts correlation ID from headers, or generates a UUID
    2. Stores it in context (accessible via get_correlation_id())
    3. Records method and path in the request context
    4. Adds the ID to response headers
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        correlation_id = self._get_correlation_id(request)

        set_correlation_id(correlation_id)
        set_request_context("method", request.method)
        set_request_context("path", request.url.path)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id

            elapsed_ms = (time.perf_counter() - started) * 1000
            context = get_request_context()
            logger.info(
                f"{context['method']} {context['path']} -> {response.status_code} "
                f"({elapsed_ms:.1f} ms)"
            )
            return response

        finally:
            clear_request_context()
            clear_correlation_id()

    def _get_correlation_id(self, request: Request) -> str:
        """Header value (X-Correlation-ID, then X-Request-ID) or a new UUID."""
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)
        if correlation_id:
            return correlation_id

        correlation_id = request.headers.get(REQUEST_ID_HEADER)
        if correlation_id:
            return correlation_id

        return str(uuid.uuid4())
