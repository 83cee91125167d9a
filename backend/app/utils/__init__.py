# backend/app/utils/__init__.py
"""
Utility modules for the Bankroll Ledger.

This package contains cross-cutting utilities used throughout the application:
- logging: Logging configuration and setup with correlation ID support
- context: Request context management for correlation IDs
- date_utils: Calendar helpers for filters and grouping
- decimal_utils: Decimal coercion, guarded division, amount formatting
- fx_conversion: Rate orientation helpers and default session rates

The pure ledger code imports date_utils, decimal_utils and fx_conversion.
Logging reads app.config, so it is imported from its module directly
rather than re-exported here.

Usage:
    from app.utils import get_correlation_id, set_correlation_id
    from app.utils.logging import setup_logging
    from app.utils.date_utils import same_month
"""

from app.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    get_request_context,
    set_request_context,
    clear_request_context,
)

__all__ = [
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_request_context",
    "set_request_context",
    "clear_request_context",
]
