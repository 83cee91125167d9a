# backend/app/utils/date_utils.py
"""
Date utility functions for the Bankroll Ledger.

Shared calendar helpers for the statistics filters and the session feed.
Records may have no date; those sort and filter as DISTANT_PAST.

Usage:
    from app.utils.date_utils import or_distant_past, same_month

    if same_month(session.session_date, now):
        ...
"""

from datetime import date, datetime, time

# Ordering value for records without a date
DISTANT_PAST = datetime.min


def or_distant_past(value: datetime | None) -> datetime:
    """Return value, or DISTANT_PAST when it is missing."""
    return value if value is not None else DISTANT_PAST


def same_month(value: datetime, reference: datetime) -> bool:
    """
    Check if two datetimes fall in the same calendar month.

    Example:
        >>> same_month(datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59))
        True
        >>> same_month(datetime(2023, 3, 1), datetime(2024, 3, 1))
        False
    """
    return value.year == reference.year and value.month == reference.month


def same_year(value: datetime, reference: datetime) -> bool:
    """Check if two datetimes fall in the same calendar year."""
    return value.year == reference.year


def start_of_day(d: date) -> datetime:
    """First instant of a calendar day."""
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    """Last instant of a calendar day."""
    return datetime.combine(d, time.max)


def month_key(value: datetime) -> str:
    """
    Group key for a calendar month.

    Example:
        >>> month_key(datetime(2024, 3, 15))
        '2024-03'
    """
    return f"{value.year:04d}-{value.month:02d}"
