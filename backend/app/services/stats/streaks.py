# backend/app/services/stats/streaks.py
"""
Win/lose streak detection.

Sessions are ordered by date with a stable sort, so sessions sharing a
timestamp keep their input order (online before live).
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable


def longest_streaks(outcomes: Iterable[tuple[datetime, bool]]) -> tuple[int, int]:
    """
    Longest consecutive win and lose runs in chronological order.

    Args:
        outcomes: (session_date, is_win) pairs in any order

    Returns:
        (longest_win_streak, longest_lose_streak)

    Example:
        Results [+10, +5, -3, -1, +2] in date order → (2, 2)
    """
    ordered = sorted(outcomes, key=lambda pair: pair[0])

    current_win = current_lose = 0
    longest_win = longest_lose = 0

    for _, is_win in ordered:
        if is_win:
            current_win += 1
            current_lose = 0
            longest_win = max(longest_win, current_win)
        else:
            current_lose += 1
            current_win = 0
            longest_lose = max(longest_lose, current_lose)

    return longest_win, longest_lose
