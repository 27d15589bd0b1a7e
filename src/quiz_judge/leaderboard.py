"""
quiz_judge.leaderboard — Leaderboard ranking
=============================================

Orders the live score snapshot for display.
"""

from __future__ import annotations
from typing import Iterable, List, Optional

from .types import LeaderboardEntry


def score_value(entry: LeaderboardEntry) -> float:
    """Numeric score for ordering; missing or non-numeric counts as 0."""
    value = entry.score
    if isinstance(value, bool):
        return 0
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            return 0
    # NaN
    if value != value:
        return 0
    return value


def rank(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """
    Sort entries by score, highest first.

    The sort is stable, so equal scores keep their input order.
    Entries are not modified.
    """
    return sorted(entries, key=score_value, reverse=True)


def position_of(ranked: List[LeaderboardEntry], player_id: str) -> Optional[int]:
    """1-based position of ``player_id`` in a ranked list, or None."""
    for i, entry in enumerate(ranked, start=1):
        if entry.player_id == player_id:
            return i
    return None
