"""
quiz_judge.types — Records shared across the game core
=======================================================

Immutable records that flow between the scoring client, the
submission pipeline, the shared store and the display views.

    from quiz_judge import Question, ScoreResult, FeedEvent, LeaderboardEntry

The mutable per-player ``Session`` lives in ``quiz_judge._session``.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ============================================
# Question bank
# ============================================

@dataclass(frozen=True)
class Question:
    """One trivia question.

    Fields
    ------
    id : int
        Stable question identifier.
    prompt : str
        Text shown to the player.
    reference_answer : str
        Grading guidance handed to the scorer. Never shown to players.
    """
    id: int
    prompt: str
    reference_answer: str


# ============================================
# Scoring
# ============================================

@dataclass(frozen=True)
class ScoreResult:
    """Output of one scoring call."""
    points: int             # 0-100 once it leaves the scoring client
    feedback: str           # short comment, about 20 characters


# ============================================
# Shared store records
# ============================================

@dataclass(frozen=True)
class FeedEvent:
    """One published answer, visible to every viewer.

    ``timestamp`` is milliseconds since the epoch at publish time.
    ``question_id`` is carried so viewers can group by id instead of text.
    """
    player_name: str
    question_text: str
    answer_text: str
    points: int
    timestamp: int
    feedback: str = ""
    question_id: Optional[int] = None
    player_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One player's latest cumulative total.

    ``score`` is stored as read from the store; the leaderboard view
    treats a missing or non-numeric value as zero.
    """
    player_id: str
    display_name: str
    score: Any
    updated_at: Optional[int] = None
