"""
quiz_judge._session.session — Per-player session state
=======================================================

Tracks one player's progress through the question bank. Only the
owning pipeline mutates it; the index and the score only move forward.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from ..errors import InvalidInputError
from ..types import ScoreResult

logger = logging.getLogger("quiz_judge.session")

MAX_DISPLAY_NAME_LENGTH = 15


def normalize_display_name(display_name: Optional[str]) -> str:
    """Strip the name and check it is 1-15 characters."""
    name = (display_name or "").strip()
    if not name:
        raise InvalidInputError("display_name", "must not be empty")
    if len(name) > MAX_DISPLAY_NAME_LENGTH:
        raise InvalidInputError(
            "display_name",
            f"must be at most {MAX_DISPLAY_NAME_LENGTH} characters (got {len(name)})",
        )
    return name


@dataclass
class Session:
    """One player's in-progress game."""
    player_id: str
    display_name: str
    question_count: int
    current_question_index: int = 0
    cumulative_score: int = 0
    last_result: Optional[ScoreResult] = None
    answered: int = 0

    def __post_init__(self):
        self.display_name = normalize_display_name(self.display_name)
        if self.question_count < 1:
            raise ValueError("question_count must be at least 1")

    # ── Progress helpers ─────────────────────────────────────

    def record(self, result: ScoreResult) -> int:
        """Add a result to the running total and keep it for display."""
        if result.points < 0:
            raise ValueError(f"points must be non-negative, got {result.points}")
        self.cumulative_score += result.points
        self.last_result = result
        self.answered += 1
        return self.cumulative_score

    def has_next_question(self) -> bool:
        return self.current_question_index + 1 < self.question_count

    def advance(self) -> None:
        """Move to the next question and clear the transient result."""
        if not self.has_next_question():
            raise ValueError("no questions remain")
        self.current_question_index += 1
        self.last_result = None
        logger.debug(
            f"[{self.player_id}] Question index → {self.current_question_index}"
        )

    def clear_result(self) -> None:
        self.last_result = None
