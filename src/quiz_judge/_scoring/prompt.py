# Area: Scoring
"""
quiz_judge._scoring.prompt — Grader prompt construction
========================================================

Builds the system instruction and the user message sent to the
scoring model. The reference answer is grading guidance only; the
model is told to reward creative and relevant answers, not to demand
an exact match.
"""

from __future__ import annotations
from typing import Tuple

MIN_SCORE = 0
MAX_SCORE = 100
FEEDBACK_MAX_CHARS = 20

REFERENCE_LABEL = "Reference answer (guidance only, not the single correct answer): "
ANSWER_LABEL = "Player's answer: "

SYSTEM_TEMPLATE = (
    "You are a witty host judging answers at a company year-end party quiz. "
    + REFERENCE_LABEL
    + "\"{reference}\". "
    "Grade the player's answer for relevance to the question's intent and for "
    "creativity or humour, using the reference as a hint. "
    "Give an integer score from {min_score} to {max_score}. "
    "Reply with JSON only, exactly in this shape: "
    "{{\"score\": <integer>, \"feedback\": \"<comment of at most {max_chars} characters>\"}}"
)

USER_TEMPLATE = ANSWER_LABEL + "\"{answer}\""


def build_system_instruction(reference_answer: str) -> str:
    """System instruction carrying the reference answer and output format."""
    return SYSTEM_TEMPLATE.format(
        reference=reference_answer.strip(),
        min_score=MIN_SCORE,
        max_score=MAX_SCORE,
        max_chars=FEEDBACK_MAX_CHARS,
    )


def build_user_message(candidate_answer: str) -> str:
    return USER_TEMPLATE.format(answer=candidate_answer.strip())


def build_prompt(candidate_answer: str, reference_answer: str) -> Tuple[str, str]:
    """Return ``(system_instruction, user_message)`` for one grading call."""
    return (
        build_system_instruction(reference_answer),
        build_user_message(candidate_answer),
    )
