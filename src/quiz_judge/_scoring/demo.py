# Area: Scoring
"""Offline heuristic scorer for demo mode."""

import json
import re
from typing import Tuple

from .backends import BaseScoringBackend
from .prompt import ANSWER_LABEL, REFERENCE_LABEL

_REFERENCE = re.compile(re.escape(REFERENCE_LABEL) + r'"(.*?)"\. ', re.DOTALL)
_ANSWER = re.compile(re.escape(ANSWER_LABEL) + r'"(.*)"', re.DOTALL)

FEEDBACK_TIERS = [
    (85, "Spot on!"),
    (70, "Great answer!"),
    (50, "Nice try!"),
    (0, "Creative, at least!"),
]


def _tokens(text: str) -> set:
    return set(re.findall(r"\w+", text.lower()))


def calculate_similarity(reference: str, answer: str) -> float:
    """Word overlap (Jaccard) between reference and answer, 0-100."""
    if not reference or not answer:
        return 0.0
    if reference.strip().lower() == answer.strip().lower():
        return 100.0

    ref_words = _tokens(reference)
    answer_words = _tokens(answer)
    union = ref_words | answer_words
    if not union:
        return 0.0
    return round(len(ref_words & answer_words) / len(union) * 100, 2)


def score_effort(answer: str) -> float:
    """Reward answers that say something, up to 12 words."""
    return min(len(answer.split()) / 12, 1.0) * 100


def demo_score(reference: str, answer: str) -> Tuple[int, str]:
    """Score = 40 base + 40% overlap + 20% effort."""
    points = 40 + calculate_similarity(reference, answer) * 0.4 + score_effort(answer) * 0.2
    points = int(round(min(100.0, points)))
    feedback = next(text for threshold, text in FEEDBACK_TIERS if points >= threshold)
    return points, feedback


class DemoBackend(BaseScoringBackend):
    """Scores locally from the prompt text; no network involved."""

    name = "demo"

    def is_available(self) -> bool:
        return True

    def generate(self, system_instruction: str, user_message: str) -> str:
        ref_match = _REFERENCE.search(system_instruction)
        answer_match = _ANSWER.search(user_message)
        reference = ref_match.group(1) if ref_match else ""
        answer = answer_match.group(1) if answer_match else user_message
        points, feedback = demo_score(reference, answer)
        return json.dumps({"score": points, "feedback": feedback})
