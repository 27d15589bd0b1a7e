# Area: Shared
"""
quiz_judge._shared.display — Terminal rendering
================================================

Plain-text renderings of questions, results, the leaderboard and the
grouped feed, with ANSI colors for the terminal runner.
"""

from __future__ import annotations
from typing import Dict, List, Sequence

from ..leaderboard import score_value
from ..types import FeedEvent, LeaderboardEntry, Question, ScoreResult

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Scores
ORANGE = "\033[38;5;208m"  # Fallback scores
RED = "\033[31m"           # Errors
BOLD = "\033[1m"
RESET = "\033[0m"

RULE = "─" * 50
MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def format_question(question: Question, index: int, total: int) -> str:
    return f"\n{BOLD}Question {index + 1}/{total}{RESET}\n{question.prompt}"


def format_result(result: ScoreResult, cumulative: int, fallback: bool = False) -> str:
    color = ORANGE if fallback else GREEN
    return (
        f"{color}+{result.points} points{RESET}  {result.feedback}\n"
        f"Total: {cumulative}"
    )


def format_error(message: str) -> str:
    return f"{RED}{message}{RESET}"


def format_leaderboard(
    entries: Sequence[LeaderboardEntry], highlight: str = "", limit: int = 10
) -> str:
    """Ranked table; the ``highlight`` player is marked with an arrow."""
    lines = [RULE, f"{BOLD}LEADERBOARD{RESET}", RULE]
    if not entries:
        lines.append("  (no players yet)")
    for position, entry in enumerate(entries[:limit], start=1):
        marker = MEDALS.get(position, f"{position:>2}.")
        you = "  ←" if entry.player_id == highlight else ""
        points = score_value(entry)
        lines.append(f"  {marker} {entry.display_name:<15} {points:>6g}{you}")
    lines.append(RULE)
    return "\n".join(lines)


def format_feed(groups: Dict[object, List[FeedEvent]], per_group: int = 5) -> str:
    """One block per question, newest answers first."""
    lines = [RULE, f"{BOLD}LIVE FEED{RESET}", RULE]
    if not groups:
        lines.append("  (no answers yet)")
    for key, events in groups.items():
        lines.append(f"{BOLD}{key}{RESET}")
        for event in events[:per_group]:
            lines.append(
                f"  {event.player_name}: \"{event.answer_text}\" "
                f"{GREEN}+{event.points}{RESET}"
            )
    lines.append(RULE)
    return "\n".join(lines)
