"""
main.py — Host a quiz round from Python
========================================

Plays the three questions in questions.json against a shared SQLite
store, so several terminals on one machine see the same leaderboard.

    python main.py

Set GEMINI_API_KEY (or put it in .env) to score with Gemini; without
it every answer falls back to 50 points. Use ``--demo`` on the CLI for
a fully offline game instead.

Press Ctrl+C to leave the game.
"""

import sys
from pathlib import Path

from quiz_judge import GameRunner, load_config, load_questions

HERE = Path(__file__).parent

# ── Configuration ──
config = load_config()
config.update({
    "store": "sqlite",
    "db_path": str(HERE / "party.db"),
    "scorer": "gemini",
    "display_delay_seconds": 3.0,
    "log_file": str(HERE / "quiz_judge.log"),
})

runner = GameRunner(config=config, questions=load_questions(str(HERE / "questions.json")))
sys.exit(runner.run())
