"""
quiz_judge.questions — Question bank
=====================================

The built-in year-end party question set, and a loader for custom
banks stored as JSON:

    [
        {"id": 1, "text": "...", "reference": "..."},
        ...
    ]

``prompt`` / ``reference_answer`` are accepted as field names too.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from .types import Question

DEFAULT_QUESTIONS: Tuple[Question, ...] = (
    Question(1, "What was the most popular lunch delivery at the office this year?",
             "Fried chicken rice or a healthy bento box"),
    Question(2, "What is your manager's favourite catchphrase?",
             "Let's sync, look at the data, any questions?"),
    Question(3, "What is the theme colour of this year's year-end party?",
             "Passionate red"),
    Question(4, "What does the office pantry need most?",
             "Snacks, coffee beans or sparkling water"),
    Question(5, "If the company built an AI tool, what should it be called?",
             "Any creative name"),
    Question(6, "What is the first thing people do when the printer breaks?",
             "Restart it or give it a smack"),
    Question(7, "What company event impressed you most this year?",
             "Adopting AI, expanding the office, or going public"),
    Question(8, "Which idiom best describes your department?",
             "Any positive or funny idiom"),
    Question(9, "What do you think is the boss's favourite sport?",
             "Golf, marathons, or reading reports"),
    Question(10, "If the grand prize weren't cash, what would you want?",
             "Extra leave, an iPhone, or plane tickets"),
    Question(11, "Who is the office's go-to AI expert?",
             "The IT department or a colleague's name"),
    Question(12, "Describe the company's vision for next year.",
             "Record sales, leading the industry"),
    Question(13, "Which month has the most insane workload?",
             "November or December"),
    Question(14, "If your manager were an animal, which would it be?",
             "A lion, a cat, or a lucky cat"),
    Question(15, "Last one: give yourself a word of encouragement for this year!",
             "Any upbeat message"),
)


def question_from_dict(data: Dict[str, Any]) -> Question:
    """Build a Question from a JSON object."""
    try:
        question_id = int(data["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Question needs an integer 'id': {data!r}") from e

    prompt = data.get("prompt", data.get("text"))
    reference = data.get("reference_answer", data.get("reference"))
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError(f"Question {question_id} needs non-empty 'text'")
    if not isinstance(reference, str):
        raise ValueError(f"Question {question_id} needs a 'reference' string")
    return Question(id=question_id, prompt=prompt.strip(), reference_answer=reference.strip())


def validate_questions(questions: Iterable[Question]) -> Tuple[Question, ...]:
    """Check the bank is non-empty with unique ids; return it as a tuple."""
    bank = tuple(questions)
    if not bank:
        raise ValueError("Question bank is empty")
    seen = set()
    for q in bank:
        if q.id in seen:
            raise ValueError(f"Duplicate question id: {q.id}")
        seen.add(q.id)
    return bank


def load_questions(path: str) -> Tuple[Question, ...]:
    """
    Load a question bank from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content is not a valid question list
    """
    with open(Path(path), encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Question file must contain a JSON list")
    return validate_questions(question_from_dict(item) for item in data)
