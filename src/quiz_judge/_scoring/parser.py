# Area: Scoring
"""
quiz_judge._scoring.parser — Score payload parsing
===================================================

Turns the model's raw text into a tagged ``ScoreOutcome``:

    OK           well-formed payload, score clamped to 0-100
    MALFORMED    not JSON, not an object, or fields missing/mistyped
    UNREACHABLE  the backend could not be reached (set by the client)

Payload fields are validated with a pydantic model.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ..types import ScoreResult
from .prompt import MIN_SCORE, MAX_SCORE

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


class OutcomeKind(Enum):
    OK = "ok"
    MALFORMED = "malformed"
    UNREACHABLE = "unreachable"


class ScorePayload(BaseModel):
    """Shape the scoring model must return."""
    score: int
    feedback: str

    @field_validator("score", mode="before")
    @classmethod
    def reject_boolean_score(cls, value):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(value, bool):
            raise ValueError("score must be an integer, not a boolean")
        return value


@dataclass(frozen=True)
class ScoreOutcome:
    """Tagged result of scoring one answer."""
    kind: OutcomeKind
    result: Optional[ScoreResult] = None
    reasons: List[str] = field(default_factory=list)
    error: Optional[BaseException] = None
    raw: Optional[str] = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK


def clamp_points(points: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, points))


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text.strip()


def parse_score_payload(raw: Optional[str]) -> ScoreOutcome:
    """
    Parse the model's text into a ScoreOutcome.

    Args:
        raw: Text returned by the scoring backend

    Returns:
        OK outcome with a clamped ScoreResult, or MALFORMED with reasons
    """
    if raw is None or not raw.strip():
        return ScoreOutcome(OutcomeKind.MALFORMED, reasons=["empty response"], raw=raw)

    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        return ScoreOutcome(OutcomeKind.MALFORMED, reasons=[f"invalid JSON: {e.msg}"], raw=raw)

    if not isinstance(data, dict):
        return ScoreOutcome(
            OutcomeKind.MALFORMED,
            reasons=[f"expected object, got {type(data).__name__}"],
            raw=raw,
        )

    try:
        payload = ScorePayload.model_validate(data)
    except ValidationError as e:
        reasons = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        return ScoreOutcome(OutcomeKind.MALFORMED, reasons=reasons, raw=raw)

    result = ScoreResult(points=clamp_points(payload.score), feedback=payload.feedback.strip())
    return ScoreOutcome(OutcomeKind.OK, result=result, raw=raw)
