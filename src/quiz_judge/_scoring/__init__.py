# Area: Scoring
"""
Scoring client, prompt construction, payload parsing and model backends.
"""

from .backends import (
    BaseScoringBackend,
    AnthropicBackend,
    GeminiBackend,
    MockBackend,
)
from .demo import DemoBackend
from .factory import create_backend, SCORER_BACKENDS
from .client import ScoringClient
from .parser import OutcomeKind, ScoreOutcome, ScorePayload, parse_score_payload
from .prompt import build_prompt

__all__ = [
    "BaseScoringBackend",
    "AnthropicBackend",
    "GeminiBackend",
    "MockBackend",
    "DemoBackend",
    "create_backend",
    "SCORER_BACKENDS",
    "ScoringClient",
    "OutcomeKind",
    "ScoreOutcome",
    "ScorePayload",
    "parse_score_payload",
    "build_prompt",
]
