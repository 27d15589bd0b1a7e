"""
quiz_judge — Year-end AI quiz game core
========================================

Players answer open-ended trivia questions; a language model scores
each answer from 0 to 100 with a short comment, and every answer is
broadcast to a shared leaderboard and live feed.

Quick Start (offline, no API key needed):
    python -m quiz_judge --demo

From Python:
    from quiz_judge import GameRunner, load_config
    runner = GameRunner(config=load_config())
    runner.run()

Building blocks
---------------
The pieces the runner wires together can be used on their own:

    from quiz_judge import (
        ScoringClient, create_backend,
        SubmissionPipeline, start_session,
        create_store, LiveView,
        group_feed, rank,
    )
"""

__version__ = "1.0.0"

from ._config import load_config, validate_config, apply_demo_mode
from ._retry import CancellationToken, retry_with_backoff
from ._scoring import ScoringClient, ScoreOutcome, OutcomeKind, create_backend
from ._session import PipelineState, Session
from ._store import GameStore, create_store
from .errors import (
    QuizJudgeError,
    InvalidInputError,
    BackendError,
    MalformedScoreError,
    ScoringUnavailableError,
    StorePersistError,
    AuthError,
    InvalidTransitionError,
    OperationCancelled,
)
from .feed import group_feed
from .identity import create_identity
from .leaderboard import rank
from .live_view import LiveView
from .pipeline import SubmissionPipeline, SubmissionResult, start_session
from .questions import DEFAULT_QUESTIONS, load_questions
from .runner import GameRunner
from .types import Question, ScoreResult, FeedEvent, LeaderboardEntry

__all__ = [
    "__version__",
    # Main classes
    "GameRunner",
    "SubmissionPipeline",
    "SubmissionResult",
    "start_session",
    "ScoringClient",
    "ScoreOutcome",
    "OutcomeKind",
    "LiveView",
    "Session",
    "PipelineState",
    # Factories
    "create_backend",
    "create_store",
    "create_identity",
    "GameStore",
    # Helpers
    "retry_with_backoff",
    "CancellationToken",
    "group_feed",
    "rank",
    "load_config",
    "validate_config",
    "apply_demo_mode",
    "load_questions",
    "DEFAULT_QUESTIONS",
    # Errors
    "QuizJudgeError",
    "InvalidInputError",
    "BackendError",
    "MalformedScoreError",
    "ScoringUnavailableError",
    "StorePersistError",
    "AuthError",
    "InvalidTransitionError",
    "OperationCancelled",
    # Types
    "Question",
    "ScoreResult",
    "FeedEvent",
    "LeaderboardEntry",
]
