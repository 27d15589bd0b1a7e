"""
quiz_judge.errors — Custom exception classes
=============================================

Defines the exception hierarchy for the game core.
Errors that reach the player carry enough context for a structured
error block (see ``format_error_log``).
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .error_formatter import format_error_block


class QuizJudgeError(Exception):
    """Base exception for all quiz_judge errors."""
    pass


class InvalidInputError(QuizJudgeError):
    """Raised when player-supplied input is rejected locally."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid {field}: {message}")


class BackendError(QuizJudgeError):
    """Raised by a scoring backend when the outbound call fails.

    ``retryable`` is False for failures that will not go away by trying
    again (missing credentials, rejected request).
    """

    def __init__(self, backend: str, message: str, retryable: bool = True):
        self.backend = backend
        self.message = message
        self.retryable = retryable
        super().__init__(f"[{backend}] {message}")


class MalformedScoreError(QuizJudgeError):
    """Raised when the scorer's payload cannot be parsed into a score."""

    def __init__(self, raw_output: Any, reasons: list):
        self.raw_output = raw_output
        self.reasons = reasons
        super().__init__(f"Malformed score payload: {reasons}")


class ScoringUnavailableError(QuizJudgeError):
    """Raised when all scoring attempts are exhausted."""

    def __init__(
        self,
        attempts: int,
        last_kind: str,
        last_error: Optional[BaseException] = None,
    ):
        self.attempts = attempts
        self.last_kind = last_kind
        self.last_error = last_error
        super().__init__(
            f"Scoring unavailable after {attempts} attempt(s) "
            f"(last outcome: {last_kind})"
        )

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="SCORING_UNAVAILABLE",
            operation="score",
            details={
                "attempts": self.attempts,
                "last_outcome": self.last_kind,
                "last_error": repr(self.last_error),
            },
        )


class StorePersistError(QuizJudgeError):
    """Raised when a write to the shared store fails."""

    def __init__(self, operation: str, payload: Dict[str, Any], cause: BaseException):
        self.operation = operation
        self.payload = payload
        self.cause = cause
        super().__init__(f"Store write '{operation}' failed: {cause}")


class AuthError(QuizJudgeError):
    """Raised when a player identity cannot be established."""

    remediation = "Reload the game or retry in a moment."

    def __init__(self, provider: str, cause: Optional[BaseException] = None):
        self.provider = provider
        self.cause = cause
        super().__init__(
            f"Could not establish player identity via {provider}: {cause}. "
            f"{self.remediation}"
        )

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="AUTH_FAILURE",
            operation="establish_identity",
            details={"provider": self.provider, "cause": repr(self.cause)},
            remediation=self.remediation,
        )


class InvalidTransitionError(QuizJudgeError):
    """Raised when the submission state machine rejects an event."""

    def __init__(self, state: str, event: str):
        self.state = state
        self.event = event
        super().__init__(f"Invalid transition: {event} from {state}")


class OperationCancelled(QuizJudgeError):
    """Raised inside a retry loop once its session has been closed."""
    pass
