# Area: Scoring
"""
quiz_judge._scoring.client — Scoring client
============================================

Formats the grading prompt, calls the backend through the backoff
executor and parses the reply. Malformed payloads and transient
backend errors are retried; permanent backend errors stop at once.

``evaluate`` returns a tagged ``ScoreOutcome`` and never raises for a
scoring failure. ``score`` raises ``ScoringUnavailableError`` instead.
Choosing a fallback score is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..errors import BackendError, MalformedScoreError, OperationCancelled, ScoringUnavailableError
from ..types import ScoreResult
from .._retry import (
    CancellationToken,
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    retry_with_backoff,
)
from .backends import BaseScoringBackend
from .parser import OutcomeKind, ScoreOutcome, parse_score_payload
from .prompt import build_prompt

logger = logging.getLogger("quiz_judge.scoring")


def is_retryable(exc: Exception) -> bool:
    """Permanent backend errors are the only failures not worth retrying."""
    if isinstance(exc, BackendError):
        return exc.retryable
    return True


class ScoringClient:
    """Grades one free-text answer against a reference answer."""

    def __init__(
        self,
        backend: BaseScoringBackend,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.backend = backend
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    def evaluate(
        self,
        candidate_answer: str,
        reference_answer: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScoreOutcome:
        """
        Score an answer, retrying with backoff.

        Args:
            candidate_answer: The player's answer
            reference_answer: Grading guidance for the model
            cancel_token: Stops the retry loop when the session closes

        Returns:
            OK outcome, or MALFORMED / UNREACHABLE after retries

        Raises:
            OperationCancelled: If ``cancel_token`` was set
        """
        system_instruction, user_message = build_prompt(candidate_answer, reference_answer)
        attempts = 0

        def attempt() -> ScoreOutcome:
            nonlocal attempts
            attempts += 1
            raw = self.backend.generate(system_instruction, user_message)
            outcome = parse_score_payload(raw)
            if not outcome.ok:
                raise MalformedScoreError(raw_output=raw, reasons=outcome.reasons)
            return outcome

        try:
            outcome = retry_with_backoff(
                attempt,
                self.max_attempts,
                base_delay=self.base_delay,
                sleep=self._sleep,
                cancel_token=cancel_token,
                is_retryable=is_retryable,
            )
        except OperationCancelled:
            raise
        except MalformedScoreError as e:
            return ScoreOutcome(
                OutcomeKind.MALFORMED,
                reasons=e.reasons,
                error=e,
                raw=e.raw_output,
                attempts=attempts,
            )
        except Exception as e:
            if not isinstance(e, BackendError):
                logger.error(f"Unexpected {self.backend.name} failure", exc_info=True)
            return ScoreOutcome(OutcomeKind.UNREACHABLE, error=e, attempts=attempts)

        logger.debug(
            f"Scored via {self.backend.name} in {attempts} attempt(s): "
            f"{outcome.result.points}"
        )
        return ScoreOutcome(
            OutcomeKind.OK,
            result=outcome.result,
            raw=outcome.raw,
            attempts=attempts,
        )

    def score(
        self,
        candidate_answer: str,
        reference_answer: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScoreResult:
        """Score an answer or raise ``ScoringUnavailableError``."""
        outcome = self.evaluate(candidate_answer, reference_answer, cancel_token)
        if outcome.ok:
            return outcome.result
        raise ScoringUnavailableError(
            attempts=outcome.attempts,
            last_kind=outcome.kind.value,
            last_error=outcome.error,
        )
