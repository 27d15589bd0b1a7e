"""
quiz_judge.pipeline — Answer submission pipeline
=================================================

Turns one player submission into a scored, persisted and broadcast
event:

    validate → score (with retry) → record → persist → advance

The pipeline never stalls the game: when the scorer is unreachable a
fixed fallback score is recorded instead, and failed store writes are
reported back to the caller without blocking progression. The session
held in memory stays authoritative.

How long the result stays on screen before ``advance()`` is the
caller's decision.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ._retry import CancellationToken
from ._scoring import ScoringClient
from ._session import (
    PipelineEvent,
    PipelineState,
    Session,
    SubmissionStateMachine,
    SubmissionStatus,
    normalize_display_name,
)
from ._store import GameStore
from .errors import OperationCancelled, ScoringUnavailableError, StorePersistError
from .identity import IdentityProvider
from .questions import validate_questions
from .types import FeedEvent, Question, ScoreResult

logger = logging.getLogger("quiz_judge.pipeline")

DEFAULT_FALLBACK_POINTS = 50
DEFAULT_FALLBACK_FEEDBACK = "Network busy, have some points!"

# Rejection reasons
REASON_EMPTY = "empty_answer"
REASON_BUSY = "busy"
REASON_NOT_AWAITING = "not_awaiting_input"
REASON_CLOSED = "closed"


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SubmissionResult:
    """What happened to one submission."""
    status: SubmissionStatus
    reason: Optional[str] = None
    question: Optional[Question] = None
    result: Optional[ScoreResult] = None
    fallback_used: bool = False
    cumulative_score: int = 0
    scoring_error: Optional[ScoringUnavailableError] = None
    persist_errors: Tuple[StorePersistError, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.status is SubmissionStatus.RECORDED


def _rejected(reason: str, cumulative_score: int) -> SubmissionResult:
    return SubmissionResult(
        status=SubmissionStatus.REJECTED,
        reason=reason,
        cumulative_score=cumulative_score,
    )


class SubmissionPipeline:
    """
    Orchestrates one player's answers through scoring and persistence.

    At most one submission runs at a time; a second one arriving while
    the first is being scored is rejected.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        session: Session,
        scorer: ScoringClient,
        store: GameStore,
        *,
        fallback_points: int = DEFAULT_FALLBACK_POINTS,
        fallback_feedback: str = DEFAULT_FALLBACK_FEEDBACK,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.questions = validate_questions(questions)
        if session.question_count != len(self.questions):
            raise ValueError(
                f"Session expects {session.question_count} questions, "
                f"bank has {len(self.questions)}"
            )
        if fallback_points < 0:
            raise ValueError("fallback_points must be non-negative")

        self.session = session
        self.scorer = scorer
        self.store = store
        self.fallback_points = fallback_points
        self.fallback_feedback = fallback_feedback
        self._clock = clock or now_ms

        self._machine = SubmissionStateMachine()
        self._cancel = CancellationToken()
        self._in_flight = threading.Lock()
        self._state_lock = threading.RLock()

    # ── Properties ───────────────────────────────────────────

    @property
    def state(self) -> PipelineState:
        return self._machine.current_state

    @property
    def current_question(self) -> Question:
        return self.questions[self.session.current_question_index]

    @property
    def is_complete(self) -> bool:
        return self.state is PipelineState.GAME_COMPLETE

    @property
    def is_closed(self) -> bool:
        return self.state is PipelineState.CLOSED

    # ── Submission ───────────────────────────────────────────

    def submit(self, answer: Optional[str]) -> SubmissionResult:
        """
        Score and record the answer to the current question.

        Returns a REJECTED result (and changes nothing) when the answer
        is empty, another submission is in flight, or the pipeline is
        not waiting for input.
        """
        total = self.session.cumulative_score
        if answer is None or not answer.strip():
            logger.debug(f"[{self.session.player_id}] Empty answer rejected")
            return _rejected(REASON_EMPTY, total)

        if not self._in_flight.acquire(blocking=False):
            logger.info(f"[{self.session.player_id}] Submission already in flight")
            return _rejected(REASON_BUSY, total)
        try:
            with self._state_lock:
                if self.state is PipelineState.CLOSED:
                    return _rejected(REASON_CLOSED, total)
                if self.state is not PipelineState.AWAITING_INPUT:
                    return _rejected(REASON_NOT_AWAITING, total)
                question = self.current_question
                self._machine.transition(PipelineEvent.SUBMIT)
            return self._score_and_record(question, answer.strip())
        finally:
            self._in_flight.release()

    def _score_and_record(self, question: Question, answer: str) -> SubmissionResult:
        player_id = self.session.player_id
        try:
            outcome = self.scorer.evaluate(
                answer, question.reference_answer, cancel_token=self._cancel
            )
        except OperationCancelled:
            logger.info(f"[{player_id}] Scoring abandoned, session closed")
            return _rejected(REASON_CLOSED, self.session.cumulative_score)

        with self._state_lock:
            if self._cancel.cancelled:
                logger.info(f"[{player_id}] Session closed before result was applied")
                return _rejected(REASON_CLOSED, self.session.cumulative_score)

            scoring_error = None
            if outcome.ok:
                result = outcome.result
                self._machine.transition(PipelineEvent.SCORED)
            else:
                scoring_error = ScoringUnavailableError(
                    attempts=outcome.attempts,
                    last_kind=outcome.kind.value,
                    last_error=outcome.error,
                )
                logger.error(
                    f"[{player_id}] {scoring_error}; applying fallback "
                    f"{self.fallback_points} points",
                    extra={"player_id": player_id, "question_id": question.id,
                           "error_type": "ScoringUnavailableError"},
                )
                self._machine.transition(PipelineEvent.SCORING_FAILED)
                result = ScoreResult(self.fallback_points, self.fallback_feedback)
                self._machine.transition(PipelineEvent.FALLBACK_APPLIED)

            total = self.session.record(result)

        logger.info(
            f"[{player_id}] Q{question.id}: +{result.points} (total {total})",
            extra={"player_id": player_id, "question_id": question.id},
        )
        persist_errors = self._persist(question, answer, result, total)

        return SubmissionResult(
            status=SubmissionStatus.RECORDED,
            question=question,
            result=result,
            fallback_used=scoring_error is not None,
            cumulative_score=total,
            scoring_error=scoring_error,
            persist_errors=tuple(persist_errors),
        )

    def _persist(
        self, question: Question, answer: str, result: ScoreResult, total: int
    ) -> list:
        """Mirror the new total and publish the feed event. Never raises."""
        session = self.session
        timestamp = self._clock()
        errors = []

        score_payload = {
            "player_id": session.player_id,
            "display_name": session.display_name,
            "score": total,
            "updated_at": timestamp,
        }
        try:
            self.store.upsert_score(**score_payload)
        except Exception as e:
            errors.append(self._persist_failed("upsert_score", score_payload, e))

        event = FeedEvent(
            player_name=session.display_name,
            question_text=question.prompt,
            answer_text=answer,
            points=result.points,
            timestamp=timestamp,
            feedback=result.feedback,
            question_id=question.id,
            player_id=session.player_id,
        )
        try:
            self.store.append_feed_event(event)
        except Exception as e:
            errors.append(self._persist_failed("append_feed_event", event.to_dict(), e))

        return errors

    def _persist_failed(self, operation: str, payload: dict, cause: Exception) -> StorePersistError:
        error = StorePersistError(operation, payload, cause)
        logger.warning(
            f"[{self.session.player_id}] {error}",
            exc_info=True,
            extra={"player_id": self.session.player_id, "error_type": "StorePersistError"},
        )
        return error

    # ── Progression ──────────────────────────────────────────

    def advance(self) -> PipelineState:
        """
        Leave the recorded result and move on.

        Returns:
            AWAITING_INPUT for the next question, or GAME_COMPLETE

        Raises:
            InvalidTransitionError: If no result has been recorded
        """
        with self._state_lock:
            self._machine.transition(PipelineEvent.ADVANCE)
            if self.session.has_next_question():
                self.session.advance()
                return self._machine.transition(PipelineEvent.NEXT_QUESTION)
            self.session.clear_result()
            logger.info(
                f"[{self.session.player_id}] Game complete: "
                f"{self.session.cumulative_score} points"
            )
            return self._machine.transition(PipelineEvent.FINISH)

    def close(self) -> None:
        """Abandon the session; an in-flight scoring loop stops and is discarded."""
        self._cancel.cancel()
        with self._state_lock:
            if self._machine.can_transition(PipelineEvent.CLOSE):
                self._machine.transition(PipelineEvent.CLOSE)
                logger.info(f"[{self.session.player_id}] Session closed")


def start_session(
    identity: IdentityProvider,
    store: GameStore,
    display_name: str,
    questions: Sequence[Question],
    clock: Optional[Callable[[], int]] = None,
) -> Session:
    """
    Enter the game: validate the name, establish identity and register
    the player on the leaderboard with 0 points.

    Raises:
        InvalidInputError: If the display name is empty or too long
        AuthError: If no identity could be established
    """
    name = normalize_display_name(display_name)
    player_id = identity.establish(name)
    session = Session(player_id=player_id, display_name=name, question_count=len(questions))

    payload = {
        "player_id": player_id,
        "display_name": name,
        "score": 0,
        "updated_at": (clock or now_ms)(),
    }
    try:
        store.upsert_score(**payload)
    except Exception as e:
        error = StorePersistError("upsert_score", payload, e)
        logger.warning(f"[{player_id}] {error}", exc_info=True)

    logger.info(f"[{player_id}] Session started for '{name}'")
    return session
