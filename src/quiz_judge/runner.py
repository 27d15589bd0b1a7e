"""
quiz_judge.runner — Terminal game loop
=======================================

The GameRunner plays one player's game on a terminal. It wires the
configured store, scorer and identity provider together, asks for a
display name, then loops question by question:

    prompt → submit → show result → wait display delay → advance

When the game ends it prints the final total together with the live
leaderboard and answer feed.
"""

from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

from ._config import validate_config
from ._scoring import BaseScoringBackend, ScoringClient, create_backend
from ._session import Session
from ._shared import (
    disable_quiet_mode,
    enable_quiet_mode,
    log_error_block,
    setup_logging,
)
from ._shared.display import (
    format_error,
    format_feed,
    format_leaderboard,
    format_question,
    format_result,
)
from ._store import GameStore, create_store
from .errors import AuthError, InvalidInputError
from .identity import IdentityProvider, create_identity
from .leaderboard import position_of
from .live_view import LiveView
from .pipeline import REASON_CLOSED, REASON_EMPTY, SubmissionPipeline, start_session
from .questions import DEFAULT_QUESTIONS, load_questions
from .types import Question

logger = logging.getLogger("quiz_judge.runner")

EXIT_OK = 0
EXIT_AUTH_FAILED = 2
EXIT_INTERRUPTED = 130


class GameRunner:
    """
    Entry point for playing from a terminal.

    Usage
    -----
        from quiz_judge import GameRunner, load_config

        runner = GameRunner(config=load_config("config.json"))
        runner.run()

    Every collaborator can be injected, which is how the tests drive a
    full game without a terminal or a network.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        *,
        questions: Optional[Sequence[Question]] = None,
        store: Optional[GameStore] = None,
        backend: Optional[BaseScoringBackend] = None,
        identity: Optional[IdentityProvider] = None,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep,
        configure_logging: bool = True,
    ):
        validate_config(config)
        self.config = config
        self._input = input_fn
        self._output = output
        self._sleep = sleep

        if configure_logging:
            setup_logging(log_file_path=config.get("log_file", "quiz_judge.log"))

        if questions is None:
            path = config.get("questions_path")
            questions = load_questions(path) if path else DEFAULT_QUESTIONS
        self.questions = tuple(questions)

        self.store = store or create_store(config["store"], config)
        self.backend = backend or create_backend(config["scorer"], config)
        self.identity = identity or create_identity(config["identity"], config)
        self.scorer = ScoringClient(
            self.backend,
            max_attempts=config["max_attempts"],
            base_delay=config["base_delay_seconds"],
        )
        self.display_delay = config["display_delay_seconds"]

        if not self.backend.is_available():
            logger.warning(
                f"Scorer '{self.backend.name}' is not configured; "
                f"every answer will receive the fallback score"
            )

    # ── Main loop ─────────────────────────────────────────────

    def run(self, display_name: Optional[str] = None) -> int:
        """
        Play one game. Blocks until the last question is answered.

        Returns:
            Process exit code: 0 when the game finished, 2 when no
            player identity could be established, 130 when interrupted.
        """
        pipeline = None
        view = None
        try:
            try:
                session = self._enter(display_name)
            except AuthError as e:
                log_error_block(e)
                self._output(format_error(f"Could not join the game. {e.remediation}"))
                return EXIT_AUTH_FAILED

            pipeline = SubmissionPipeline(
                self.questions,
                session,
                self.scorer,
                self.store,
                fallback_points=self.config["fallback_points"],
                fallback_feedback=self.config["fallback_feedback"],
            )
            view = LiveView(self.store, group_key=self.config["group_by"])

            enable_quiet_mode()
            try:
                self._play(pipeline)
            finally:
                disable_quiet_mode()

            self._show_summary(session, view)
            return EXIT_OK

        except (KeyboardInterrupt, EOFError):
            if pipeline is not None:
                pipeline.close()
            self._output("\nGame closed.")
            return EXIT_INTERRUPTED

        finally:
            if view is not None:
                view.close()
            self.store.close()

    def _enter(self, display_name: Optional[str]) -> Session:
        """Ask for a name until one is accepted, then start the session."""
        name = display_name
        while True:
            if name is None:
                name = self._input("Your name: ")
            try:
                return start_session(self.identity, self.store, name, self.questions)
            except InvalidInputError as e:
                self._output(format_error(e.message))
                name = None

    def _play(self, pipeline: SubmissionPipeline) -> None:
        total = len(self.questions)
        while not pipeline.is_complete:
            index = pipeline.session.current_question_index
            self._output(format_question(pipeline.current_question, index, total))

            outcome = pipeline.submit(self._input("> "))
            if not outcome.accepted:
                if outcome.reason == REASON_CLOSED:
                    return
                if outcome.reason == REASON_EMPTY:
                    self._output(format_error("Please type an answer."))
                continue

            self._output(format_result(
                outcome.result, outcome.cumulative_score, fallback=outcome.fallback_used
            ))
            if outcome.persist_errors:
                self._output(format_error(
                    "Could not sync your score right now; it is kept on this device."
                ))

            self._sleep(self.display_delay)
            pipeline.advance()

    def _show_summary(self, session: Session, view: LiveView) -> None:
        ranked = view.leaderboard()
        position = position_of(ranked, session.player_id)

        self._output(f"\nGame over, {session.display_name}! Final score: {session.cumulative_score}")
        if position is not None:
            self._output(f"You are #{position} of {len(ranked)}.")
        self._output(format_leaderboard(ranked, highlight=session.player_id))
        self._output(format_feed(view.feed()))
