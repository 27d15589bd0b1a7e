# Area: Session
"""
quiz_judge._session.state_machine — Submission state machine
=============================================================

Tracks one session's position in the submit → score → record →
advance cycle and rejects out-of-order events.
"""

import logging

from ..errors import InvalidTransitionError
from .enums import PipelineState, PipelineEvent

logger = logging.getLogger("quiz_judge.session.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    PipelineState.AWAITING_INPUT: {
        PipelineEvent.SUBMIT: PipelineState.SCORING,
    },
    PipelineState.SCORING: {
        PipelineEvent.SCORED: PipelineState.RECORDED,
        PipelineEvent.SCORING_FAILED: PipelineState.SCORING_FAILED,
    },
    PipelineState.SCORING_FAILED: {
        PipelineEvent.FALLBACK_APPLIED: PipelineState.RECORDED,
    },
    PipelineState.RECORDED: {
        PipelineEvent.ADVANCE: PipelineState.ADVANCING,
    },
    PipelineState.ADVANCING: {
        PipelineEvent.NEXT_QUESTION: PipelineState.AWAITING_INPUT,
        PipelineEvent.FINISH: PipelineState.GAME_COMPLETE,
    },
    PipelineState.GAME_COMPLETE: {},
    PipelineState.CLOSED: {},
}

TERMINAL_STATES = {PipelineState.GAME_COMPLETE, PipelineState.CLOSED}


class SubmissionStateMachine:
    """
    State machine for one player's submission pipeline.

    Attributes:
        current_state: The current state of the state machine
    """

    def __init__(self):
        """Initialize state machine in AWAITING_INPUT."""
        self.current_state = PipelineState.AWAITING_INPUT

    def can_transition(self, event: PipelineEvent) -> bool:
        """
        Check if a transition is valid from current state.

        CLOSE is valid from every state except CLOSED.
        """
        if event is PipelineEvent.CLOSE:
            return self.current_state is not PipelineState.CLOSED
        valid_transitions = TRANSITIONS.get(self.current_state, {})
        return event in valid_transitions

    def transition(self, event: PipelineEvent) -> PipelineState:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            InvalidTransitionError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise InvalidTransitionError(self.current_state.value, event.value)

        if event is PipelineEvent.CLOSE:
            next_state = PipelineState.CLOSED
        else:
            next_state = TRANSITIONS[self.current_state][event]
        logger.debug(f"State: {self.current_state.value} → {next_state.value} ({event.value})")
        self.current_state = next_state
        return next_state

    @property
    def is_terminal(self) -> bool:
        return self.current_state in TERMINAL_STATES
