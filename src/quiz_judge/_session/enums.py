# Area: Session
"""
quiz_judge._session.enums — Submission state machine enums
===========================================================

Defines the states and events of one player's submission pipeline.
"""

from enum import Enum


class PipelineState(Enum):
    """
    States of the submission state machine.

    State transitions:
    AWAITING_INPUT -> SCORING (on SUBMIT)
    SCORING -> RECORDED (on SCORED)
    SCORING -> SCORING_FAILED (on SCORING_FAILED)
    SCORING_FAILED -> RECORDED (on FALLBACK_APPLIED)
    RECORDED -> ADVANCING (on ADVANCE)
    ADVANCING -> AWAITING_INPUT (on NEXT_QUESTION)
    ADVANCING -> GAME_COMPLETE (on FINISH)
    Any state -> CLOSED (on CLOSE)
    """
    AWAITING_INPUT = "AWAITING_INPUT"
    SCORING = "SCORING"
    SCORING_FAILED = "SCORING_FAILED"
    RECORDED = "RECORDED"
    ADVANCING = "ADVANCING"
    GAME_COMPLETE = "GAME_COMPLETE"
    CLOSED = "CLOSED"


class PipelineEvent(Enum):
    """
    Events that trigger state transitions.

    - SUBMIT: a non-empty answer was accepted
    - SCORED: the scoring client returned a score
    - SCORING_FAILED: the scoring client gave up
    - FALLBACK_APPLIED: the fallback score replaced the missing one
    - ADVANCE: the caller finished showing the result
    - NEXT_QUESTION: more questions remain
    - FINISH: the last question was answered
    - CLOSE: the session was closed
    """
    SUBMIT = "SUBMIT"
    SCORED = "SCORED"
    SCORING_FAILED = "SCORING_FAILED"
    FALLBACK_APPLIED = "FALLBACK_APPLIED"
    ADVANCE = "ADVANCE"
    NEXT_QUESTION = "NEXT_QUESTION"
    FINISH = "FINISH"
    CLOSE = "CLOSE"


class SubmissionStatus(Enum):
    RECORDED = "recorded"
    REJECTED = "rejected"
