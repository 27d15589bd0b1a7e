# Area: Session
"""
Per-player session state and the submission state machine.
"""

from .enums import PipelineState, PipelineEvent, SubmissionStatus
from .session import Session, normalize_display_name, MAX_DISPLAY_NAME_LENGTH
from .state_machine import SubmissionStateMachine, TRANSITIONS

__all__ = [
    "PipelineState",
    "PipelineEvent",
    "SubmissionStatus",
    "Session",
    "normalize_display_name",
    "MAX_DISPLAY_NAME_LENGTH",
    "SubmissionStateMachine",
    "TRANSITIONS",
]
