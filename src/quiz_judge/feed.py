"""
quiz_judge.feed — Answer feed grouping
=======================================

Builds the per-question view of the live answer feed from a raw,
unordered snapshot. The view is rebuilt from scratch on every change.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Union

from .types import FeedEvent

GROUP_BY_TEXT = "question_text"
GROUP_BY_ID = "question_id"

GroupKey = Union[str, int]


def _timestamp(event: FeedEvent) -> float:
    value = event.timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    # NaN
    if value != value:
        return 0
    return value


def _group_key(event: FeedEvent, key: str) -> GroupKey:
    if key == GROUP_BY_ID and event.question_id is not None:
        return event.question_id
    return event.question_text


def group_feed(
    events: Iterable[FeedEvent],
    key: str = GROUP_BY_TEXT,
) -> Dict[GroupKey, List[FeedEvent]]:
    """
    Group feed events by question, newest first.

    Args:
        events: Feed snapshot in any order
        key: ``question_text`` (exact text match) or ``question_id``;
            events without an id fall back to their text

    Returns:
        Mapping of group key to events, ordered by timestamp descending.
        Groups appear in order of their first event in the input.
    """
    if key not in (GROUP_BY_TEXT, GROUP_BY_ID):
        raise ValueError(f"Unknown grouping key: {key}")

    groups: Dict[GroupKey, List[FeedEvent]] = {}
    for event in events:
        groups.setdefault(_group_key(event, key), []).append(event)

    for group in groups.values():
        group.sort(key=_timestamp, reverse=True)
    return groups
