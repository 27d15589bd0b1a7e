# Area: Views Tests
"""Tests for feed grouping."""

import math

import pytest

from quiz_judge.feed import GROUP_BY_ID, GROUP_BY_TEXT, group_feed
from quiz_judge.types import FeedEvent


def event(question, timestamp, name="p", question_id=None):
    return FeedEvent(
        player_name=name,
        question_text=question,
        answer_text="a",
        points=10,
        timestamp=timestamp,
        question_id=question_id,
    )


class TestGroupFeed:
    """Tests for group_feed()."""

    def test_empty_snapshot(self):
        """Test that an empty snapshot gives no groups."""
        assert group_feed([]) == {}

    def test_groups_by_text_newest_first(self):
        """Test grouping by question text with newest events first."""
        events = [
            event("Q1", 100, "a"),
            event("Q2", 150, "b"),
            event("Q1", 300, "c"),
            event("Q1", 200, "d"),
        ]
        groups = group_feed(events)
        assert list(groups) == ["Q1", "Q2"]
        assert [e.player_name for e in groups["Q1"]] == ["c", "d", "a"]
        assert [e.player_name for e in groups["Q2"]] == ["b"]

    def test_every_event_in_exactly_one_group(self):
        """Test that every event lands in exactly one group."""
        events = [event(f"Q{i % 3}", i) for i in range(10)]
        groups = group_feed(events)
        flattened = [e for group in groups.values() for e in group]
        assert len(flattened) == len(events)
        assert set(map(id, flattened)) == set(map(id, events))
        for key, group in groups.items():
            assert all(e.question_text == key for e in group)

    def test_text_grouping_is_exact(self):
        """Test that text grouping does not normalise question text."""
        groups = group_feed([event("Q1", 1), event("q1", 2), event("Q1 ", 3)])
        assert len(groups) == 3

    def test_groups_by_id(self):
        """Test grouping by question id."""
        events = [
            event("Colour?", 1, question_id=3),
            event("Color?", 2, question_id=3),
            event("Legacy", 3),
        ]
        groups = group_feed(events, key=GROUP_BY_ID)
        assert list(groups) == [3, "Legacy"]
        assert len(groups[3]) == 2

    def test_same_text_different_ids_merge_by_text(self):
        """Test that equal texts merge by text but split by id."""
        events = [event("Same", 1, question_id=1), event("Same", 2, question_id=2)]
        assert len(group_feed(events, key=GROUP_BY_TEXT)) == 1
        assert len(group_feed(events, key=GROUP_BY_ID)) == 2

    def test_non_numeric_timestamp_sorts_last(self):
        """Test that non-numeric timestamps count as 0."""
        events = [event("Q", "later"), event("Q", 5), event("Q", None)]
        ordered = group_feed(events)["Q"]
        assert ordered[0].timestamp == 5

    def test_nan_timestamp_counts_as_zero(self):
        """NaN timestamps sort as 0 and leave the group newest first."""
        events = [event("Q", t) for t in (5, float("nan"), 9, 1, 7)]
        ordered = [e.timestamp for e in group_feed(events)["Q"]]
        assert ordered[:3] == [9, 7, 5]
        assert ordered[3] == 1
        assert math.isnan(ordered[4])

    def test_input_not_mutated(self):
        """Test that the input list is left unchanged."""
        events = [event("Q", 1), event("Q", 2)]
        snapshot = list(events)
        group_feed(events)
        assert events == snapshot

    def test_unknown_key(self):
        """Test that an unknown grouping key raises ValueError."""
        with pytest.raises(ValueError):
            group_feed([], key="player")
