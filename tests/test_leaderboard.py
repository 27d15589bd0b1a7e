# Area: Views Tests
"""Tests for leaderboard ranking."""

from quiz_judge.leaderboard import position_of, rank, score_value
from quiz_judge.types import LeaderboardEntry


def entry(player_id, score):
    return LeaderboardEntry(player_id=player_id, display_name=player_id.upper(), score=score)


class TestRank:
    """Tests for rank()."""

    def test_highest_first(self):
        """Test that rank orders scores descending."""
        ranked = rank([entry("a", 10), entry("b", 300), entry("c", 150)])
        assert [e.player_id for e in ranked] == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        """Test that equal scores keep their input order."""
        ranked = rank([entry("a", 50), entry("b", 90), entry("c", 50), entry("d", 50)])
        assert [e.player_id for e in ranked] == ["b", "a", "c", "d"]

    def test_non_numeric_scores_count_as_zero(self):
        """Test that non-numeric scores rank as 0."""
        ranked = rank([entry("a", None), entry("b", "lots"), entry("c", 5), entry("d", -1)])
        assert [e.player_id for e in ranked] == ["c", "a", "b", "d"]

    def test_entries_are_not_modified(self):
        """Test that ranking does not modify entries."""
        original = [entry("a", "lots")]
        assert rank(original)[0].score == "lots"

    def test_empty(self):
        """Test ranking an empty snapshot."""
        assert rank([]) == []


class TestScoreValue:
    """Tests for score_value()."""

    def test_numbers(self):
        """Test that numeric scores are returned as is."""
        assert score_value(entry("a", 42)) == 42
        assert score_value(entry("a", 4.5)) == 4.5

    def test_numeric_string(self):
        """Test that numeric strings are converted."""
        assert score_value(entry("a", "42")) == 42.0

    def test_invalid_values(self):
        """Test that missing, boolean and NaN scores count as 0."""
        assert score_value(entry("a", None)) == 0
        assert score_value(entry("a", "abc")) == 0
        assert score_value(entry("a", float("nan"))) == 0
        assert score_value(entry("a", True)) == 0
        assert score_value(entry("a", {"x": 1})) == 0


class TestPositionOf:
    """Tests for position_of()."""

    def test_one_based_position(self):
        """Test that positions start at 1."""
        ranked = rank([entry("a", 1), entry("b", 2)])
        assert position_of(ranked, "a") == 2
        assert position_of(ranked, "b") == 1

    def test_missing_player(self):
        """Test that an unknown player has no position."""
        assert position_of([], "a") is None
