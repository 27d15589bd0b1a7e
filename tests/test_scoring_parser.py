# Area: Scoring Tests
"""Tests for prompt construction and score payload parsing."""

from quiz_judge._scoring.parser import (
    OutcomeKind,
    clamp_points,
    parse_score_payload,
    strip_code_fence,
)
from quiz_judge._scoring.prompt import FEEDBACK_MAX_CHARS, build_prompt


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_reference_goes_into_system_instruction(self):
        """Test that the reference answer is in the system instruction."""
        system, user = build_prompt("Pizza", "Fried chicken rice")
        assert "Fried chicken rice" in system
        assert "Fried chicken rice" not in user

    def test_answer_goes_into_user_message(self):
        """Test that the player's answer is in the user message."""
        system, user = build_prompt("  Pizza  ", "Fried chicken rice")
        assert user == "Player's answer: \"Pizza\""
        assert "Pizza" not in system

    def test_requests_json_with_bounds(self):
        """Test that the prompt asks for JSON within the score bounds."""
        system, _ = build_prompt("x", "y")
        assert '"score"' in system
        assert '"feedback"' in system
        assert "0 to 100" in system
        assert str(FEEDBACK_MAX_CHARS) in system


class TestParseScorePayload:
    """Tests for parse_score_payload()."""

    def test_well_formed_payload(self):
        """Test parsing a well-formed payload."""
        outcome = parse_score_payload('{"score": 85, "feedback": "Spot on!"}')
        assert outcome.ok
        assert outcome.result.points == 85
        assert outcome.result.feedback == "Spot on!"

    def test_score_above_range_is_clamped(self):
        """Test that a score above 100 is clamped."""
        outcome = parse_score_payload('{"score": 150, "feedback": "Wow"}')
        assert outcome.result.points == 100

    def test_score_below_range_is_clamped(self):
        """Test that a score below 0 is clamped."""
        outcome = parse_score_payload('{"score": -20, "feedback": "Hmm"}')
        assert outcome.result.points == 0

    def test_code_fenced_payload(self):
        """Test parsing a payload inside a code fence."""
        raw = '```json\n{"score": 42, "feedback": "Fine"}\n```'
        outcome = parse_score_payload(raw)
        assert outcome.ok
        assert outcome.result.points == 42

    def test_feedback_is_stripped(self):
        """Test that feedback whitespace is stripped."""
        outcome = parse_score_payload('{"score": 10, "feedback": "  ok  "}')
        assert outcome.result.feedback == "ok"

    def test_invalid_json_is_malformed(self):
        """Test that invalid JSON is MALFORMED."""
        outcome = parse_score_payload("Great answer, 90 points!")
        assert outcome.kind is OutcomeKind.MALFORMED
        assert outcome.result is None
        assert "invalid JSON" in outcome.reasons[0]

    def test_non_object_is_malformed(self):
        """Test that a JSON non-object is MALFORMED."""
        outcome = parse_score_payload("[90, \"nice\"]")
        assert outcome.kind is OutcomeKind.MALFORMED
        assert "expected object" in outcome.reasons[0]

    def test_missing_feedback_is_malformed(self):
        """Test that a missing feedback field is MALFORMED."""
        outcome = parse_score_payload('{"score": 90}')
        assert outcome.kind is OutcomeKind.MALFORMED
        assert any("feedback" in reason for reason in outcome.reasons)

    def test_non_numeric_score_is_malformed(self):
        """Test that a non-numeric score is MALFORMED."""
        outcome = parse_score_payload('{"score": "very high", "feedback": "x"}')
        assert outcome.kind is OutcomeKind.MALFORMED
        assert any("score" in reason for reason in outcome.reasons)

    def test_boolean_score_is_malformed(self):
        """A JSON boolean is not accepted as a score."""
        for literal in ("true", "false"):
            outcome = parse_score_payload(f'{{"score": {literal}, "feedback": "x"}}')
            assert outcome.kind is OutcomeKind.MALFORMED
            assert outcome.result is None

    def test_empty_response_is_malformed(self):
        """Test that an empty response is MALFORMED."""
        assert parse_score_payload("").kind is OutcomeKind.MALFORMED
        assert parse_score_payload(None).kind is OutcomeKind.MALFORMED

    def test_raw_text_is_kept(self):
        """Test that the raw text is kept on the outcome."""
        raw = '{"score": 1, "feedback": "x"}'
        assert parse_score_payload(raw).raw == raw


class TestHelpers:
    """Tests for clamp_points() and strip_code_fence()."""

    def test_clamp_points(self):
        """Test clamping to the score range."""
        assert clamp_points(-1) == 0
        assert clamp_points(55) == 55
        assert clamp_points(101) == 100

    def test_strip_plain_fence(self):
        """Test stripping a fence with no language tag."""
        assert strip_code_fence("```\n{}\n```") == "{}"

    def test_unfenced_text_is_trimmed(self):
        """Test that unfenced text is only trimmed."""
        assert strip_code_fence("  {}  ") == "{}"
