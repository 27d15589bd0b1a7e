# Area: Pipeline Tests
"""Tests for the answer submission pipeline."""

import threading

import pytest

from quiz_judge._scoring import MockBackend, ScoringClient
from quiz_judge._session import PipelineState, SubmissionStatus
from quiz_judge._store import MemoryStore
from quiz_judge.errors import AuthError, BackendError, InvalidInputError, InvalidTransitionError
from quiz_judge.identity import IdentityProvider, LocalIdentityProvider
from quiz_judge.pipeline import (
    DEFAULT_FALLBACK_FEEDBACK,
    REASON_BUSY,
    REASON_CLOSED,
    REASON_EMPTY,
    REASON_NOT_AWAITING,
    SubmissionPipeline,
    start_session,
)
from quiz_judge.types import Question

QUESTIONS = (
    Question(1, "Theme colour of the party?", "Passionate red"),
    Question(2, "Busiest month?", "November or December"),
    Question(3, "Office mascot?", "A lucky cat"),
)


def payload(points, feedback="ok"):
    return f'{{"score": {points}, "feedback": "{feedback}"}}'


def no_sleep(seconds):
    pass


def make_pipeline(backend, store=None, questions=QUESTIONS, **kwargs):
    store = store if store is not None else MemoryStore()
    session = start_session(
        LocalIdentityProvider(), store, "Alice", questions, clock=lambda: 1000
    )
    scorer = ScoringClient(backend, sleep=kwargs.pop("sleep", no_sleep))
    pipeline = SubmissionPipeline(
        questions, session, scorer, store, clock=lambda: 2000, **kwargs
    )
    return pipeline, store


class FailingStore(MemoryStore):
    """MemoryStore whose selected writes always fail."""

    def __init__(self, fail_upsert=False, fail_feed=False):
        super().__init__()
        self.fail_upsert = fail_upsert
        self.fail_feed = fail_feed

    def upsert_score(self, *args, **kwargs):
        if self.fail_upsert:
            raise ConnectionError("store offline")
        super().upsert_score(*args, **kwargs)

    def append_feed_event(self, event):
        if self.fail_feed:
            raise ConnectionError("store offline")
        return super().append_feed_event(event)


class TestFullGame:
    """End-to-end games through the pipeline."""

    def test_three_question_game(self):
        """Test a full three question game totals every score."""
        backend = MockBackend([payload(10), payload(100), payload(50)])
        pipeline, store = make_pipeline(backend)

        for answer in ("red", "december", "cat"):
            result = pipeline.submit(answer)
            assert result.accepted
            pipeline.advance()

        assert pipeline.session.cumulative_score == 160
        assert pipeline.state == PipelineState.GAME_COMPLETE
        assert pipeline.is_complete

        events = store.feed()
        assert len(events) == 3
        assert [e.points for e in events] == [10, 100, 50]
        assert [e.question_id for e in events] == [1, 2, 3]

        entries = store.scores()
        assert len(entries) == 1
        assert entries[0].score == 160
        assert entries[0].display_name == "Alice"

    def test_feed_event_contents(self):
        """Test the feed event written for each answer."""
        pipeline, store = make_pipeline(MockBackend([payload(77, "Nice")]))
        pipeline.submit("  red  ")
        event = store.feed()[0]
        assert event.player_name == "Alice"
        assert event.question_text == "Theme colour of the party?"
        assert event.answer_text == "red"
        assert event.feedback == "Nice"
        assert event.timestamp == 2000
        assert event.player_id == pipeline.session.player_id

    def test_result_fields(self):
        """Test the fields of a successful submission result."""
        pipeline, _ = make_pipeline(MockBackend([payload(40)]))
        result = pipeline.submit("red")
        assert result.status is SubmissionStatus.RECORDED
        assert result.question == QUESTIONS[0]
        assert result.result.points == 40
        assert result.cumulative_score == 40
        assert result.fallback_used is False
        assert result.persist_errors == ()
        assert pipeline.state == PipelineState.RECORDED

    def test_score_is_monotonic(self):
        """Test that the cumulative score never decreases."""
        pipeline, _ = make_pipeline(MockBackend([payload(0), payload(30), payload(0)]))
        totals = []
        for answer in ("a", "b", "c"):
            totals.append(pipeline.submit(answer).cumulative_score)
            pipeline.advance()
        assert totals == sorted(totals)


class TestFallback:
    """Tests for the fallback score when scoring fails."""

    def test_unreachable_scorer_gives_fallback(self):
        """Test that an unreachable scorer awards the fallback score."""
        sleeps = []
        backend = MockBackend([BackendError("mock", "down")])
        pipeline, store = make_pipeline(backend, sleep=sleeps.append)

        result = pipeline.submit("red")

        assert result.accepted
        assert result.fallback_used is True
        assert result.result.points == 50
        assert result.result.feedback == DEFAULT_FALLBACK_FEEDBACK
        assert result.scoring_error.attempts == 5
        assert len(backend.calls) == 5
        assert sleeps == [1.0, 2.0, 4.0, 8.0]
        assert store.feed()[0].points == 50

        assert pipeline.advance() == PipelineState.AWAITING_INPUT

    def test_malformed_scorer_gives_fallback(self):
        """Test that a malformed scorer reply awards the fallback score."""
        pipeline, _ = make_pipeline(MockBackend(["I give it a 9/10"]))
        result = pipeline.submit("red")
        assert result.fallback_used
        assert result.scoring_error.last_kind == "malformed"

    def test_custom_fallback(self):
        """Test that fallback points and feedback can be configured."""
        pipeline, _ = make_pipeline(
            MockBackend([BackendError("mock", "down", retryable=False)]),
            fallback_points=25,
            fallback_feedback="Try later",
        )
        result = pipeline.submit("red")
        assert result.result.points == 25
        assert result.result.feedback == "Try later"

    def test_fallback_game_still_completes(self):
        """Test that a game with every scoring call failing completes."""
        backend = MockBackend([BackendError("mock", "down", retryable=False)])
        pipeline, _ = make_pipeline(backend)
        for answer in ("a", "b", "c"):
            pipeline.submit(answer)
            pipeline.advance()
        assert pipeline.is_complete
        assert pipeline.session.cumulative_score == 150


class TestRejections:
    """Tests for submissions that are refused without side effects."""

    @pytest.mark.parametrize("answer", ["", "   ", None])
    def test_empty_answer_rejected(self, answer):
        """Test that a blank answer is rejected without scoring."""
        backend = MockBackend([payload(90)])
        pipeline, store = make_pipeline(backend)

        result = pipeline.submit(answer)

        assert result.status is SubmissionStatus.REJECTED
        assert result.reason == REASON_EMPTY
        assert backend.calls == []
        assert store.feed() == []
        assert pipeline.state == PipelineState.AWAITING_INPUT

    def test_second_submit_before_advance_rejected(self):
        """Test that a second submit before advance is rejected."""
        backend = MockBackend([payload(90)])
        pipeline, store = make_pipeline(backend)
        pipeline.submit("red")

        result = pipeline.submit("again")

        assert result.reason == REASON_NOT_AWAITING
        assert len(backend.calls) == 1
        assert pipeline.session.cumulative_score == 90

    def test_concurrent_submit_rejected_as_busy(self):
        """Test that a submit during scoring is rejected as busy."""
        started = threading.Event()
        release = threading.Event()

        class SlowBackend(MockBackend):
            def generate(self, system_instruction, user_message):
                started.set()
                release.wait(5)
                return super().generate(system_instruction, user_message)

        backend = SlowBackend([payload(60)])
        pipeline, store = make_pipeline(backend)
        results = []
        worker = threading.Thread(target=lambda: results.append(pipeline.submit("first")))
        worker.start()
        assert started.wait(5)

        second = pipeline.submit("second")
        release.set()
        worker.join(5)

        assert second.reason == REASON_BUSY
        assert results[0].accepted
        assert len(backend.calls) == 1
        assert len(store.feed()) == 1

    def test_advance_without_result_raises(self):
        """Test that advance without a result raises."""
        pipeline, _ = make_pipeline(MockBackend([payload(1)]))
        with pytest.raises(InvalidTransitionError):
            pipeline.advance()


class TestClose:
    """Tests for closing a session."""

    def test_submit_after_close_rejected(self):
        """Test that submit after close is rejected."""
        backend = MockBackend([payload(1)])
        pipeline, _ = make_pipeline(backend)
        pipeline.close()
        assert pipeline.is_closed
        assert pipeline.submit("red").reason == REASON_CLOSED
        assert backend.calls == []

    def test_close_during_retry_discards_result(self):
        """Test that closing during a retry discards the result."""
        holder = {}
        backend = MockBackend([BackendError("mock", "down")])
        pipeline, store = make_pipeline(
            backend, sleep=lambda seconds: holder["pipeline"].close()
        )
        holder["pipeline"] = pipeline

        result = pipeline.submit("red")

        assert result.reason == REASON_CLOSED
        assert len(backend.calls) == 1
        assert pipeline.session.cumulative_score == 0
        assert store.feed() == []
        assert pipeline.state == PipelineState.CLOSED

    def test_close_is_idempotent(self):
        """Test that close can be called twice."""
        pipeline, _ = make_pipeline(MockBackend([payload(1)]))
        pipeline.close()
        pipeline.close()
        assert pipeline.is_closed


class TestPersistFailures:
    """Store write failures never block the game."""

    def test_feed_failure_reported(self):
        """Test that a failed feed write is reported, not raised."""
        store = FailingStore(fail_feed=True)
        pipeline, _ = make_pipeline(MockBackend([payload(70)]), store=store)

        result = pipeline.submit("red")

        assert result.accepted
        assert result.cumulative_score == 70
        assert [e.operation for e in result.persist_errors] == ["append_feed_event"]
        assert store.scores()[0].score == 70
        assert pipeline.advance() == PipelineState.AWAITING_INPUT

    def test_both_writes_failing(self):
        """Test that both write failures are reported and the game goes on."""
        store = FailingStore()
        pipeline, _ = make_pipeline(MockBackend([payload(70)]), store=store)
        store.fail_upsert = store.fail_feed = True

        result = pipeline.submit("red")

        assert result.accepted
        assert [e.operation for e in result.persist_errors] == [
            "upsert_score", "append_feed_event",
        ]
        assert result.persist_errors[0].payload["score"] == 70
        assert pipeline.session.cumulative_score == 70


class TestConstruction:
    """Tests for pipeline construction checks."""

    def test_question_count_mismatch(self):
        """Test that a session for a different question count is rejected."""
        store = MemoryStore()
        session = start_session(LocalIdentityProvider(), store, "Alice", QUESTIONS[:2])
        with pytest.raises(ValueError):
            SubmissionPipeline(QUESTIONS, session, ScoringClient(MockBackend()), store)

    def test_negative_fallback_rejected(self):
        """Test that negative fallback points are rejected."""
        with pytest.raises(ValueError):
            make_pipeline(MockBackend(), fallback_points=-1)


class TestStartSession:
    """Tests for start_session()."""

    def test_registers_player_with_zero(self):
        """Test that a new player is registered with 0 points."""
        store = MemoryStore()
        session = start_session(LocalIdentityProvider(), store, " Bob ", QUESTIONS)
        assert session.display_name == "Bob"
        assert session.question_count == 3
        entries = store.scores()
        assert len(entries) == 1
        assert entries[0].player_id == session.player_id
        assert entries[0].score == 0

    def test_invalid_name_checked_before_identity(self):
        """Test that the name is checked before identity is requested."""
        calls = []

        class RecordingIdentity(IdentityProvider):
            def establish(self, display_name):
                calls.append(display_name)
                return "p1"

        with pytest.raises(InvalidInputError):
            start_session(RecordingIdentity(), MemoryStore(), "   ", QUESTIONS)
        assert calls == []

    def test_auth_failure_propagates(self):
        """Test that AuthError reaches the caller."""
        class BrokenIdentity(IdentityProvider):
            def establish(self, display_name):
                raise AuthError("test", RuntimeError("offline"))

        store = MemoryStore()
        with pytest.raises(AuthError) as exc_info:
            start_session(BrokenIdentity(), store, "Alice", QUESTIONS)
        assert "Reload the game" in str(exc_info.value)
        assert store.scores() == []

    def test_registration_failure_is_not_fatal(self):
        """Test that a failed registration write does not stop the session."""
        store = FailingStore(fail_upsert=True)
        session = start_session(LocalIdentityProvider(), store, "Alice", QUESTIONS)
        assert session.cumulative_score == 0
