# Area: Store
"""
quiz_judge._store.repo_feed — Feed Repository
==============================================

Append-only answer feed. Rows are never updated or deleted.
"""

from typing import List

from ..types import FeedEvent
from .database import BaseRepository


class FeedRepository(BaseRepository):
    """Repository for the ``feed`` table."""

    def append(self, event: FeedEvent) -> int:
        """
        Append a feed event.

        Args:
            event: The answer to publish

        Returns:
            Row id assigned by the database
        """
        query = """
            INSERT INTO feed
            (player_id, player_name, question_id, question_text,
             answer_text, points, feedback, timestamp)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        return self._write(query, (
            event.player_id,
            event.player_name,
            event.question_id,
            event.question_text,
            event.answer_text,
            event.points,
            event.feedback,
            event.timestamp,
        ))

    def list_all(self) -> List[FeedEvent]:
        """All events in insertion order."""
        rows = self._fetch_all("SELECT * FROM feed ORDER BY id")
        return [_to_event(row) for row in rows]

    def count_for_player(self, player_id: str) -> int:
        row = self._fetch_one(
            "SELECT COUNT(*) AS n FROM feed WHERE player_id = ?", (player_id,)
        )
        return row["n"] if row else 0


def _to_event(row: dict) -> FeedEvent:
    return FeedEvent(
        player_name=row["player_name"],
        question_text=row["question_text"],
        answer_text=row["answer_text"],
        points=row["points"],
        timestamp=row["timestamp"],
        feedback=row["feedback"],
        question_id=row["question_id"],
        player_id=row["player_id"],
    )
