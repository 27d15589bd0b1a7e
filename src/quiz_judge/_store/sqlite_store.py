# Area: Store
"""
quiz_judge._store.sqlite_store — Local SQLite store
====================================================

File-backed store for a single machine. Several game processes can
share one database file; subscribers are notified of writes made by
their own process.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..types import FeedEvent
from .base import FeedCallback, GameStore, ListenerRegistry, ScoresCallback, Subscription
from .database import DEFAULT_DB_PATH, init_database
from .repo_feed import FeedRepository
from .repo_scores import ScoreRepository

logger = logging.getLogger("quiz_judge.store.sqlite")


class SqliteStore(GameStore):
    """Leaderboard and feed stored in a SQLite file."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_database(db_path)
        self.scores = ScoreRepository(db_path)
        self.feed = FeedRepository(db_path)
        self._score_listeners = ListenerRegistry("scores")
        self._feed_listeners = ListenerRegistry("feed")

    def upsert_score(
        self,
        player_id: str,
        display_name: str,
        score: int,
        updated_at: Optional[int] = None,
    ) -> None:
        self.scores.upsert(player_id, display_name, score, updated_at)
        if len(self._score_listeners):
            self._score_listeners.notify(self.scores.list_all())

    def append_feed_event(self, event: FeedEvent) -> str:
        row_id = self.feed.append(event)
        if len(self._feed_listeners):
            self._feed_listeners.notify(self.feed.list_all())
        return str(row_id)

    def subscribe_scores(self, callback: ScoresCallback) -> Subscription:
        subscription = self._score_listeners.add(callback)
        callback(self.scores.list_all())
        return subscription

    def subscribe_feed(self, callback: FeedCallback) -> Subscription:
        subscription = self._feed_listeners.add(callback)
        callback(self.feed.list_all())
        return subscription
