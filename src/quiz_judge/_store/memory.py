# Area: Store
"""
quiz_judge._store.memory — In-process store
============================================

Thread-safe store kept in memory. Subscribers are notified
synchronously after each write, under the store lock, so snapshots
reach every listener in write order. Used by demo mode and tests.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from ..types import FeedEvent, LeaderboardEntry
from .base import FeedCallback, GameStore, ListenerRegistry, ScoresCallback, Subscription


class MemoryStore(GameStore):
    """Leaderboard and feed held in process memory."""

    def __init__(self):
        self._lock = threading.RLock()
        self._scores: Dict[str, LeaderboardEntry] = {}
        self._feed: List[Tuple[str, FeedEvent]] = []
        self._score_listeners = ListenerRegistry("scores")
        self._feed_listeners = ListenerRegistry("feed")

    # ── Writes ───────────────────────────────────────────────

    def upsert_score(
        self,
        player_id: str,
        display_name: str,
        score: int,
        updated_at: Optional[int] = None,
    ) -> None:
        with self._lock:
            self._scores[player_id] = LeaderboardEntry(
                player_id=player_id,
                display_name=display_name,
                score=score,
                updated_at=updated_at,
            )
            snapshot = list(self._scores.values())
            self._score_listeners.notify(snapshot)

    def append_feed_event(self, event: FeedEvent) -> str:
        with self._lock:
            event_id = f"evt_{len(self._feed) + 1:06d}"
            self._feed.append((event_id, event))
            snapshot = [e for _, e in self._feed]
            self._feed_listeners.notify(snapshot)
        return event_id

    # ── Reads ────────────────────────────────────────────────

    def scores(self) -> List[LeaderboardEntry]:
        with self._lock:
            return list(self._scores.values())

    def feed(self) -> List[FeedEvent]:
        with self._lock:
            return [e for _, e in self._feed]

    # ── Subscriptions ────────────────────────────────────────

    def subscribe_scores(self, callback: ScoresCallback) -> Subscription:
        with self._lock:
            subscription = self._score_listeners.add(callback)
            callback(list(self._scores.values()))
        return subscription

    def subscribe_feed(self, callback: FeedCallback) -> Subscription:
        with self._lock:
            subscription = self._feed_listeners.add(callback)
            callback([e for _, e in self._feed])
        return subscription
