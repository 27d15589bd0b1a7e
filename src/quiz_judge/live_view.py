"""
quiz_judge.live_view — Live leaderboard and feed
=================================================

Subscribes to both store streams and keeps the latest snapshots. The
ranked leaderboard and grouped feed are rebuilt from those snapshots
whenever they are read.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from ._store import GameStore
from .feed import GROUP_BY_TEXT, GroupKey, group_feed
from .leaderboard import rank
from .types import FeedEvent, LeaderboardEntry


class LiveView:
    """Latest store snapshots plus derived display views."""

    def __init__(
        self,
        store: GameStore,
        group_key: str = GROUP_BY_TEXT,
        on_change: Optional[Callable[["LiveView"], None]] = None,
    ):
        self.group_key = group_key
        self._on_change = on_change
        self._lock = threading.Lock()
        self._entries: List[LeaderboardEntry] = []
        self._events: List[FeedEvent] = []
        self._subscriptions = [
            store.subscribe_scores(self._scores_changed),
            store.subscribe_feed(self._feed_changed),
        ]

    def _scores_changed(self, entries: List[LeaderboardEntry]) -> None:
        with self._lock:
            self._entries = list(entries)
        if self._on_change:
            self._on_change(self)

    def _feed_changed(self, events: List[FeedEvent]) -> None:
        with self._lock:
            self._events = list(events)
        if self._on_change:
            self._on_change(self)

    def leaderboard(self) -> List[LeaderboardEntry]:
        with self._lock:
            entries = list(self._entries)
        return rank(entries)

    def feed(self) -> Dict[GroupKey, List[FeedEvent]]:
        with self._lock:
            events = list(self._events)
        return group_feed(events, key=self.group_key)

    @property
    def player_count(self) -> int:
        with self._lock:
            return len(self._entries)

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []
