# Area: Store
"""
quiz_judge._store.base — Shared store interface
================================================

The shared store keeps one leaderboard entry per player (upserted) and
an append-only feed of answers. Viewers subscribe to either collection
and receive the full current snapshot on every change, the way a
document database pushes query snapshots.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from ..types import FeedEvent, LeaderboardEntry

logger = logging.getLogger("quiz_judge.store")

ScoresCallback = Callable[[List[LeaderboardEntry]], None]
FeedCallback = Callable[[List[FeedEvent]], None]


class Subscription:
    """Handle returned by ``subscribe_*``; call ``unsubscribe`` to stop."""

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe = unsubscribe
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._unsubscribe()


class GameStore(ABC):
    """Abstract shared store used by the pipeline and the viewers."""

    @abstractmethod
    def upsert_score(
        self,
        player_id: str,
        display_name: str,
        score: int,
        updated_at: Optional[int] = None,
    ) -> None:
        """Create or overwrite the player's leaderboard entry."""
        ...

    @abstractmethod
    def append_feed_event(self, event: FeedEvent) -> str:
        """Append a feed event. Returns the store-assigned id."""
        ...

    @abstractmethod
    def subscribe_scores(self, callback: ScoresCallback) -> Subscription:
        """Push every leaderboard snapshot to ``callback``."""
        ...

    @abstractmethod
    def subscribe_feed(self, callback: FeedCallback) -> Subscription:
        """Push every feed snapshot to ``callback``."""
        ...

    def close(self) -> None:
        """Release resources held by the store."""
        pass


class ListenerRegistry:
    """In-process listener bookkeeping for stores that notify themselves."""

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._listeners: Dict[int, Callable] = {}
        self._next_id = 0

    def add(self, callback: Callable) -> Subscription:
        with self._lock:
            listener_id = self._next_id
            self._next_id += 1
            self._listeners[listener_id] = callback

        def _remove():
            with self._lock:
                self._listeners.pop(listener_id, None)

        return Subscription(_remove)

    def notify(self, snapshot: list) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        for callback in listeners:
            try:
                callback(list(snapshot))
            except Exception:
                logger.error(f"{self.name} listener failed", exc_info=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
