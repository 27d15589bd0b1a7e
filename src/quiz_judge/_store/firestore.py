# Area: Store
"""
quiz_judge._store.firestore — Firestore-backed store
=====================================================

Shared store on Cloud Firestore, laid out so the browser front ends
read the same documents:

    artifacts/{app_id}/public/data/scores/{player_id}
        {name, score, uid, updatedAt}
    artifacts/{app_id}/public/data/feed/{auto id}
        {userName, question, answer, score, feedback, timestamp, questionId, uid}

The client is built explicitly with ``create_firestore_client`` and
passed in; nothing here holds a module-level handle.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from ..types import FeedEvent, LeaderboardEntry
from .base import FeedCallback, GameStore, ScoresCallback, Subscription

logger = logging.getLogger("quiz_judge.store.firestore")

DEFAULT_APP_ID = "year-end-ai-game-v1"
FIREBASE_APP_NAME = "quiz_judge"


def resolve_credentials(search_dir: Optional[Path] = None):
    """
    Find Firebase service-account credentials.

    Tries, in order:
      1) FIREBASE_SERVICE_ACCOUNT_JSON (env contains the full JSON blob)
      2) GOOGLE_APPLICATION_CREDENTIALS (file path, quotes and ~ allowed)
      3) First *.json under ``search_dir`` (default ./firebase/credentials)

    Returns None when nothing is configured, which lets the SDK fall
    back to application default credentials.
    """
    json_blob = os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON")
    if json_blob:
        try:
            return credentials.Certificate(json.loads(json_blob))
        except ValueError as e:
            raise RuntimeError(f"Invalid FIREBASE_SERVICE_ACCOUNT_JSON: {e}") from e

    p = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if p:
        p = os.path.expanduser(os.path.expandvars(p.strip().strip('"').strip("'")))
        if not os.path.exists(p):
            raise FileNotFoundError(
                f"Firebase credential file not found: {p}. "
                "Set FIREBASE_SERVICE_ACCOUNT_JSON or GOOGLE_APPLICATION_CREDENTIALS."
            )
        return credentials.Certificate(p)

    cred_dir = search_dir or Path.cwd() / "firebase" / "credentials"
    if cred_dir.exists():
        matches = sorted(cred_dir.glob("*.json"))
        if matches:
            return credentials.Certificate(str(matches[0]))
    return None


def get_firebase_app(project_id: Optional[str] = None):
    """Return this package's named Firebase app, initializing it once."""
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        options = {"projectId": project_id} if project_id else None
        cred = resolve_credentials()
        logger.info("Initializing Firebase app"
                    + (" with service-account credentials" if cred else " with default credentials"))
        return firebase_admin.initialize_app(cred, options, name=FIREBASE_APP_NAME)


def create_firestore_client(project_id: Optional[str] = None):
    """Build a Firestore client for the package's Firebase app."""
    return firestore.client(app=get_firebase_app(project_id))


class FirestoreStore(GameStore):
    """Leaderboard and feed stored in Cloud Firestore."""

    def __init__(self, client: Any, app_id: str = DEFAULT_APP_ID):
        self._db = client
        self.app_id = app_id

    # ── Paths ────────────────────────────────────────────────

    def _data_ref(self):
        return (
            self._db.collection("artifacts").document(self.app_id)
            .collection("public").document("data")
        )

    def scores_ref(self):
        return self._data_ref().collection("scores")

    def feed_ref(self):
        return self._data_ref().collection("feed")

    # ── Writes ───────────────────────────────────────────────

    def upsert_score(
        self,
        player_id: str,
        display_name: str,
        score: int,
        updated_at: Optional[int] = None,
    ) -> None:
        self.scores_ref().document(player_id).set({
            "name": display_name,
            "score": score,
            "uid": player_id,
            "updatedAt": updated_at,
        }, merge=True)

    def append_feed_event(self, event: FeedEvent) -> str:
        _, doc_ref = self.feed_ref().add(feed_event_to_doc(event))
        return doc_ref.id

    # ── Subscriptions ────────────────────────────────────────

    def subscribe_scores(self, callback: ScoresCallback) -> Subscription:
        def on_snapshot(docs, changes, read_time):
            callback([score_doc_to_entry(d.id, d.to_dict() or {}) for d in docs])

        watch = self.scores_ref().on_snapshot(on_snapshot)
        return Subscription(watch.unsubscribe)

    def subscribe_feed(self, callback: FeedCallback) -> Subscription:
        def on_snapshot(docs, changes, read_time):
            callback([feed_doc_to_event(d.to_dict() or {}) for d in docs])

        watch = self.feed_ref().on_snapshot(on_snapshot)
        return Subscription(watch.unsubscribe)


def feed_event_to_doc(event: FeedEvent) -> Dict[str, Any]:
    return {
        "userName": event.player_name,
        "question": event.question_text,
        "answer": event.answer_text,
        "score": event.points,
        "feedback": event.feedback,
        "timestamp": event.timestamp,
        "questionId": event.question_id,
        "uid": event.player_id,
    }


def feed_doc_to_event(data: Dict[str, Any]) -> FeedEvent:
    return FeedEvent(
        player_name=data.get("userName") or "",
        question_text=data.get("question") or "",
        answer_text=data.get("answer") or "",
        points=data.get("score") or 0,
        timestamp=data.get("timestamp") or 0,
        feedback=data.get("feedback") or "",
        question_id=data.get("questionId"),
        player_id=data.get("uid"),
    )


def score_doc_to_entry(doc_id: str, data: Dict[str, Any]) -> LeaderboardEntry:
    return LeaderboardEntry(
        player_id=doc_id,
        display_name=data.get("name") or "Guest",
        score=data.get("score"),
        updated_at=data.get("updatedAt"),
    )
