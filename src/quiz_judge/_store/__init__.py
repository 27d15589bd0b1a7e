# Area: Store
"""
Shared store backends: in-memory, local SQLite, and Cloud Firestore.
"""

from typing import Any, Dict, Optional

from .base import GameStore, Subscription, ListenerRegistry
from .memory import MemoryStore
from .sqlite_store import SqliteStore
from .database import DEFAULT_DB_PATH

STORE_BACKENDS = ("memory", "sqlite", "firestore")


def create_store(name: str, config: Optional[Dict[str, Any]] = None) -> GameStore:
    """Build a store by name (``memory``, ``sqlite`` or ``firestore``)."""
    config = config or {}
    if name == "memory":
        return MemoryStore()
    if name == "sqlite":
        return SqliteStore(config.get("db_path", DEFAULT_DB_PATH))
    if name == "firestore":
        # Imported here so the other backends work without Firebase configured
        from .firestore import DEFAULT_APP_ID, FirestoreStore, create_firestore_client
        client = create_firestore_client(config.get("firebase_project_id"))
        return FirestoreStore(client, app_id=config.get("app_id", DEFAULT_APP_ID))
    raise ValueError(f"Unknown store backend: {name}")


__all__ = [
    "GameStore",
    "Subscription",
    "ListenerRegistry",
    "MemoryStore",
    "SqliteStore",
    "create_store",
    "STORE_BACKENDS",
]
