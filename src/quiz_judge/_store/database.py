# Area: Store
"""
quiz_judge._store.database — SQLite connection handling
========================================================

Opens connections to the local store file, applies ``schema.sql``
and gives repositories a small query helper.
"""

import sqlite3
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger("quiz_judge.store.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_DB_PATH = "quiz_judge.db"


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open a connection whose rows behave like dicts."""
    conn = sqlite3.connect(db_path, timeout=10)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = DEFAULT_DB_PATH) -> None:
    """
    Create the store tables if they do not exist yet.

    Args:
        db_path: Path to the SQLite database file
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    schema = SCHEMA_PATH.read_text(encoding="utf-8")
    conn = get_connection(db_path)
    try:
        conn.executescript(schema)
        conn.commit()
        logger.info(f"Store database ready at {db_path}")
    finally:
        conn.close()


class BaseRepository:
    """
    Base class for store repositories.

    Each call opens its own short-lived connection so repositories can
    be shared between threads.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error."""
        conn = get_connection(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _write(self, query: str, params: tuple = ()) -> int:
        """Run a write statement and return the last inserted row id."""
        with self._transaction() as conn:
            return conn.execute(query, params).lastrowid

    def _fetch_all(self, query: str, params: tuple = ()) -> List[dict]:
        with self._transaction() as conn:
            return [dict(row) for row in conn.execute(query, params).fetchall()]

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        rows = self._fetch_all(query, params)
        return rows[0] if rows else None
