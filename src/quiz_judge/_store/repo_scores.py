# Area: Store
"""
quiz_judge._store.repo_scores — Scores Repository
==================================================

One row per player. Writes overwrite the previous total; the row keeps
its original position so snapshots list players in join order.
"""

from typing import List, Optional

from ..types import LeaderboardEntry
from .database import BaseRepository


class ScoreRepository(BaseRepository):
    """Repository for the ``scores`` table."""

    def upsert(
        self,
        player_id: str,
        display_name: str,
        score: int,
        updated_at: Optional[int] = None,
    ) -> None:
        """
        Create or overwrite a player's total.

        Args:
            player_id: Stable player identity
            display_name: Name shown on the leaderboard
            score: Latest cumulative total
            updated_at: Milliseconds since the epoch
        """
        query = """
            INSERT INTO scores (player_id, display_name, score, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(player_id) DO UPDATE SET
                display_name = excluded.display_name,
                score = excluded.score,
                updated_at = excluded.updated_at
        """
        self._write(query, (player_id, display_name, score, updated_at))

    def get(self, player_id: str) -> Optional[LeaderboardEntry]:
        row = self._fetch_one("SELECT * FROM scores WHERE player_id = ?", (player_id,))
        return _to_entry(row) if row else None

    def list_all(self) -> List[LeaderboardEntry]:
        """All entries in join order."""
        rows = self._fetch_all("SELECT * FROM scores ORDER BY rowid")
        return [_to_entry(row) for row in rows]


def _to_entry(row: dict) -> LeaderboardEntry:
    return LeaderboardEntry(
        player_id=row["player_id"],
        display_name=row["display_name"],
        score=row["score"],
        updated_at=row["updated_at"],
    )
