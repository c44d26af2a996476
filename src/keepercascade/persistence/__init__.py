"""Persistence layer for finalized keeper records."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from keepercascade.models import KeeperHistoryRecord, KeeperType


DB_PATH_ENV = "KEEPERCASCADE_DB_PATH"


@dataclass
class KeeperRecord:
    league_id: str
    season: int
    roster_id: str
    player_id: str
    player_name: str
    keeper_type: KeeperType
    years_kept: int
    base_cost: Optional[int]
    final_cost: Optional[int]
    updated_at: datetime


class KeeperStore:
    """Simple SQLite-backed store for finalized keeper costs."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(DB_PATH_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS keepers (
                    league_id TEXT NOT NULL,
                    season INTEGER NOT NULL,
                    roster_id TEXT NOT NULL,
                    player_id TEXT NOT NULL,
                    player_name TEXT NOT NULL,
                    keeper_type TEXT NOT NULL,
                    years_kept INTEGER NOT NULL,
                    base_cost INTEGER,
                    final_cost INTEGER,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (league_id, season, roster_id, player_id)
                )
                """
            )
            conn.commit()

    def save_keeper_costs(
        self,
        *,
        league_id: str,
        season: int,
        keepers: Iterable[KeeperRecord],
    ) -> int:
        """Replace the league's keepers for ``season`` in a single transaction."""

        rows = [
            (
                league_id,
                season,
                keeper.roster_id,
                keeper.player_id,
                keeper.player_name,
                keeper.keeper_type.value,
                keeper.years_kept,
                keeper.base_cost,
                keeper.final_cost,
                keeper.updated_at.isoformat(),
            )
            for keeper in keepers
        ]
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "DELETE FROM keepers WHERE league_id = ? AND season = ?",
                    (league_id, season),
                )
                conn.executemany(
                    """
                    INSERT INTO keepers (
                        league_id, season, roster_id, player_id, player_name, keeper_type,
                        years_kept, base_cost, final_cost, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
        finally:
            conn.close()
        return len(rows)

    def list_keepers(self, league_id: str, season: int) -> List[KeeperRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM keepers
                WHERE league_id = ? AND season = ?
                ORDER BY roster_id, final_cost, player_id
                """,
                (league_id, season),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def keeper_history(self, league_id: str) -> List[KeeperHistoryRecord]:
        """All finalized keepers of a league, oldest season first."""

        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM keepers WHERE league_id = ? ORDER BY season, roster_id, player_id",
                (league_id,),
            ).fetchall()
        return [
            KeeperHistoryRecord(
                season=row["season"],
                player_id=row["player_id"],
                roster_id=row["roster_id"],
                type=KeeperType(row["keeper_type"]),
                final_cost=row["final_cost"],
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> KeeperRecord:
        return KeeperRecord(
            league_id=row["league_id"],
            season=row["season"],
            roster_id=row["roster_id"],
            player_id=row["player_id"],
            player_name=row["player_name"],
            keeper_type=KeeperType(row["keeper_type"]),
            years_kept=row["years_kept"],
            base_cost=row["base_cost"],
            final_cost=row["final_cost"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = [
    "DB_PATH_ENV",
    "KeeperRecord",
    "KeeperStore",
    "utc_now",
]
