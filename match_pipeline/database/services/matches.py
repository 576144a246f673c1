"""
Database services for match persistence.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from match_pipeline.common.parsing import parse_score
from match_pipeline.database.manager import DatabaseManager
from match_pipeline.domain.models import Match

_COLUMNS = ("sport", "team_a", "team_b", "score_a", "score_b", "form", "risk", "date")
_SELECT = "SELECT id, " + ", ".join(_COLUMNS) + " FROM matches"


class MatchRepository:
    """Persistenz der ``matches``-Tabelle.

    Only the operations the seeding pipeline needs: insert-many, count, find,
    delete-all and the one-time sport backfill for legacy rows.
    """

    def __init__(self, db: DatabaseManager, default_sport: Optional[str] = None):
        self.db = db
        self.default_sport = default_sport or db.settings.default_sport
        self.logger = logging.getLogger("match_repository")

    def is_ready(self) -> bool:
        return self.db.is_ready

    def _to_match(self, row: dict) -> Match:
        # Legacy rows may still lack a sport while migration is pending
        if not row.get("sport"):
            row = {**row, "sport": self.default_sport}
        return Match.model_validate(row)

    async def insert_many(self, matches: Iterable[Match]) -> int:
        """Validiert und speichert Matches; gibt die Anzahl eingefügter Zeilen zurück"""
        rows = [
            (
                m.sport,
                m.team_a,
                m.team_b,
                parse_score(m.score_a),
                parse_score(m.score_b),
                m.form,
                m.risk,
                m.date,
            )
            for m in matches
        ]
        if not rows:
            return 0
        placeholders = ", ".join(f"${i + 1}" for i in range(len(_COLUMNS)))
        query = f"INSERT INTO matches ({', '.join(_COLUMNS)}) VALUES ({placeholders})"
        await self.db.execute_many(query, rows)
        self.logger.info(f"Inserted {len(rows)} matches")
        return len(rows)

    async def count(self, sport: Optional[str] = None) -> int:
        if sport:
            return await self.db.execute_scalar(
                "SELECT COUNT(*) FROM matches WHERE sport = $1", sport
            )
        return await self.db.execute_scalar("SELECT COUNT(*) FROM matches")

    async def count_missing_sport(self) -> int:
        return await self.db.execute_scalar("SELECT COUNT(*) FROM matches WHERE sport IS NULL")

    async def find(self, sport: Optional[str] = None, limit: int = 50) -> list[Match]:
        """Neueste Matches zuerst, optional auf eine Sportart gefiltert"""
        if sport:
            rows = await self.db.execute_query(
                f"{_SELECT} WHERE sport = $1 ORDER BY date DESC NULLS LAST LIMIT $2",
                sport,
                limit,
            )
        else:
            rows = await self.db.execute_query(
                f"{_SELECT} ORDER BY date DESC NULLS LAST LIMIT $1", limit
            )
        return [self._to_match(r) for r in rows]

    async def sample(self, limit: int, sport: Optional[str] = None) -> list[Match]:
        """Die ersten ``limit`` Zeilen in Einfügereihenfolge (Stichprobe für den Auditor)"""
        if sport:
            rows = await self.db.execute_query(
                f"{_SELECT} WHERE sport = $1 ORDER BY id LIMIT $2", sport, limit
            )
        else:
            rows = await self.db.execute_query(f"{_SELECT} ORDER BY id LIMIT $1", limit)
        return [self._to_match(r) for r in rows]

    async def delete_all(self) -> int:
        deleted = await self.db.execute("DELETE FROM matches")
        self.logger.warning(f"Deleted {deleted} matches")
        return deleted

    async def assign_default_sport(self, sport: Optional[str] = None) -> int:
        """Setzt die Sportart für Altbestände ohne ``sport``; beliebig oft ausführbar"""
        return await self.db.execute(
            "UPDATE matches SET sport = $1 WHERE sport IS NULL", sport or self.default_sport
        )
