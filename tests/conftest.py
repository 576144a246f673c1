"""Global pytest fixtures.

Centralizes:
 - Project root path insertion (so individual tests don't repeat sys.path hacks)
 - An in-memory stand-in for the ``matches`` table with the MatchRepository interface
 - Settings and sample data pointing into tmp_path
"""

import json
import sys
from pathlib import Path
from typing import Optional

import pytest

# Ensure project root (containing match_pipeline/) is on sys.path once
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from match_pipeline.core.config import Settings  # noqa: E402
from match_pipeline.domain.models import Match  # noqa: E402


class InMemoryMatchRepository:
    """Same contract as MatchRepository, backed by a list of row dicts.

    Rows are stored raw so tests can plant legacy rows without ``sport``.
    """

    def __init__(self, ready: bool = True, default_sport: str = "football"):
        self.ready = ready
        self.default_sport = default_sport
        self.rows: list[dict] = []
        self.fail_reads = False
        self._next_id = 1

    def is_ready(self) -> bool:
        return self.ready

    def add_row(self, **row) -> dict:
        row.setdefault("id", self._next_id)
        self._next_id = max(self._next_id, row["id"]) + 1
        self.rows.append(row)
        return row

    def _to_match(self, row: dict) -> Match:
        if not row.get("sport"):
            row = {**row, "sport": self.default_sport}
        return Match.model_validate(row)

    def _check(self):
        if self.fail_reads:
            raise ConnectionError("connection reset")

    async def insert_many(self, matches) -> int:
        n = 0
        for m in matches:
            self.add_row(**m.model_dump(exclude={"id"}))
            n += 1
        return n

    async def count(self, sport: Optional[str] = None) -> int:
        self._check()
        return sum(1 for r in self.rows if not sport or r.get("sport") == sport)

    async def count_missing_sport(self) -> int:
        return sum(1 for r in self.rows if not r.get("sport"))

    async def find(self, sport: Optional[str] = None, limit: int = 50) -> list[Match]:
        self._check()
        rows = [r for r in self.rows if not sport or r.get("sport") == sport]
        rows.sort(key=lambda r: r["date"], reverse=True)
        return [self._to_match(r) for r in rows[:limit]]

    async def sample(self, limit: int, sport: Optional[str] = None) -> list[Match]:
        self._check()
        rows = [r for r in self.rows if not sport or r.get("sport") == sport]
        return [self._to_match(r) for r in sorted(rows, key=lambda r: r["id"])[:limit]]

    async def delete_all(self) -> int:
        n = len(self.rows)
        self.rows.clear()
        return n

    async def assign_default_sport(self, sport: Optional[str] = None) -> int:
        n = 0
        for r in self.rows:
            if not r.get("sport"):
                r["sport"] = sport or self.default_sport
                n += 1
        return n


SAMPLE_RECORDS = [
    {"teamA": "PSG", "teamB": "Marseille", "scoreA": 3, "scoreB": 1, "date": "2024-03-31"},
    {"sport": "football", "teamA": " Lyon ", "teamB": "Lille", "scoreA": 2, "scoreB": 2, "date": "2024-03-30"},
    {"sport": "Basketball", "teamA": "ASVEL", "teamB": "Monaco", "scoreA": 88, "scoreB": 92, "date": "2024-03-29"},
    {"sport": "basketball", "teamA": "Paris", "teamB": "Strasbourg", "scoreA": 101, "scoreB": 87, "date": "2024-03-28"},
    {"sport": "tennis", "teamA": "Sinner", "teamB": "Medvedev", "scoreA": 3, "scoreB": 2, "date": "2024-01-28"},
]


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample_matches.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, sample_file):
    return Settings(
        database_url=None,
        sample_matches_path=str(sample_file),
        tabular_export_path=str(tmp_path / "ai" / "data" / "matches.csv"),
        ingest_workdir=str(tmp_path / "ai"),
        ingest_interpreters=["definitely-not-an-interpreter"],
        ingest_timeout_seconds=10,
        seed_initial_delay_seconds=0,
        seed_interval_seconds=0,
        seed_max_attempts=3,
        enable_seeding=False,
    )


@pytest.fixture
def repository():
    return InMemoryMatchRepository()


@pytest.fixture
def match_factory():
    def make_match(score_a=1, score_b=0, sport="football", **kw) -> Match:
        kw.setdefault("team_a", "Home")
        kw.setdefault("team_b", "Away")
        return Match(sport=sport, score_a=score_a, score_b=score_b, **kw)

    return make_match
