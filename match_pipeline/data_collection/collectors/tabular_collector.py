"""
Tabular Export Collector
Erzeugt bei Bedarf den StatsBomb-CSV-Export über ein externes Ingest-Skript und
liest ihn als Match-Datensätze ein.
"""

from __future__ import annotations

import asyncio
import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import aiofiles
from pydantic import ValidationError

from match_pipeline.common.parsing import clean_text, parse_date, parse_score
from match_pipeline.core.config import Settings
from match_pipeline.domain.models import Match
from .base import MatchCollector


@dataclass(frozen=True)
class ColumnSpec:
    """A required export column, matched by any of its header aliases."""

    field: str
    aliases: tuple[str, ...]
    convert: Callable[[str], object]


@dataclass(frozen=True)
class ResolvedSchema:
    indexes: dict[str, int]

    def extract(self, row: list[str], spec: ColumnSpec) -> object:
        idx = self.indexes[spec.field]
        raw = row[idx] if idx < len(row) else ""
        return spec.convert(raw)


@dataclass(frozen=True)
class TabularSchema:
    columns: tuple[ColumnSpec, ...]

    def resolve(self, header: list[str]) -> Optional[ResolvedSchema]:
        """Map every column to its header position, or None if one is missing."""
        positions = {name.strip().lower(): i for i, name in enumerate(header)}
        indexes = {}
        for spec in self.columns:
            idx = next((positions[a] for a in spec.aliases if a in positions), None)
            if idx is None:
                return None
            indexes[spec.field] = idx
        return ResolvedSchema(indexes)


MATCH_EXPORT_SCHEMA = TabularSchema(
    columns=(
        ColumnSpec("date", ("date", "match_date"), parse_date),
        ColumnSpec("team_a", ("team_a", "home_team", "teama"), clean_text),
        ColumnSpec("team_b", ("team_b", "away_team", "teamb"), clean_text),
        ColumnSpec("score_a", ("goals_a", "home_score", "score_a", "scorea"), parse_score),
        ColumnSpec("score_b", ("goals_b", "away_score", "score_b", "scoreb"), parse_score),
    )
)


class TabularExportCollector(MatchCollector):
    """Datensammler für den CSV-Export der externen Datenquelle"""

    def __init__(self, settings: Optional[Settings] = None, schema: TabularSchema = MATCH_EXPORT_SCHEMA):
        super().__init__("tabular_export", settings)
        self.schema = schema
        self.export_path = Path(self.settings.tabular_export_path)
        self.sport = self.settings.tabular_export_sport

    async def _run_ingest(self, interpreter: str) -> bool:
        """Startet das Ingest-Skript mit einem Interpreter; True bei Exit-Code 0"""
        try:
            proc = await asyncio.create_subprocess_exec(
                interpreter,
                self.settings.ingest_script,
                cwd=self.settings.ingest_workdir,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.logger.warning(f"Cannot launch '{interpreter}': {e}")
            return False

        try:
            _, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.settings.ingest_timeout_seconds
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            self.logger.warning(
                f"Ingest via '{interpreter}' timed out after {self.settings.ingest_timeout_seconds}s"
            )
            return False

        if proc.returncode != 0:
            tail = (stderr or b"").decode("utf-8", "replace").strip()[-300:]
            self.logger.warning(f"Ingest via '{interpreter}' exited with {proc.returncode}: {tail}")
            return False
        return True

    async def ensure_tabular_export(self) -> Optional[Path]:
        """Pfad zum Export; erzeugt ihn falls nötig. None wenn er nicht verfügbar ist."""
        if self.export_path.exists():
            return self.export_path

        for interpreter in self.settings.ingest_interpreters:
            if await self._run_ingest(interpreter):
                break

        if self.export_path.exists():
            self.logger.info(f"Tabular export created at {self.export_path}")
            return self.export_path
        self.logger.warning("Tabular export unavailable; falling back to other sources")
        return None

    def parse(self, raw_text: str) -> list[Match]:
        """Wandelt CSV-Text in Matches um; fehlerhafte Eingaben ergeben eine leere Liste"""
        if not raw_text or not raw_text.strip():
            return []
        try:
            rows = [r for r in csv.reader(io.StringIO(raw_text)) if any(c.strip() for c in r)]
        except csv.Error as e:
            self.logger.warning(f"Malformed tabular export: {e}")
            return []
        if not rows:
            return []

        resolved = self.schema.resolve(rows[0])
        if resolved is None:
            self.logger.warning(f"Tabular export header lacks required columns: {rows[0]}")
            return []

        matches = []
        skipped = 0
        for row in rows[1:]:
            values = {spec.field: resolved.extract(row, spec) for spec in self.schema.columns}
            try:
                matches.append(Match(sport=self.sport, **values))
            except ValidationError:
                skipped += 1
        if skipped:
            self.logger.warning(f"Skipped {skipped} export rows without usable team identifiers")
        return matches

    async def collect_matches(self) -> list[Match]:
        path = await self.ensure_tabular_export()
        if path is None:
            return []
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Cannot read tabular export {path}: {e}")
            return []
        return self.parse(raw)
