"""
Sample Match Collector
Liest den mitgelieferten statischen Datensatz (Fallback für leere/fehlende Datenbank)
"""

import json
from pathlib import Path
from typing import Iterable, Optional

import aiofiles
from pydantic import ValidationError

from match_pipeline.common.sports import normalize_sport
from match_pipeline.core.config import Settings
from match_pipeline.domain.models import Match
from .base import MatchCollector


def filter_by_sport(matches: Iterable[Match], sport: Optional[str]) -> list[Match]:
    """Return only matches of ``sport``; no sport means no filtering."""
    if not sport:
        return list(matches)
    target = normalize_sport(sport, fallback=None)
    return [m for m in matches if m.sport == target]


class SampleMatchCollector(MatchCollector):
    """Datensammler für die gebündelte ``sample_matches.json``"""

    def __init__(self, settings: Optional[Settings] = None, path: Optional[str] = None):
        super().__init__("sample", settings)
        self.path = Path(path or self.settings.sample_matches_path)

    async def load(self) -> list[Match]:
        """Lädt und normalisiert den Datensatz; bei Lese- oder Parse-Fehlern eine leere Liste"""
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = json.loads(await f.read())
        except (OSError, ValueError) as e:
            self.logger.warning(f"Sample data unavailable at {self.path}: {e}")
            return []

        if not isinstance(raw, list):
            self.logger.warning(f"Sample data at {self.path} is not a list, ignoring it")
            return []

        matches = []
        for i, item in enumerate(raw):
            if isinstance(item, dict) and not item.get("sport"):
                item = {**item, "sport": self.settings.default_sport}
            try:
                matches.append(Match.model_validate(item))
            except ValidationError as e:
                self.logger.warning(f"Skipping sample record #{i}: {e.error_count()} validation error(s)")
        return matches

    async def collect_matches(self) -> list[Match]:
        return await self.load()
