"""
Match Query Service

Liest Matches aus der Datenbank und fällt auf die Beispieldaten zurück, wenn die
Datenbank nicht erreichbar ist oder für den Filter nichts liefert. Aufrufer müssen
"keine Daten" und "keine Verbindung" nicht unterscheiden.
"""

import logging
from typing import Any, Optional

from match_pipeline.common.sports import require_sport
from match_pipeline.core.config import Settings, settings as default_settings
from match_pipeline.data_collection.collectors.sample_collector import (
    SampleMatchCollector,
    filter_by_sport,
)
from match_pipeline.domain.models import Match


class StoreUnavailableError(RuntimeError):
    """Raised when a write needs the database but it is not connected."""


def clamp_limit(limit: Any, default: int, maximum: int) -> int:
    """Clamp a caller supplied limit into ``[1, maximum]``; junk falls back to ``default``."""
    try:
        value = int(float(limit))
    except (TypeError, ValueError, OverflowError):
        value = default
    return max(1, min(value, maximum))


class MatchQueryService:
    def __init__(
        self,
        repository=None,
        sample_collector: Optional[SampleMatchCollector] = None,
        settings: Optional[Settings] = None,
        metrics=None,
    ):
        self.repository = repository
        self.settings = settings or default_settings
        self.sample_collector = sample_collector or SampleMatchCollector(self.settings)
        self.metrics = metrics
        self.logger = logging.getLogger("match_query")

    def store_ready(self) -> bool:
        return self.repository is not None and self.repository.is_ready()

    async def _fallback(self, sport: Optional[str], limit: int, reason: str) -> list[Match]:
        if self.metrics:
            self.metrics.record_fallback(reason)
        matches = filter_by_sport(await self.sample_collector.load(), sport)
        return matches[:limit]

    async def query(self, sport: Optional[str] = None, limit: Any = None, *, maximum: Optional[int] = None) -> list[Match]:
        """Matches (neueste zuerst), optional nach Sportart gefiltert"""
        sport = require_sport(sport, fallback=None)
        limit = clamp_limit(
            limit,
            self.settings.list_limit_default,
            maximum or self.settings.list_limit_max,
        )

        if not self.store_ready():
            return await self._fallback(sport, limit, "store_unavailable")

        try:
            matches = await self.repository.find(sport=sport, limit=limit)
        except Exception as e:
            self.logger.warning(f"Match query failed, serving sample data: {e}")
            return await self._fallback(sport, limit, "store_error")

        if not matches:
            return await self._fallback(sport, limit, "store_empty")
        return matches

    async def query_for_stats(self, sport: Optional[str] = None, limit: Any = None) -> list[Match]:
        if limit is None:
            limit = self.settings.stats_limit_default
        return await self.query(sport, limit, maximum=self.settings.stats_limit_max)

    async def create_match(self, payload: dict) -> Match:
        """Validiert und speichert ein einzelnes Match"""
        if isinstance(payload, dict) and not payload.get("sport"):
            payload = {**payload, "sport": self.settings.default_sport}
        match = Match.model_validate(payload)
        if not self.store_ready():
            raise StoreUnavailableError("Match store is not connected")
        await self.repository.insert_many([match])
        return match
