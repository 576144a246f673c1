"""
Analytics Engine
Deskriptive Statistiken über Match-Sammlungen, pro Sportart oder über alle Sportarten
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from match_pipeline.common.sports import SPORT_VALUES, normalize_sport
from match_pipeline.core.config import Settings, settings as default_settings
from match_pipeline.domain.models import AllSportsStats, Match, SportStats

logger = logging.getLogger(__name__)


def compute_stats_for_sport(
    sport: str,
    matches: Iterable[Match],
    *,
    rate_precision: int = 3,
    average_precision: int = 2,
) -> SportStats:
    """Reduce ``matches`` (all of ``sport``) to descriptive statistics.

    Rates are fractions of the sample: side A strictly ahead, and level scores.
    Empty input gives all zeros.
    """
    matches = list(matches)
    total = len(matches)
    if not total:
        return SportStats()

    combined = sum(m.score_a + m.score_b for m in matches)
    side_a_wins = sum(1 for m in matches if m.score_a > m.score_b)
    draws = sum(1 for m in matches if m.score_a == m.score_b)
    logger.debug(f"{sport}: {total} matches, {side_a_wins} side A wins, {draws} draws")

    return SportStats(
        sample_size=total,
        avg_combined_score=round(combined / total, average_precision),
        side_a_win_rate=round(side_a_wins / total, rate_precision),
        draw_rate=round(draws / total, rate_precision),
    )


def partition_by_sport(matches: Iterable[Match]) -> dict[str, list[Match]]:
    buckets: dict[str, list[Match]] = defaultdict(list)
    for m in matches:
        sport = normalize_sport(m.sport)
        if sport:
            buckets[sport].append(m)
    return buckets


def compute_all_sports_stats(matches: Iterable[Match], **precision) -> AllSportsStats:
    matches = list(matches)
    buckets = partition_by_sport(matches)
    return AllSportsStats(
        sample_size=len(matches),
        by_sport={
            sport: compute_stats_for_sport(sport, buckets.get(sport, []), **precision)
            for sport in SPORT_VALUES
        },
    )


class AnalyticsEngine:
    """Statistiken auf Basis des Query Service (Datenbank oder Beispieldaten)"""

    def __init__(self, query_service, settings: Optional[Settings] = None):
        self.query_service = query_service
        self.settings = settings or default_settings
        self.logger = logging.getLogger("analytics_engine")

    @property
    def _precision(self) -> dict:
        return {
            "rate_precision": self.settings.stats_rate_precision,
            "average_precision": self.settings.stats_average_precision,
        }

    async def sport_stats(self, sport: str, limit=None) -> SportStats:
        matches = await self.query_service.query_for_stats(sport, limit)
        return compute_stats_for_sport(sport, matches, **self._precision)

    async def all_sports_stats(self, limit=None) -> AllSportsStats:
        matches = await self.query_service.query_for_stats(None, limit)
        return compute_all_sports_stats(matches, **self._precision)
