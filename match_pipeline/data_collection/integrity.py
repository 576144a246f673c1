"""
Integrity Auditor

Erkennt Match-Bestände mit unplausiblen Ergebnissen. Ein früherer Seeding-Fehler
las die Tore aus der falschen CSV-Spalte; die Werte sind typ-korrekt, aber viel zu
groß für die jeweilige Sportart. Nur die Größenordnung verrät den Defekt.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from match_pipeline.common.sports import DEFAULT_SPORT
from match_pipeline.core.config import DEFAULT_SCORE_THRESHOLDS, Settings, settings as default_settings
from match_pipeline.domain.models import Match


@dataclass
class IntegrityPolicy:
    """Heuristic limits; defaults tuned for the wrong-column seeding defect."""

    score_thresholds: dict[str, int] = field(default_factory=dict)
    sample_size: int = 200
    corruption_ratio: float = 0.05
    default_sport: str = DEFAULT_SPORT

    def __post_init__(self):
        # Sports missing from a partial mapping keep their standard limit
        self.score_thresholds = {**DEFAULT_SCORE_THRESHOLDS, **self.score_thresholds}

    @classmethod
    def from_settings(cls, settings: Settings) -> "IntegrityPolicy":
        return cls(
            score_thresholds=dict(settings.integrity_score_thresholds),
            sample_size=settings.integrity_sample_size,
            corruption_ratio=settings.integrity_corruption_ratio,
            default_sport=settings.default_sport,
        )

    def threshold_for(self, sport: Optional[str]) -> int:
        if sport in self.score_thresholds:
            return self.score_thresholds[sport]
        return self.score_thresholds[self.default_sport]

    def is_outlier(self, match: Match) -> bool:
        limit = self.threshold_for(match.sport)
        return match.score_a > limit or match.score_b > limit

    def judge(self, sample: Iterable[Match]) -> bool:
        """True if the outlier share of ``sample`` reaches the corruption ratio."""
        sample = list(sample)
        if not sample:
            return False
        outliers = sum(1 for m in sample if self.is_outlier(m))
        return outliers / len(sample) >= self.corruption_ratio


class IntegrityAuditor:
    """Prüft eine Stichprobe aus der Datenbank auf unplausible Ergebnisse"""

    def __init__(self, repository, settings: Optional[Settings] = None, policy: Optional[IntegrityPolicy] = None):
        self.repository = repository
        self.policy = policy or IntegrityPolicy.from_settings(settings or default_settings)
        self.logger = logging.getLogger("integrity_auditor")

    async def is_corrupt(self, sport: Optional[str] = None) -> bool:
        sample = await self.repository.sample(self.policy.sample_size, sport=sport)
        corrupt = self.policy.judge(sample)
        if corrupt:
            outliers = sum(1 for m in sample if self.policy.is_outlier(m))
            self.logger.warning(
                f"Match data looks corrupt: {outliers}/{len(sample)} sampled records exceed score thresholds"
            )
        return corrupt
