"""
Base class for match data sources in the seeding pipeline.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

from match_pipeline.core.config import Settings, settings as default_settings
from match_pipeline.domain.models import Match


class MatchCollector(ABC):
    """Abstract base class for all seeding sources.

    A collector never raises for an unavailable or malformed source; it
    returns an empty list so the orchestrator can move on to the next one.
    """

    def __init__(self, name: str, settings: Optional[Settings] = None):
        self.name = name
        self.settings = settings or default_settings
        self.logger = logging.getLogger(f"collector.{name}")

    @abstractmethod
    async def collect_matches(self) -> list[Match]:
        """Collect canonical match records from the source.

        Returns:
            List of validated matches, possibly empty.
        """
        pass
