"""
Match Pipeline App - verdrahtet Datenbank, Seeding, Abfragen und Statistiken

Koordiniert alle Komponenten und bietet eine einheitliche Schnittstelle für API und CLI.
"""

import logging
from typing import Any, Optional

from ..analytics.engine import AnalyticsEngine
from ..core.config import Settings
from ..data_collection.collectors import SampleMatchCollector, TabularExportCollector
from ..data_collection.integrity import IntegrityAuditor
from ..data_collection.orchestrator import SeedOrchestrator, SeedScheduler
from ..data_collection.query import MatchQueryService
from ..database.manager import DatabaseManager
from ..database.services.matches import MatchRepository
from ..monitoring import PipelineMetrics


class MatchPipelineApp:
    """Hauptanwendung für Seeding, Integritätsprüfung und Statistiken"""

    def __init__(self, settings: Settings = None, *, db_manager: Optional[DatabaseManager] = None, repository=None):
        self.settings = settings or Settings()
        self.db_manager = db_manager or DatabaseManager(self.settings)
        self.repository = repository or MatchRepository(self.db_manager, self.settings.default_sport)
        self.metrics = PipelineMetrics(self.settings)

        self.sample_collector = SampleMatchCollector(self.settings)
        # Reihenfolge = Fallback-Reihenfolge beim Seeding
        self.collectors = [TabularExportCollector(self.settings), self.sample_collector]

        self.auditor = IntegrityAuditor(self.repository, self.settings)
        self.orchestrator = SeedOrchestrator(
            self.repository,
            self.collectors,
            self.auditor,
            self.settings,
            metrics=self.metrics,
            connect=self.ensure_store,
        )
        self.seed_scheduler = SeedScheduler(self.orchestrator)
        self.query_service = MatchQueryService(
            self.repository, self.sample_collector, self.settings, metrics=self.metrics
        )
        self.analytics = AnalyticsEngine(self.query_service, self.settings)

        self.logger = logging.getLogger("match_pipeline_app")

    async def initialize(self):
        """Initialisiert die Datenbank; Fehler führen in den Fallback-Modus statt zum Abbruch"""
        self.logger.info("Initializing Match Pipeline App...")
        try:
            await self.db_manager.initialize()
        except Exception as e:
            self.logger.warning(f"Database unavailable, serving sample data: {e}")

    async def ensure_store(self) -> bool:
        """Verbindet eine konfigurierte, aber nicht erreichbare Datenbank erneut"""
        if self.repository.is_ready():
            return True
        if not self.db_manager.is_configured:
            return False
        try:
            await self.db_manager.initialize()
            self.logger.info("Database connection established")
        except Exception as e:
            self.logger.warning(f"Database still unavailable: {e}")
        return self.repository.is_ready()

    def start_seeding(self):
        if self.settings.enable_seeding:
            return self.seed_scheduler.start()
        self.logger.info("Seeding disabled by settings")
        return None

    async def seed_until_done(self):
        """Seeding im Vordergrund (für run_mode=seed_once)"""
        return await self.seed_scheduler.run()

    async def get_status(self) -> dict[str, Any]:
        return {
            "store": "ready" if self.repository.is_ready() else "unavailable",
            "seed_state": self.seed_scheduler.state.value,
            "seed_attempts": self.seed_scheduler.attempts,
            "database": await self.db_manager.health_check(),
        }

    async def cleanup(self):
        """Räumt Ressourcen auf"""
        try:
            await self.seed_scheduler.stop()
            await self.db_manager.close()
            self.logger.info("Match Pipeline App cleanup completed")
        except Exception as e:
            self.logger.error(f"Cleanup failed: {e}")
