"""
Match Pipeline - Hauptanwendung

Zentraler Einstiegspunkt: API-Server mit Hintergrund-Seeding, einmaliges Seeding
oder einmalige Statistik-Ausgabe (``RUN_MODE`` bzw. ``--mode``).
"""

import argparse
import asyncio
import json
import logging
import sys

import uvicorn

from match_pipeline.api.main import create_fastapi_app
from match_pipeline.apps import MatchPipelineApp
from match_pipeline.common.logging_utils import configure_logging, get_logger
from match_pipeline.core.config import Settings

RUN_MODES = ("api", "seed_once", "stats_once")


class MatchPipelineService:
    """Hauptklasse für den Prozess"""

    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        configure_logging(service="match_pipeline", level=self.settings.log_level)
        self.logger = get_logger("match_pipeline")
        self.pipeline = MatchPipelineApp(self.settings)

    async def run_api_server(self):
        """Startet den API Server; Seeding läuft im Lifespan der App"""
        app = create_fastapi_app(self.settings, self.pipeline)
        config = uvicorn.Config(
            app,
            host=self.settings.api_host,
            port=self.settings.api_port,
            log_level=self.settings.log_level.lower(),
            access_log=True,
        )
        self.logger.info(f"Starting API server on {self.settings.api_host}:{self.settings.api_port}")
        await uvicorn.Server(config).serve()

    async def run_seed_once(self) -> int:
        """Seeding im Vordergrund; Exit-Code 0 nur bei Endzustand"""
        await self.pipeline.initialize()
        # Kein API-Server in diesem Modus, Metriken über eigenen Port
        if self.settings.enable_metrics:
            self.pipeline.metrics.start_metrics_server(self.settings.metrics_port)
        try:
            state = await self.pipeline.seed_until_done()
            self.logger.info(f"Seeding ended in state '{state.value}'")
            return 0 if state.is_terminal else 1
        finally:
            await self.pipeline.cleanup()

    async def run_stats_once(self, sport: str = None) -> int:
        await self.pipeline.initialize()
        try:
            if sport:
                stats = await self.pipeline.analytics.sport_stats(sport)
            else:
                stats = await self.pipeline.analytics.all_sports_stats()
            print(json.dumps(stats.model_dump(), indent=2))
            return 0
        finally:
            await self.pipeline.cleanup()

    async def run(self, mode: str, sport: str = None) -> int:
        if mode == "seed_once":
            return await self.run_seed_once()
        if mode == "stats_once":
            return await self.run_stats_once(sport)
        await self.run_api_server()
        return 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match Pipeline")
    parser.add_argument("--mode", choices=RUN_MODES, default=None, help="overrides RUN_MODE")
    parser.add_argument("--sport", default=None, help="sport for stats_once (default: all sports)")
    return parser.parse_args(argv)


def main():
    """Haupteinstiegspunkt"""
    args = parse_args()
    try:
        settings = Settings()
        service = MatchPipelineService(settings)
        exit_code = asyncio.run(service.run(args.mode or settings.run_mode, args.sport))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        exit_code = 0
    except Exception as e:
        logging.error(f"Pipeline failed: {e}")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
