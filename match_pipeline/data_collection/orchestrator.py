"""
Seed Orchestrator für die Match Pipeline

Bringt die ``matches``-Tabelle aus leeren, veralteten oder beschädigten Zuständen
in einen gültigen Seed-Zustand. Der Scheduler wiederholt das periodisch mit
begrenzter Versuchszahl, weil die Datenbank beim Prozessstart oft noch nicht
verbunden ist.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

from match_pipeline.core.config import Settings, settings as default_settings
from match_pipeline.data_collection.collectors.base import MatchCollector
from match_pipeline.data_collection.integrity import IntegrityAuditor


class SeedState(str, Enum):
    PENDING = "pending"  # store not connected yet
    UNSEEDED = "unseeded"
    SEEDED = "seeded"
    HEALED = "healed"
    DEGRADED = "degraded"  # attempt budget exhausted without reaching a terminal state

    @property
    def is_terminal(self) -> bool:
        return self in (SeedState.SEEDED, SeedState.HEALED)


class SeedOrchestrator:
    """Ein Seeding-Durchlauf: Migration, Audit, Purge und Re-Seed"""

    def __init__(
        self,
        repository,
        collectors: Sequence[MatchCollector],
        auditor: IntegrityAuditor,
        settings: Optional[Settings] = None,
        metrics=None,
        connect: Optional[Callable[[], Awaitable[bool]]] = None,
    ):
        self.repository = repository
        self.connect = connect  # reconnect hook for a store that was down at startup
        self.collectors = list(collectors)
        self.auditor = auditor
        self.settings = settings or default_settings
        self.metrics = metrics
        self.state = SeedState.PENDING
        self.logger = logging.getLogger("seed_orchestrator")

    async def migrate_legacy(self) -> int:
        """Weist Altbeständen ohne Sportart die Standard-Sportart zu"""
        if not await self.repository.count_missing_sport():
            return 0
        updated = await self.repository.assign_default_sport(self.settings.default_sport)
        self.logger.info(f"Migrated {updated} legacy matches to sport '{self.settings.default_sport}'")
        return updated

    async def seed(self) -> int:
        """Befüllt die leere Tabelle aus der ersten Quelle, die Daten liefert"""
        for collector in self.collectors:
            try:
                matches = await collector.collect_matches()
            except Exception as e:
                self.logger.warning(f"Collector {collector.name} failed: {e}")
                continue
            if not matches:
                self.logger.info(f"Collector {collector.name} returned no matches")
                continue

            inserted = await self.repository.insert_many(matches)
            self.logger.info(f"Seeded {inserted} matches from {collector.name}")
            if self.metrics:
                self.metrics.record_rows_inserted(collector.name, inserted)
            return inserted

        self.logger.warning("No seeding source produced matches")
        return 0

    async def run_once(self) -> SeedState:
        """Führt einen Durchlauf aus und gibt den erreichten Zustand zurück"""
        if self.state.is_terminal:
            return self.state

        if not self.repository.is_ready() and self.connect is not None:
            await self.connect()
        if not self.repository.is_ready():
            self.logger.debug("Store not ready; seeding postponed")
            self.state = SeedState.PENDING
            return self.state

        await self.migrate_legacy()

        if await self.repository.count() == 0:
            inserted = await self.seed()
            self.state = SeedState.SEEDED if inserted else SeedState.UNSEEDED
        elif await self.auditor.is_corrupt():
            purged = await self.repository.delete_all()
            self.logger.warning(f"Purged {purged} corrupt matches; reseeding")
            if self.metrics:
                self.metrics.record_purge()
            inserted = await self.seed()
            self.state = SeedState.HEALED if inserted else SeedState.UNSEEDED
        else:
            self.state = SeedState.SEEDED

        if self.metrics:
            self.metrics.set_seed_state(self.state)
        return self.state


class SeedScheduler:
    """Periodischer, begrenzter Seeding-Task"""

    def __init__(
        self,
        orchestrator: SeedOrchestrator,
        interval_seconds: Optional[float] = None,
        max_attempts: Optional[int] = None,
        initial_delay_seconds: Optional[float] = None,
    ):
        cfg = orchestrator.settings
        self.orchestrator = orchestrator
        self.interval_seconds = cfg.seed_interval_seconds if interval_seconds is None else interval_seconds
        self.max_attempts = cfg.seed_max_attempts if max_attempts is None else max_attempts
        self.initial_delay_seconds = (
            cfg.seed_initial_delay_seconds if initial_delay_seconds is None else initial_delay_seconds
        )
        self.attempts = 0
        self.task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self.logger = logging.getLogger("seed_scheduler")

    @property
    def state(self) -> SeedState:
        return self.orchestrator.state

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts

    async def tick(self) -> SeedState:
        """Ein geplanter Versuch; nach Erreichen eines Endzustands ein No-op"""
        async with self._lock:
            if self.state.is_terminal or self.exhausted:
                return self.state
            self.attempts += 1
            try:
                state = await self.orchestrator.run_once()
                outcome = state.value
            except Exception as e:
                self.logger.error(f"Seeding attempt {self.attempts}/{self.max_attempts} failed: {e}")
                state = self.state
                outcome = "error"
            if self.orchestrator.metrics:
                self.orchestrator.metrics.record_seed_attempt(outcome)
            return state

    async def run(self) -> SeedState:
        """Läuft bis zum Endzustand oder bis das Versuchsbudget aufgebraucht ist"""
        self.logger.info(
            f"Seed scheduler started (interval={self.interval_seconds}s, max_attempts={self.max_attempts})"
        )
        if self.initial_delay_seconds:
            await asyncio.sleep(self.initial_delay_seconds)

        while not self.exhausted:
            state = await self.tick()
            if state.is_terminal:
                self.logger.info(f"Seeding finished in state '{state.value}' after {self.attempts} attempt(s)")
                return state
            if not self.exhausted:
                await asyncio.sleep(self.interval_seconds)

        self.orchestrator.state = SeedState.DEGRADED
        if self.orchestrator.metrics:
            self.orchestrator.metrics.set_seed_state(SeedState.DEGRADED)
        self.logger.info("Seeding budget exhausted; serving sample data until restart")
        return self.state

    def start(self) -> asyncio.Task:
        if self.task is None or self.task.done():
            self.task = asyncio.create_task(self.run())
        return self.task

    async def stop(self):
        """Stoppt den Scheduler"""
        if self.task and not self.task.done():
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        self.logger.info("Seed scheduler stopped")
