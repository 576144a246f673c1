import pytest

from match_pipeline.apps import MatchPipelineApp
from match_pipeline.data_collection.orchestrator import SeedState


class FlakyDatabase:
    """DatabaseManager stand-in that refuses the first ``failures`` connection attempts."""

    is_configured = True

    def __init__(self, repository, failures):
        self.repository = repository
        self.failures = failures
        self.calls = 0

    async def initialize(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionRefusedError("connection refused")
        self.repository.ready = True

    async def health_check(self):
        return {"async_pool": "healthy" if self.repository.ready else "unavailable"}

    async def close(self):
        pass


@pytest.mark.asyncio
async def test_seeding_reconnects_after_failed_startup(settings, repository):
    repository.ready = False
    db = FlakyDatabase(repository, failures=2)
    pipeline = MatchPipelineApp(settings, db_manager=db, repository=repository)

    await pipeline.initialize()
    assert not repository.ready

    assert await pipeline.seed_until_done() == SeedState.SEEDED
    assert db.calls == 3
    assert pipeline.seed_scheduler.attempts == 2
    assert await repository.count() == 5
    assert (await pipeline.get_status())["store"] == "ready"


@pytest.mark.asyncio
async def test_store_that_never_comes_up_degrades(settings, repository):
    repository.ready = False
    db = FlakyDatabase(repository, failures=100)
    pipeline = MatchPipelineApp(settings, db_manager=db, repository=repository)

    await pipeline.initialize()
    assert await pipeline.seed_until_done() == SeedState.DEGRADED
    assert db.calls == 1 + settings.seed_max_attempts


@pytest.mark.asyncio
async def test_ensure_store_without_database_url(settings, repository):
    repository.ready = False
    pipeline = MatchPipelineApp(settings, repository=repository)
    assert await pipeline.ensure_store() is False
