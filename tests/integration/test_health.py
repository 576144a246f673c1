import httpx
import pytest

from match_pipeline.api.main import create_fastapi_app
from match_pipeline.apps import MatchPipelineApp


@pytest.mark.asyncio
async def test_health_endpoint(settings, repository):
    repository.ready = False
    pipeline = MatchPipelineApp(settings, repository=repository)
    app = create_fastapi_app(settings, pipeline)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["store"] == "unavailable"
        assert data["seed_state"] == "pending"
        assert data["seed_attempts"] == 0
        assert data["database"] == {"async_pool": "unavailable"}


@pytest.mark.asyncio
async def test_health_reports_seeding_progress(settings, repository):
    pipeline = MatchPipelineApp(settings, repository=repository)
    await pipeline.seed_until_done()
    app = create_fastapi_app(settings, pipeline)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        data = (await client.get("/health")).json()
    assert data["store"] == "ready"
    assert data["seed_state"] == "seeded"
    assert data["seed_attempts"] == 1
