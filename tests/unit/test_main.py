import json

import pytest

import main
from match_pipeline.data_collection.orchestrator import SeedState


@pytest.fixture(autouse=True)
def _keep_test_logging(monkeypatch):
    monkeypatch.setattr(main, "configure_logging", lambda *a, **kw: None)


def test_parse_args():
    args = main.parse_args(["--mode", "stats_once", "--sport", "tennis"])
    assert args.mode == "stats_once"
    assert args.sport == "tennis"
    assert main.parse_args([]).mode is None


@pytest.mark.asyncio
async def test_seed_once_without_database_degrades(settings):
    settings.enable_metrics = False
    service = main.MatchPipelineService(settings)
    assert await service.run("seed_once") == 1
    assert service.pipeline.seed_scheduler.state == SeedState.DEGRADED


@pytest.mark.asyncio
async def test_stats_once_prints_sample_stats(settings, capsys):
    service = main.MatchPipelineService(settings)
    assert await service.run("stats_once", "tennis") == 0
    out = json.loads(capsys.readouterr().out)
    assert out["sample_size"] == 1
    assert out["side_a_win_rate"] == 1.0
