import json
from pathlib import Path

import pytest

from match_pipeline.core.config import Settings
from match_pipeline.data_collection.collectors import SampleMatchCollector, filter_by_sport
from match_pipeline.domain.models import Match


@pytest.mark.asyncio
async def test_load_normalizes_records(settings):
    matches = await SampleMatchCollector(settings).load()
    assert len(matches) == 5
    assert matches[0].sport == "football"  # defaulted
    assert matches[1].team_a == "Lyon"  # trimmed
    assert matches[2].sport == "basketball"  # lowercased


@pytest.mark.asyncio
async def test_load_output_is_a_fixed_point_of_normalization(settings):
    for m in await SampleMatchCollector(settings).load():
        assert Match.model_validate(m.model_dump()) == m
        assert Match.model_validate(m.to_record()) == m


@pytest.mark.asyncio
async def test_missing_file_yields_empty_list(tmp_path):
    collector = SampleMatchCollector(Settings(), path=str(tmp_path / "nope.json"))
    assert await collector.load() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["{not json", '{"teamA": "A"}', ""])
async def test_malformed_file_yields_empty_list(tmp_path, content):
    path = tmp_path / "broken.json"
    path.write_text(content, encoding="utf-8")
    assert await SampleMatchCollector(Settings(), path=str(path)).load() == []


@pytest.mark.asyncio
async def test_invalid_records_are_skipped(tmp_path):
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps([{"teamA": "A", "teamB": "B"}, {"teamA": "", "teamB": "B"}, {"teamA": "C", "teamB": "D", "sport": "polo"}]),
        encoding="utf-8",
    )
    matches = await SampleMatchCollector(Settings(), path=str(path)).load()
    assert [m.team_a for m in matches] == ["A"]


@pytest.mark.asyncio
async def test_bundled_sample_covers_every_sport():
    matches = await SampleMatchCollector(Settings()).load()
    assert Path(Settings().sample_matches_path).name == "sample_matches.json"
    assert {m.sport for m in matches} == {"football", "basketball", "tennis", "rugby", "handball"}


@pytest.mark.asyncio
async def test_filter_by_sport(settings):
    matches = await SampleMatchCollector(settings).load()
    assert filter_by_sport(matches, None) == matches
    assert filter_by_sport(matches, "") == matches
    basketball = filter_by_sport(matches, "Basketball")
    assert len(basketball) == 2
    assert all(m.sport == "basketball" for m in basketball)
    assert filter_by_sport(matches, "handball") == []
