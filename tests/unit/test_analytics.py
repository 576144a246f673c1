import pytest

from match_pipeline.analytics.engine import (
    AnalyticsEngine,
    compute_all_sports_stats,
    compute_stats_for_sport,
    partition_by_sport,
)
from match_pipeline.common.sports import SPORT_VALUES
from match_pipeline.data_collection.query import MatchQueryService


def test_empty_input_gives_zeros():
    stats = compute_stats_for_sport("football", [])
    assert stats.model_dump() == {
        "sample_size": 0,
        "avg_combined_score": 0,
        "side_a_win_rate": 0,
        "draw_rate": 0,
    }


def test_side_a_always_wins(match_factory):
    stats = compute_stats_for_sport("football", [match_factory(2, 0), match_factory(3, 1), match_factory(1, 0)])
    assert stats.sample_size == 3
    assert stats.side_a_win_rate == 1.0
    assert stats.draw_rate == 0
    assert stats.avg_combined_score == pytest.approx(7 / 3, abs=0.005)


def test_rates_are_rounded(match_factory):
    matches = [match_factory(1, 1), match_factory(0, 2), match_factory(2, 1)]
    stats = compute_stats_for_sport("football", matches)
    assert stats.side_a_win_rate == 0.333
    assert stats.draw_rate == 0.333
    assert stats.avg_combined_score == 2.33


def test_rates_stay_within_unit_interval(match_factory):
    matches = [match_factory(a, b) for a in range(4) for b in range(4)]
    stats = compute_stats_for_sport("football", matches)
    assert 0 <= stats.side_a_win_rate <= 1
    assert 0 <= stats.draw_rate <= 1
    assert stats.side_a_win_rate + stats.draw_rate <= 1


def test_partition_by_sport(match_factory):
    buckets = partition_by_sport([match_factory(sport="tennis"), match_factory(), match_factory(sport="tennis")])
    assert {k: len(v) for k, v in buckets.items()} == {"tennis": 2, "football": 1}


def test_all_sports_lists_every_sport(match_factory):
    stats = compute_all_sports_stats([match_factory(90, 80, sport="basketball"), match_factory(1, 1)])
    assert stats.mode == "all_sports"
    assert stats.sample_size == 2
    assert set(stats.by_sport) == set(SPORT_VALUES)
    assert stats.by_sport["basketball"].avg_combined_score == 170
    assert stats.by_sport["football"].draw_rate == 1.0
    assert stats.by_sport["rugby"].sample_size == 0


@pytest.mark.asyncio
async def test_engine_on_sample_fallback(repository, settings):
    engine = AnalyticsEngine(MatchQueryService(repository, settings=settings), settings)

    basketball = await engine.sport_stats("basketball")
    assert basketball.sample_size == 2
    assert basketball.side_a_win_rate == 0.5
    assert basketball.avg_combined_score == 184.0

    overall = await engine.all_sports_stats()
    assert overall.sample_size == 5
    assert overall.by_sport["football"].sample_size == 2
    assert overall.by_sport["tennis"].side_a_win_rate == 1.0
