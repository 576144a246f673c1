from datetime import datetime

import pytest

from match_pipeline.data_collection.integrity import IntegrityAuditor, IntegrityPolicy


def _plant(repository, n_total, n_outliers, sport="football", outlier_score=40):
    for i in range(n_total):
        score = outlier_score if i < n_outliers else 2
        repository.add_row(sport=sport, team_a=f"A{i}", team_b=f"B{i}", score_a=score, score_b=1,
                           date=datetime(2024, 1, 1))


@pytest.mark.asyncio
async def test_six_percent_outliers_is_corrupt(repository, settings):
    _plant(repository, 100, 6)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is True


@pytest.mark.asyncio
async def test_four_percent_outliers_is_not_corrupt(repository, settings):
    _plant(repository, 100, 4)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is False


@pytest.mark.asyncio
async def test_ratio_boundary_is_inclusive(repository, settings):
    _plant(repository, 100, 5)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is True


@pytest.mark.asyncio
async def test_empty_store_is_never_corrupt(repository, settings):
    assert await IntegrityAuditor(repository, settings).is_corrupt() is False


@pytest.mark.asyncio
async def test_thresholds_are_per_sport(repository, settings):
    # 120 points is an ordinary basketball score
    _plant(repository, 50, 50, sport="basketball", outlier_score=120)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is False
    assert await IntegrityAuditor(repository, settings).is_corrupt(sport="basketball") is False


@pytest.mark.asyncio
async def test_only_the_bounded_sample_is_inspected(repository, settings):
    _plant(repository, 200, 0)
    _plant(repository, 100, 100)  # inserted after the first 200 rows
    assert await IntegrityAuditor(repository, settings).is_corrupt() is False
    settings.integrity_sample_size = 300
    assert await IntegrityAuditor(repository, settings).is_corrupt() is True


@pytest.mark.asyncio
async def test_legacy_rows_use_default_sport_threshold(repository, settings):
    _plant(repository, 10, 10, sport=None, outlier_score=16)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is True


def test_policy_defaults_from_settings(settings):
    policy = IntegrityPolicy.from_settings(settings)
    assert policy.sample_size == 200
    assert policy.corruption_ratio == 0.05
    assert policy.threshold_for("football") == 15
    assert policy.threshold_for("tennis") < policy.threshold_for("basketball")
    assert policy.threshold_for("unknown") == 15
    assert policy.judge([]) is False


def test_partial_thresholds_keep_default_sport_limit(match_factory):
    policy = IntegrityPolicy(score_thresholds={"basketball": 250})
    assert policy.threshold_for("football") == 15
    assert policy.judge([match_factory(1, 0)]) is False
    assert policy.judge([match_factory(40, 0)]) is True


@pytest.mark.asyncio
async def test_audit_with_threshold_override(repository, settings):
    settings.integrity_score_thresholds = {"basketball": 250}
    _plant(repository, 20, 0)
    assert await IntegrityAuditor(repository, settings).is_corrupt() is False
