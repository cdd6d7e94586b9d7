"""
Tests for the hype meter percentage and trend indicators.
"""

from scoutboard.constants import ScopeConstants
from scoutboard.data_models.leaderboard import PerformerAggregate, Trend
from scoutboard.utils.hype import hype_intensity, max_rating_count, round_half_up
from scoutboard.utils.trend import evaluate_trend, rating_trend_for, xp_trend_for


def make(scope, average=4.0, count=3, xp=None, baseline_rating=None, baseline_xp=None):
    return PerformerAggregate(
        id="p1",
        name="Luna Hart",
        scope=scope,
        average_rating=average,
        rating_count=count,
        comment_count=0,
        xp=xp,
        baseline_rating=baseline_rating,
        baseline_xp=baseline_xp,
    )


# --- Hype ---

def test_zero_count_is_zero_percent():
    for max_count in (0, 1, 7, 1000):
        assert hype_intensity(0, max_count) == 0


def test_rated_performer_with_zero_max_is_full():
    assert hype_intensity(1, 0) == 100
    assert hype_intensity(12, 0) == 100


def test_hype_scales_against_scope_max():
    assert hype_intensity(5, 10) == 50
    assert hype_intensity(10, 10) == 100
    assert hype_intensity(1, 3) == 33
    assert hype_intensity(2, 3) == 67


def test_stale_max_never_exceeds_hundred():
    assert hype_intensity(15, 10) == 100


def test_hype_rounds_half_up():
    assert hype_intensity(1, 8) == 13  # 12.5
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3


def test_negative_count_treated_as_zero():
    assert hype_intensity(-3, 10) == 0


def test_max_rating_count():
    aggregates = [make(ScopeConstants.TODAY, count=c) for c in (3, 9, 0)]
    assert max_rating_count(aggregates) == 9
    assert max_rating_count([]) == 0


# --- Trend ---

def test_evaluate_trend_basic_cases():
    assert evaluate_trend(5.0, 5.0) == Trend.STABLE
    assert evaluate_trend(4.9, 4.5) == Trend.UP
    assert evaluate_trend(4.0, 4.5) == Trend.DOWN


def test_evaluate_trend_epsilon_dead_band():
    assert evaluate_trend(4.55, 4.5, epsilon=0.1) == Trend.STABLE
    assert evaluate_trend(4.45, 4.5, epsilon=0.1) == Trend.STABLE
    assert evaluate_trend(4.7, 4.5, epsilon=0.1) == Trend.UP
    assert evaluate_trend(4.3, 4.5, epsilon=0.1) == Trend.DOWN


def test_today_rating_trend_uses_all_time_average():
    today = make(ScopeConstants.TODAY, average=4.9)
    all_time = make(ScopeConstants.ALL_TIME, average=4.5, count=40)
    assert rating_trend_for(today, all_time) == Trend.UP

    worse = make(ScopeConstants.TODAY, average=3.0)
    assert rating_trend_for(worse, all_time) == Trend.DOWN


def test_today_rating_trend_without_history_is_stable():
    today = make(ScopeConstants.TODAY, average=4.9)
    assert rating_trend_for(today, None) == Trend.STABLE
    assert rating_trend_for(today, make(ScopeConstants.ALL_TIME, average=0, count=0)) == Trend.STABLE


def test_all_time_rating_trend_uses_previous_snapshot():
    assert rating_trend_for(make(ScopeConstants.ALL_TIME, average=4.6, baseline_rating=4.5)) == Trend.UP
    assert rating_trend_for(make(ScopeConstants.ALL_TIME, average=4.4, baseline_rating=4.5)) == Trend.DOWN
    assert rating_trend_for(make(ScopeConstants.ALL_TIME, average=4.4)) == Trend.STABLE


def test_unrated_performer_trends_are_stable():
    unrated = make(ScopeConstants.TODAY, average=0, count=0, xp=50, baseline_xp=10)
    all_time = make(ScopeConstants.ALL_TIME, average=4.5, count=40)
    assert rating_trend_for(unrated, all_time) == Trend.STABLE
    assert xp_trend_for(unrated) == Trend.STABLE


def test_xp_trend():
    assert xp_trend_for(make(ScopeConstants.ALL_TIME, xp=1200, baseline_xp=900)) == Trend.UP
    assert xp_trend_for(make(ScopeConstants.ALL_TIME, xp=900, baseline_xp=900)) == Trend.STABLE
    assert xp_trend_for(make(ScopeConstants.ALL_TIME, xp=None, baseline_xp=900)) == Trend.STABLE
    assert xp_trend_for(make(ScopeConstants.ALL_TIME, xp=900)) == Trend.STABLE
