"""
Tests for scout level resolution and level table validation.
"""

import pytest

from scoutboard.data_models.profile import ScoutLevel
from scoutboard.utils.leaderboard_exceptions import ConfigurationError
from scoutboard.utils.scout_levels import resolve_tier, validate_levels

LEVELS = [ScoutLevel("New", 0), ScoutLevel("Rising", 100), ScoutLevel("Star", 500)]


def test_zero_sp_is_first_level():
    tier = resolve_tier(0, LEVELS)
    assert tier.level_name == "New"
    assert tier.progress_percent == 0
    assert tier.points_to_next == 100
    assert tier.next_level_name == "Rising"


def test_mid_level_progress():
    tier = resolve_tier(150, LEVELS)
    assert tier.level_name == "Rising"
    assert tier.current_level_sp == 50
    assert tier.points_for_next_level == 400
    assert tier.progress_percent == pytest.approx(12.5)
    assert tier.points_to_next == 350


def test_exact_threshold_starts_new_level():
    tier = resolve_tier(100, LEVELS)
    assert tier.level_name == "Rising"
    assert tier.progress_percent == 0
    assert tier.points_to_next == 400


def test_top_level_is_complete():
    tier = resolve_tier(999, LEVELS)
    assert tier.level_name == "Star"
    assert tier.progress_percent == 100
    assert tier.points_to_next == 0
    assert tier.is_max_level


def test_empty_table_gives_new_scout():
    tier = resolve_tier(250, [])
    assert tier.level_name == "New Scout"
    assert tier.progress_percent == 0
    assert tier.points_to_next == 0


def test_sp_below_floor_clamps_to_lowest_level():
    levels = [ScoutLevel("Bronze", 50), ScoutLevel("Silver", 150)]
    tier = resolve_tier(10, levels)
    assert tier.level_name == "Bronze"
    assert tier.current_level_sp == 0
    assert tier.progress_percent == 0
    assert tier.points_to_next == 100

    assert resolve_tier(-5, LEVELS).level_name == "New"


def test_shared_threshold_resolves_to_later_level():
    levels = [ScoutLevel("New", 0), ScoutLevel("A", 100), ScoutLevel("B", 100)]
    assert resolve_tier(120, levels).level_name == "B"


def test_resolver_does_not_mutate_table():
    levels = list(LEVELS)
    resolve_tier(300, levels)
    assert levels == LEVELS


def test_validate_levels_accepts_increasing_table():
    validate_levels(LEVELS)
    validate_levels([])


def test_validate_levels_rejects_duplicates_and_disorder():
    with pytest.raises(ConfigurationError):
        validate_levels([ScoutLevel("New", 0), ScoutLevel("Rising", 100), ScoutLevel("Also", 100)])
    with pytest.raises(ConfigurationError):
        validate_levels([ScoutLevel("Star", 500), ScoutLevel("New", 0)])


def test_validate_levels_rejects_negative_threshold():
    with pytest.raises(ConfigurationError) as exc_info:
        validate_levels([ScoutLevel("Debt", -10)])
    assert "negative" in exc_info.value.reason
