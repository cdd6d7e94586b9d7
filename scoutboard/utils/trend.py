"""
Trend evaluation for leaderboard indicators.

A trend compares a current value with a baseline and yields UP, DOWN or
STABLE. The backend delivers raw current and baseline numbers and the
signal is always derived here, never taken from the backend.
"""

from typing import Optional

from scoutboard.constants import ScopeConstants
from scoutboard.data_models.leaderboard import PerformerAggregate, Trend


def evaluate_trend(current: float, baseline: float, epsilon: float = 0.0) -> Trend:
    """
    Compare a value with its baseline.

    Args:
        current: Present value
        baseline: Value to compare against
        epsilon: Dead band around the baseline treated as no change

    Returns:
        Trend.UP, Trend.DOWN or Trend.STABLE
    """
    if current > baseline + epsilon:
        return Trend.UP
    if current < baseline - epsilon:
        return Trend.DOWN
    return Trend.STABLE


def rating_trend_for(
    aggregate: PerformerAggregate,
    all_time: Optional[PerformerAggregate] = None,
    epsilon: float = 0.0
) -> Trend:
    """
    Rating trend for a performer in its own scope.

    Today's average is compared with the performer's all-time average; the
    all-time average is compared with its previous snapshot.
    """
    if not aggregate.is_rated:
        return Trend.STABLE

    if aggregate.scope == ScopeConstants.TODAY:
        if all_time is None or not all_time.is_rated:
            return Trend.STABLE
        baseline = all_time.average_rating
    else:
        if aggregate.baseline_rating is None:
            return Trend.STABLE
        baseline = aggregate.baseline_rating

    return evaluate_trend(aggregate.average_rating, baseline, epsilon)


def xp_trend_for(aggregate: PerformerAggregate, epsilon: float = 0.0) -> Trend:
    """XP trend against the checkpoint carried on the aggregate."""
    if not aggregate.is_rated:
        return Trend.STABLE
    if aggregate.xp is None or aggregate.baseline_xp is None:
        return Trend.STABLE
    return evaluate_trend(aggregate.xp, aggregate.baseline_xp, epsilon)
