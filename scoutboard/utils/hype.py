"""
Hype meter calculation.

A performer's hype is their rating count as a share of the busiest
performer in the same scope, shown as a whole percentage.
"""

import math
from typing import Iterable

from scoutboard.constants import HypeConstants
from scoutboard.data_models.leaderboard import PerformerAggregate


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as the hype meter displays it."""
    return int(math.floor(value + 0.5))


def hype_intensity(count: int, max_count_in_scope: int) -> int:
    """
    Calculate the hype meter percentage for a performer

    Args:
        count: Number of ratings the performer has in this scope
        max_count_in_scope: Highest rating count of any performer in the scope

    Returns:
        Percentage from 0 to 100
    """
    count = max(0, count)
    # Never below 1, never below this performer's own count
    effective_max = max(1, max_count_in_scope, count)
    percentage = round_half_up(100 * count / effective_max)
    return max(HypeConstants.MIN_PERCENT, min(HypeConstants.MAX_PERCENT, percentage))


def max_rating_count(aggregates: Iterable[PerformerAggregate]) -> int:
    """Highest rating count in a scope, 0 for an empty scope."""
    return max((aggregate.rating_count for aggregate in aggregates), default=0)
