"""
Shared ranking utilities for the today and all-time leaderboards.

Both scopes are ordered by the same comparison policy so every view of the
leaderboard agrees on who is ahead.
"""

from typing import List, Optional, Sequence, Tuple

from scoutboard.constants import RankConstants, ScopeConstants
from scoutboard.data_models.leaderboard import PerformerAggregate


class RankingUtility:
    """Shared ranking logic for leaderboard ordering and podium tiers."""

    @staticmethod
    def sort_key(aggregate: PerformerAggregate) -> Tuple[bool, float, int]:
        """
        Sort key for ascending sort that yields the leaderboard order.

        Unrated performers always sort after rated ones; an average of 0 for
        "no ratings" is not the same as a genuinely low rating.
        """
        return (
            not aggregate.is_rated,
            -aggregate.average_rating,
            -aggregate.rating_count,
        )

    @staticmethod
    def rank(aggregates: Sequence[PerformerAggregate]) -> List[PerformerAggregate]:
        """
        Order aggregates into a leaderboard.

        Average rating descending, then rating count descending, unrated
        performers last. Ties beyond that keep their input order.

        Args:
            aggregates: Validated aggregates for one scope

        Returns:
            New list in leaderboard order; an empty input gives an empty list
        """
        return sorted(aggregates, key=RankingUtility.sort_key)

    @staticmethod
    def assign_tiers(
        ranked: Sequence[PerformerAggregate]
    ) -> List[Tuple[PerformerAggregate, Optional[str]]]:
        """Pair each ranked aggregate with its podium label, if any."""
        tiered = []
        for index, aggregate in enumerate(ranked):
            tier = None
            if index < len(RankConstants.TIER_LABELS) and aggregate.is_rated:
                tier = RankConstants.TIER_LABELS[index]
            tiered.append((aggregate, tier))
        return tiered

    @staticmethod
    def validate_scope(scope: str) -> bool:
        """Validate scope parameter against allowed values."""
        return scope in ScopeConstants.ALL_SCOPES
