"""
Leaderboard service.

Fetches today's and all-time stats for a venue and turns them into ranked
LeaderboardPage objects with podium tiers, hype percentages and trends.
Pages are rebuilt on every call; the computation is cheap and deterministic.
"""

import asyncio
from typing import Dict, Optional, Tuple

from scoutboard.config import Config
from scoutboard.constants import FeedbackConstants, ScopeConstants
from scoutboard.data_models.leaderboard import LeaderboardEntry, LeaderboardPage, PerformerAggregate
from scoutboard.operations.ingestion import IngestionResult, ingest, merge_scopes
from scoutboard.services.base import BaseService
from scoutboard.utils.hype import hype_intensity, max_rating_count
from scoutboard.utils.logger import setup_logger
from scoutboard.utils.ranking import RankingUtility
from scoutboard.utils.trend import rating_trend_for, xp_trend_for

logger = setup_logger(__name__)


def build_page(
    result: IngestionResult,
    venue_name: str,
    scope: str,
    all_time_by_id: Optional[Dict[str, PerformerAggregate]] = None,
    epsilon: float = 0.0
) -> LeaderboardPage:
    """
    Rank ingested aggregates and derive the per-entry display stats.

    Args:
        result: Ingestion result for this scope
        venue_name: Venue the stats belong to
        scope: ScopeConstants.TODAY or ScopeConstants.ALL_TIME
        all_time_by_id: All-time aggregates, the baseline for today's rating trend
        epsilon: Dead band for trend evaluation
    """
    all_time_by_id = all_time_by_id or {}
    ranked = RankingUtility.rank(result.aggregates)
    max_count = max_rating_count(ranked)

    entries = []
    for index, (aggregate, tier) in enumerate(RankingUtility.assign_tiers(ranked)):
        entries.append(LeaderboardEntry(
            position=index + 1,
            aggregate=aggregate,
            tier=tier,
            hype_percent=hype_intensity(aggregate.rating_count, max_count),
            rating_trend=rating_trend_for(aggregate, all_time_by_id.get(aggregate.id), epsilon),
            xp_trend=xp_trend_for(aggregate, epsilon),
            can_summarize=aggregate.comment_count >= FeedbackConstants.MIN_COMMENTS_FOR_SUMMARY,
        ))

    return LeaderboardPage(
        scope=scope,
        venue_name=venue_name,
        entries=entries,
        max_rating_count=max_count,
        dropped=list(result.errors),
    )


class LeaderboardService(BaseService):
    """Service for building today and all-time leaderboards."""

    def __init__(self, client, trend_epsilon: float = None):
        super().__init__(client)
        self.trend_epsilon = Config.TREND_EPSILON if trend_epsilon is None else trend_epsilon

    async def _fetch_scope(self, venue_name: str, scope: str) -> IngestionResult:
        raw_records = await self.execute_with_retry(
            lambda: self.client.fetch_aggregates(venue_name, scope)
        )
        result = ingest(raw_records, scope)
        for error in result.errors:
            logger.warning(f"Dropped {scope} leaderboard record for {venue_name}: {error}")
        return result

    async def get_boards(self, venue_name: str) -> Tuple[LeaderboardPage, LeaderboardPage]:
        """
        Build both leaderboards for a venue.

        Returns:
            (today_page, all_time_page)
        """
        today_result, all_time_result = await asyncio.gather(
            self._fetch_scope(venue_name, ScopeConstants.TODAY),
            self._fetch_scope(venue_name, ScopeConstants.ALL_TIME),
        )

        merged = merge_scopes(today_result.aggregates, all_time_result.aggregates)
        all_time_by_id = {
            performer_id: performer.all_time
            for performer_id, performer in merged.items()
            if performer.all_time is not None
        }

        today_page = build_page(
            today_result, venue_name, ScopeConstants.TODAY, all_time_by_id, self.trend_epsilon
        )
        all_time_page = build_page(
            all_time_result, venue_name, ScopeConstants.ALL_TIME, epsilon=self.trend_epsilon
        )

        logger.info(
            f"Built leaderboards for {venue_name}: {len(today_page.entries)} today, "
            f"{len(all_time_page.entries)} all-time"
        )
        return today_page, all_time_page

    async def get_page(self, venue_name: str, scope: str) -> LeaderboardPage:
        """Build a single leaderboard."""
        if not RankingUtility.validate_scope(scope):
            raise ValueError(f"scope must be one of {ScopeConstants.ALL_SCOPES}")

        if scope == ScopeConstants.ALL_TIME:
            # All-time trends need no other scope
            result = await self._fetch_scope(venue_name, scope)
            return build_page(result, venue_name, scope, epsilon=self.trend_epsilon)

        today_page, _ = await self.get_boards(venue_name)
        return today_page
