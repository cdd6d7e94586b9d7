"""
Profile service for rater stats and scout levels.
"""

import asyncio
import logging
from typing import List, Optional

from scoutboard.data_models.profile import RaterStatus, ScoutLevel
from scoutboard.operations.ingestion import ingest_rater_profile, ingest_scout_levels
from scoutboard.services.base import BaseService
from scoutboard.utils.leaderboard_exceptions import BackendError
from scoutboard.utils.scout_levels import resolve_tier

logger = logging.getLogger(__name__)


class ProfileService(BaseService):
    """Resolves a rater's scout level from their SP and the level table."""

    def __init__(self, client):
        super().__init__(client)
        self._levels: Optional[List[ScoutLevel]] = None

    async def load_levels(self) -> List[ScoutLevel]:
        """
        Fetch and validate the scout level table.

        Raises:
            ConfigurationError: if the table is malformed
        """
        raw_levels = await self.execute_with_retry(self.client.fetch_scout_levels)
        levels = ingest_scout_levels(raw_levels)
        self._levels = levels
        logger.info(f"Loaded {len(levels)} scout levels")
        return levels

    async def get_levels(self) -> List[ScoutLevel]:
        """Level table, loading it on first use."""
        if self._levels is None:
            return await self.load_levels()
        return self._levels

    async def get_rater_status(self, rater_email: str) -> RaterStatus:
        """
        Fetch a rater's stats and resolve their scout level.

        A level table that fails to load degrades to the "New Scout"
        placeholder; a malformed table still raises.
        """
        raw_stats_task = self.execute_with_retry(
            lambda: self.client.fetch_rater_profile(rater_email)
        )
        levels_task = self.get_levels()
        raw_stats, levels = await asyncio.gather(raw_stats_task, levels_task, return_exceptions=True)

        if isinstance(raw_stats, BaseException):
            raise raw_stats
        if isinstance(levels, BackendError):
            logger.error(f"Could not load scout levels: {levels}")
            levels = []
        elif isinstance(levels, BaseException):
            raise levels

        profile = ingest_rater_profile(raw_stats)
        tier = resolve_tier(profile.total_sp, levels)
        return RaterStatus(profile=profile, tier=tier)
