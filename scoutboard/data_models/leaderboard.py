"""
Leaderboard data models.

Provides immutable data transfer objects for performer aggregates and the
ranked leaderboard built from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from scoutboard.utils.leaderboard_exceptions import ValidationError


class Trend(Enum):
    """Direction of a rating or XP value against its baseline."""
    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"


@dataclass(frozen=True)
class PerformerAggregate:
    """Normalized stats for one performer in one scope."""
    id: str
    name: str
    scope: str
    average_rating: float
    rating_count: int
    comment_count: int
    xp: Optional[int] = None
    baseline_rating: Optional[float] = None  # All-time average before the latest rating
    baseline_xp: Optional[int] = None        # XP at the last checkpoint
    bio: Optional[str] = None
    social_link: Optional[str] = None

    @property
    def is_rated(self) -> bool:
        return self.rating_count > 0


@dataclass(frozen=True)
class MergedPerformer:
    """Today and all-time aggregates for the same performer."""
    id: str
    today: Optional[PerformerAggregate] = None
    all_time: Optional[PerformerAggregate] = None

    @property
    def name(self) -> str:
        source = self.today or self.all_time
        return source.name if source else ""


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row."""
    position: int
    aggregate: PerformerAggregate
    tier: Optional[str]
    hype_percent: int
    rating_trend: Trend
    xp_trend: Trend
    can_summarize: bool


@dataclass(frozen=True)
class LeaderboardPage:
    """Ranked leaderboard for one venue and scope."""
    scope: str
    venue_name: str
    entries: List[LeaderboardEntry]
    max_rating_count: int
    dropped: List[ValidationError] = field(default_factory=list)

    @property
    def podium(self) -> List[LeaderboardEntry]:
        return [entry for entry in self.entries if entry.tier is not None]

    @property
    def is_empty(self) -> bool:
        return not self.entries
