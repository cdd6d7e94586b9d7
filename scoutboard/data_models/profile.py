"""
Rater profile data models.

Provides immutable data transfer objects for rater stats, the scout level
table, and the login session.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RaterProfile:
    """Cumulative stats for an authenticated rater."""
    total_sp: int
    ratings_submitted: int = 0
    comments_written: int = 0


@dataclass(frozen=True)
class ScoutLevel:
    """One row of the scout level table."""
    name: str
    min_sp: int


@dataclass(frozen=True)
class TierInfo:
    """Resolved scout level for a rater."""
    level_name: str
    progress_percent: float
    current_level_sp: int      # SP earned inside the current level
    points_to_next: int
    points_for_next_level: int = 0
    next_level_name: Optional[str] = None

    @property
    def is_max_level(self) -> bool:
        return self.next_level_name is None


@dataclass(frozen=True)
class RaterStatus:
    """Rater profile together with its resolved tier."""
    profile: RaterProfile
    tier: TierInfo


@dataclass(frozen=True)
class RaterSession:
    """Persisted login session for a rater."""
    email: str
    venue: str
    first_name: str
    last_name: str
    expiry: int = 0  # Epoch milliseconds, 0 when unknown

    def is_expired(self, now_ms: int) -> bool:
        return bool(self.expiry) and now_ms > self.expiry

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RaterSession":
        return cls(
            email=data.get('email', ''),
            venue=data.get('venue', ''),
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
            expiry=int(data.get('expiry') or 0),
        )
