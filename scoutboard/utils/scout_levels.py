"""
Scout level progression.

Raters earn scout points (SP) for ratings and comments. The level table is
an ascending list of SP thresholds; this module finds the rater's current
level and how far they are towards the next one.
"""

from typing import Sequence

from scoutboard.constants import ScoutConstants
from scoutboard.data_models.profile import ScoutLevel, TierInfo
from scoutboard.utils.leaderboard_exceptions import ConfigurationError


def validate_levels(levels: Sequence[ScoutLevel]) -> None:
    """
    Check that a level table can be resolved against.

    Raises:
        ConfigurationError: if a threshold is negative or the thresholds are
            not strictly increasing
    """
    previous = None
    for level in levels:
        if level.min_sp < 0:
            raise ConfigurationError(f"level '{level.name}' has negative minSP {level.min_sp}")
        if previous is not None and level.min_sp <= previous.min_sp:
            raise ConfigurationError(
                f"level '{level.name}' (minSP {level.min_sp}) does not increase "
                f"on '{previous.name}' (minSP {previous.min_sp})"
            )
        previous = level


def resolve_tier(total_sp: int, levels: Sequence[ScoutLevel]) -> TierInfo:
    """
    Resolve a rater's scout level.

    Args:
        total_sp: Rater's cumulative scout points
        levels: Level table sorted ascending by min_sp

    Returns:
        TierInfo for the highest level whose threshold total_sp reaches.
        An empty table gives the "New Scout" placeholder. SP below the lowest
        threshold resolves to the lowest level with no progress.
    """
    if not levels:
        return TierInfo(
            level_name=ScoutConstants.DEFAULT_LEVEL_NAME,
            progress_percent=0,
            current_level_sp=0,
            points_to_next=0,
        )

    # Scan from the top; the first reachable threshold wins
    index = 0
    for i in range(len(levels) - 1, -1, -1):
        if total_sp >= levels[i].min_sp:
            index = i
            break

    current_level = levels[index]
    next_level = levels[index + 1] if index + 1 < len(levels) else None

    points_in_level = max(0, total_sp - current_level.min_sp)

    if next_level is None:
        return TierInfo(
            level_name=current_level.name,
            progress_percent=100,
            current_level_sp=points_in_level,
            points_to_next=0,
        )

    points_for_next_level = next_level.min_sp - current_level.min_sp
    if points_for_next_level > 0:
        progress_percent = min(100, 100 * points_in_level / points_for_next_level)
    else:
        progress_percent = 100

    return TierInfo(
        level_name=current_level.name,
        progress_percent=progress_percent,
        current_level_sp=points_in_level,
        points_to_next=max(0, points_for_next_level - points_in_level),
        points_for_next_level=points_for_next_level,
        next_level_name=next_level.name,
    )
