"""
Client-wide constants for Scoutboard.

This module contains the fixed labels and thresholds used by the ranking,
hype and scout-level code so they live in one place.
"""

class ScopeConstants:
    """Leaderboard scopes."""

    TODAY = "today"
    ALL_TIME = "all_time"

    ALL_SCOPES = (TODAY, ALL_TIME)

    # Backend action used to fetch each scope
    FETCH_ACTIONS = {
        TODAY: "getLeaderboardData",
        ALL_TIME: "getAllTimeLeaderboardData",
    }

    SUMMARY_ACTIONS = {
        TODAY: "getTodaysFeedbackSummary",
        ALL_TIME: "getAllTimeFeedbackSummary",
    }

class RankConstants:
    """Constants for leaderboard rank tiers."""

    # Ordinal labels for the podium positions (index 0, 1, 2)
    TIER_LABELS = ("1st", "2nd", "3rd")

    # Star rating bounds
    MIN_RATING = 1
    MAX_RATING = 5

class HypeConstants:
    """Constants for the hype meter."""

    MIN_PERCENT = 0
    MAX_PERCENT = 100

class ScoutConstants:
    """Constants for scout level progression."""

    # Shown before the level table has loaded
    DEFAULT_LEVEL_NAME = "New Scout"

class FeedbackConstants:
    """Constants for feedback summaries."""

    # An AI summary needs at least this many comments
    MIN_COMMENTS_FOR_SUMMARY = 2
