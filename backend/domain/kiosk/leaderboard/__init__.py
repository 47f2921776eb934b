"""Leaderboard ranking rules."""

from .ranker import (
    LEADERBOARD_SIZE,
    MIN_LEADERBOARD_SCORE,
    LeaderboardStats,
    insert,
    leaderboard_stats,
    qualifies_for_leaderboard,
    rank_entries,
    rank_preview,
)

__all__ = [
    "LEADERBOARD_SIZE",
    "MIN_LEADERBOARD_SCORE",
    "LeaderboardStats",
    "insert",
    "leaderboard_stats",
    "qualifies_for_leaderboard",
    "rank_entries",
    "rank_preview",
]
