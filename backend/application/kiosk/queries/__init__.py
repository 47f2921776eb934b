"""CQRS Queries for the kiosk."""

from .get_leaderboard import (
    GetLeaderboardQuery,
    GetLeaderboardQueryHandler,
    RankPreview,
    RankPreviewQuery,
)
from .get_user_scores import GetUserScoresQuery, GetUserScoresQueryHandler

__all__ = [
    "GetLeaderboardQuery",
    "GetLeaderboardQueryHandler",
    "RankPreview",
    "RankPreviewQuery",
    "GetUserScoresQuery",
    "GetUserScoresQueryHandler",
]
