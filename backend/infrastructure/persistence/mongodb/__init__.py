"""MongoDB store implementations."""

from .base import MongoBaseStore
from .leaderboard_store import MongoLeaderboardStore
from .score_store import MongoScoreStore

__all__ = [
    "MongoBaseStore",
    "MongoLeaderboardStore",
    "MongoScoreStore",
]
