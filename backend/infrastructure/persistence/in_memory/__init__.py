"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.leaderboard_store import InMemoryLeaderboardStore
from infrastructure.persistence.in_memory.score_store import InMemoryScoreStore

__all__ = [
    "InMemoryLeaderboardStore",
    "InMemoryScoreStore",
]
