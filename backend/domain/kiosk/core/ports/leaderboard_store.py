"""ILeaderboardStore port - leaderboard persistence."""

from abc import ABC, abstractmethod
from typing import List

from ..entities.leaderboard_entry import LeaderboardEntry


class ILeaderboardStore(ABC):
    """Port for leaderboard persistence.

    Stores that rank entries themselves must honour the kiosk ordering:
    score descending, ties broken by earlier created_at.
    """

    @abstractmethod
    async def add(self, entry: LeaderboardEntry) -> None:
        """Append a new entry.

        Args:
            entry: Entry to persist

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    async def get_top(self, limit: int = 10) -> List[LeaderboardEntry]:
        """Current top entries in rank order.

        Args:
            limit: Maximum number of entries

        Returns:
            List[LeaderboardEntry]: Ranked snapshot, at most ``limit`` long
        """
        pass
