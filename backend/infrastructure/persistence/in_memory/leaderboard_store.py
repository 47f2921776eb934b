"""In-memory leaderboard store implementation."""

from typing import List

from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.leaderboard import LEADERBOARD_SIZE, rank_entries


class InMemoryLeaderboardStore(ILeaderboardStore):
    """
    In-memory implementation of ILeaderboardStore port.

    Keeps every submitted entry (insertion order) and ranks on read, so
    entries pushed off the board by newer ones are still retained.

    Example:
        >>> store = InMemoryLeaderboardStore()
        >>> await store.add(LeaderboardEntry.create("abc", 90))
        >>> [e.initials for e in await store.get_top()]
        ['ABC']
    """

    def __init__(self) -> None:
        """Initialize store with empty storage."""
        self._entries: List[LeaderboardEntry] = []

    async def add(self, entry: LeaderboardEntry) -> None:
        self._entries.append(entry)

    async def get_top(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        return rank_entries(self._entries, limit=limit)

    def count(self) -> int:
        """Number of stored entries (for testing)."""
        return len(self._entries)

    def clear(self) -> None:
        """Remove all entries (for testing)."""
        self._entries.clear()
