"""In-memory score store implementation.

Provides an in-memory implementation of IScoreStore for tests and
single-kiosk setups without a database.
"""

from typing import List, Optional

from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod


class InMemoryScoreStore(IScoreStore):
    """
    In-memory implementation of IScoreStore port.

    Records are frozen dataclasses, so they are stored as-is without copies.

    Thread safety: NOT thread-safe (single event loop only)
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> store = InMemoryScoreStore()
        >>> await store.save(record)
        >>> await store.get_last_score(record.user_id, record.meal_period)
        87
    """

    def __init__(self) -> None:
        """Initialize store with empty storage."""
        self._records: List[ScoreRecord] = []

    async def save(self, record: ScoreRecord) -> None:
        self._records.append(record)

    async def get_last_score(self, user_id: str, meal_period: MealPeriod) -> Optional[int]:
        matching = [
            r for r in self._records
            if r.user_id == user_id and r.meal_period is meal_period
        ]
        if not matching:
            return None
        return max(matching, key=lambda r: r.created_at).score

    async def get_by_user(self, user_id: str) -> List[ScoreRecord]:
        records = [r for r in self._records if r.user_id == user_id]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def count(self) -> int:
        """Number of stored records (for testing)."""
        return len(self._records)

    def clear(self) -> None:
        """Remove all records (for testing)."""
        self._records.clear()
