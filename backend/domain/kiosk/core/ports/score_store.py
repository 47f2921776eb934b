"""IScoreStore port - append-only score persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.score_record import ScoreRecord
from ..value_objects.meal_period import MealPeriod


class IScoreStore(ABC):
    """Port for kiosk score persistence.

    Append-only: the kiosk never reads, modifies and writes back a record.
    Domain layer depends on this abstraction, not on concrete
    implementations (Dependency Inversion Principle).
    """

    @abstractmethod
    async def save(self, record: ScoreRecord) -> None:
        """Append a score record.

        Args:
            record: Measurement to persist

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    async def get_last_score(self, user_id: str, meal_period: MealPeriod) -> Optional[int]:
        """Most recent score of a user for a meal period.

        Args:
            user_id: User identifier
            meal_period: Service window

        Returns:
            Optional[int]: Latest score, None if the user has no record
        """
        pass

    @abstractmethod
    async def get_by_user(self, user_id: str) -> List[ScoreRecord]:
        """All records of a user, newest first.

        Args:
            user_id: User identifier

        Returns:
            List[ScoreRecord]: Records ordered by created_at descending
        """
        pass
