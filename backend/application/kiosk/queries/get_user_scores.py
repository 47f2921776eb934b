"""Get user scores query - measurement history of one user."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetUserScoresQuery:
    """
    Query: score records of a user, newest first.

    Attributes:
        user_id: User identifier (normalized by the handler)
        meal_period: Restrict to one service window
        limit: Maximum number of records
    """

    user_id: str
    meal_period: Optional[MealPeriod] = None
    limit: int = 50


class GetUserScoresQueryHandler:
    """Handler for GetUserScoresQuery."""

    def __init__(self, score_store: IScoreStore):
        self._score_store = score_store

    async def handle(self, query: GetUserScoresQuery) -> List[ScoreRecord]:
        user_id = query.user_id.strip().lower()
        records = await self._score_store.get_by_user(user_id)
        if query.meal_period is not None:
            records = [r for r in records if r.meal_period is query.meal_period]

        logger.debug(
            "User scores retrieved",
            extra={"user_id": user_id, "count": len(records)},
        )
        return records[: query.limit]
