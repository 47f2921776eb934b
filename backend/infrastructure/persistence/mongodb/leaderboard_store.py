"""MongoDB implementation of the leaderboard store."""

from typing import Any, Dict, List, Sequence
from uuid import uuid4

from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod
from domain.kiosk.leaderboard import LEADERBOARD_SIZE
from infrastructure.persistence.mongodb.base import IndexSpec, MongoBaseStore


class MongoLeaderboardStore(MongoBaseStore[LeaderboardEntry], ILeaderboardStore):
    """
    MongoDB implementation of ILeaderboardStore.

    Ranking happens in the query: score descending, then created_at
    ascending. created_at is stored as a UTC ISO string, whose string
    order matches chronological order.

    Document Schema:
    {
        "_id": "uuid-string",
        "initials": "ABC",
        "score": 92,
        "user_id": "jsmith" | null,
        "meal_period": "lunch" | null,
        "created_at": "2025-11-12T12:05:00+00:00"
    }

    Indexes:
    - (score desc, created_at asc): top-N query
    """

    @property
    def collection_name(self) -> str:
        return "leaderboard_entries"

    @property
    def indexes(self) -> Sequence[IndexSpec]:
        return [[("score", -1), ("created_at", 1)]]

    def to_document(self, entity: LeaderboardEntry) -> Dict[str, Any]:
        return {
            "_id": str(uuid4()),
            "initials": entity.initials,
            "score": entity.score,
            "user_id": entity.user_id,
            "meal_period": entity.meal_period.value if entity.meal_period else None,
            "created_at": self.datetime_to_iso(entity.created_at),
        }

    def from_document(self, doc: Dict[str, Any]) -> LeaderboardEntry:
        meal_period = doc.get("meal_period")
        return LeaderboardEntry(
            initials=doc["initials"],
            score=int(doc["score"]),
            created_at=self.iso_to_datetime(doc["created_at"]),
            user_id=doc.get("user_id"),
            meal_period=MealPeriod(meal_period) if meal_period else None,
        )

    async def add(self, entry: LeaderboardEntry) -> None:
        await self._insert_one(self.to_document(entry))

    async def get_top(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        docs = await self._find_many(
            {},
            sort=[("score", -1), ("created_at", 1)],
            limit=limit,
        )
        return [self.from_document(doc) for doc in docs]
