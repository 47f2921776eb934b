"""MongoDB implementation of the score store."""

from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.dish_kind import DishKind
from domain.kiosk.core.value_objects.meal_period import MealPeriod
from infrastructure.persistence.mongodb.base import IndexSpec, MongoBaseStore


class MongoScoreStore(MongoBaseStore[ScoreRecord], IScoreStore):
    """
    MongoDB implementation of IScoreStore.

    Document Schema:
    {
        "_id": "uuid-string",
        "user_id": "jsmith",
        "meal_period": "lunch",
        "score": 87,
        "dish_kind": "plate",
        "weight_grams": 231.5,
        "created_at": "2025-11-12T12:03:00+00:00"
    }

    Indexes:
    - (user_id, meal_period, created_at): previous score lookup
    """

    @property
    def collection_name(self) -> str:
        return "user_scores"

    @property
    def indexes(self) -> Sequence[IndexSpec]:
        return [[("user_id", 1), ("meal_period", 1), ("created_at", -1)]]

    def to_document(self, entity: ScoreRecord) -> Dict[str, Any]:
        return {
            "_id": str(entity.id),
            "user_id": entity.user_id,
            "meal_period": entity.meal_period.value,
            "score": entity.score,
            "dish_kind": entity.dish_kind.value,
            "weight_grams": float(entity.weight_grams),
            "created_at": self.datetime_to_iso(entity.created_at),
        }

    def from_document(self, doc: Dict[str, Any]) -> ScoreRecord:
        return ScoreRecord(
            id=UUID(doc["_id"]),
            user_id=doc["user_id"],
            meal_period=MealPeriod(doc["meal_period"]),
            score=int(doc["score"]),
            dish_kind=DishKind(doc["dish_kind"]),
            weight_grams=float(doc["weight_grams"]),
            created_at=self.iso_to_datetime(doc["created_at"]),
        )

    async def save(self, record: ScoreRecord) -> None:
        await self._insert_one(self.to_document(record))

    async def get_last_score(self, user_id: str, meal_period: MealPeriod) -> Optional[int]:
        doc = await self._find_one(
            {"user_id": user_id, "meal_period": meal_period.value},
            sort=[("created_at", -1)],
        )
        if doc is None:
            return None
        return int(doc["score"])

    async def get_by_user(self, user_id: str) -> List[ScoreRecord]:
        docs = await self._find_many({"user_id": user_id}, sort=[("created_at", -1)])
        return [self.from_document(doc) for doc in docs]
