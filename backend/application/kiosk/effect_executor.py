"""Side-effect executor for the kiosk session.

Turns the persistence intents emitted by the state machine into score
store writes. The meal period is resolved when the intent is executed,
not when the transition happened.
"""

import logging
from datetime import datetime
from typing import Callable

from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod
from domain.kiosk.session.effects import PersistBaseline, PersistScore, SideEffect

logger = logging.getLogger(__name__)

BASELINE_SCORE = 0


class SessionEffectExecutor:
    """Executes side-effect intents against the score store.

    Example:
        >>> executor = SessionEffectExecutor(InMemoryScoreStore())
        >>> await executor.execute(PersistScore("jsmith", DishKind.PLATE, 87, 230.0))
    """

    def __init__(
        self,
        score_store: IScoreStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize executor.

        Args:
            score_store: Score store port
            clock: Local wall clock used to resolve the meal period
        """
        self._score_store = score_store
        self._clock = clock

    async def execute(self, effect: SideEffect) -> None:
        """
        Execute one intent.

        Args:
            effect: Intent emitted by the state machine

        Raises:
            PersistenceError: If the store write fails
            TypeError: If the intent type is unknown
        """
        if isinstance(effect, PersistBaseline):
            await self._persist_baseline(effect)
        elif isinstance(effect, PersistScore):
            await self._persist_score(effect)
        else:
            raise TypeError(f"Unsupported side effect: {effect.name}")

    async def _persist_baseline(self, effect: PersistBaseline) -> None:
        if effect.user_id is None:
            logger.warning(
                "Skipping baseline without user",
                extra={"dish_kind": effect.dish_kind.value, "weight_grams": effect.weight_grams},
            )
            return

        record = ScoreRecord(
            user_id=effect.user_id,
            meal_period=MealPeriod.current(self._clock()),
            score=BASELINE_SCORE,
            dish_kind=effect.dish_kind,
            weight_grams=effect.weight_grams,
        )
        await self._score_store.save(record)

        logger.info(
            "Baseline persisted",
            extra={
                "record_id": str(record.id),
                "user_id": record.user_id,
                "meal_period": record.meal_period.value,
                "weight_grams": record.weight_grams,
            },
        )

    async def _persist_score(self, effect: PersistScore) -> None:
        record = ScoreRecord(
            user_id=effect.user_id,
            meal_period=MealPeriod.current(self._clock()),
            score=effect.score,
            dish_kind=effect.dish_kind,
            weight_grams=effect.weight_grams,
        )
        await self._score_store.save(record)

        logger.info(
            "Score persisted",
            extra={
                "record_id": str(record.id),
                "user_id": record.user_id,
                "meal_period": record.meal_period.value,
                "score": record.score,
            },
        )
