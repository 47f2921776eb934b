"""Unit tests for SessionEffectExecutor."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from domain.kiosk.core.value_objects import DishKind, MealPeriod
from domain.kiosk.session import PersistBaseline, PersistScore, SideEffect

from application.kiosk.effect_executor import BASELINE_SCORE, SessionEffectExecutor


@pytest.fixture
def executor(score_store, clock):
    return SessionEffectExecutor(score_store, clock=clock)


class TestSessionEffectExecutor:
    """Test SessionEffectExecutor.execute."""

    @pytest.mark.asyncio
    async def test_persist_baseline(self, executor, score_store):
        await executor.execute(PersistBaseline("jdoe1", DishKind.SALAD, 212.5))

        [record] = await score_store.get_by_user("jdoe1")
        assert record.score == BASELINE_SCORE
        assert record.weight_grams == 212.5
        assert record.dish_kind is DishKind.SALAD
        assert record.meal_period is MealPeriod.LUNCH

    @pytest.mark.asyncio
    async def test_baseline_without_user_skipped(self, executor, score_store):
        await executor.execute(PersistBaseline(None, DishKind.PLATE, 300.0))

        assert score_store.count() == 0

    @pytest.mark.asyncio
    async def test_persist_score(self, executor, score_store):
        await executor.execute(PersistScore("jdoe1", DishKind.PLATE, 87, 240.0))

        assert await score_store.get_last_score("jdoe1", MealPeriod.LUNCH) == 87

    @pytest.mark.asyncio
    async def test_meal_period_from_clock(self, score_store):
        executor = SessionEffectExecutor(score_store, clock=lambda: datetime(2025, 1, 1, 18, 0))

        await executor.execute(PersistScore("jdoe1", DishKind.PLATE, 50, 280.0))

        [record] = await score_store.get_by_user("jdoe1")
        assert record.meal_period is MealPeriod.DINNER

    @pytest.mark.asyncio
    async def test_store_errors_propagate(self, clock):
        store = AsyncMock()
        store.save.side_effect = RuntimeError("down")
        executor = SessionEffectExecutor(store, clock=clock)

        with pytest.raises(RuntimeError):
            await executor.execute(PersistScore("jdoe1", DishKind.PLATE, 50, 280.0))

    @pytest.mark.asyncio
    async def test_unknown_effect(self, executor):
        with pytest.raises(TypeError):
            await executor.execute(SideEffect())
