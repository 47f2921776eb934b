"""Unit tests for in-memory score and leaderboard stores."""

from datetime import datetime, timedelta, timezone

import pytest

from domain.kiosk.core.entities import LeaderboardEntry, ScoreRecord
from domain.kiosk.core.value_objects import DishKind, MealPeriod
from infrastructure.persistence.in_memory import InMemoryLeaderboardStore, InMemoryScoreStore

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def record(score, period=MealPeriod.LUNCH, minutes=0, user_id="jdoe1"):
    return ScoreRecord(
        user_id,
        period,
        score,
        DishKind.PLATE,
        250.0,
        created_at=T0 + timedelta(minutes=minutes),
    )


class TestInMemoryScoreStore:
    """Test InMemoryScoreStore."""

    @pytest.mark.asyncio
    async def test_last_score_is_most_recent(self):
        store = InMemoryScoreStore()
        await store.save(record(80, minutes=10))
        await store.save(record(40, minutes=20))
        await store.save(record(90, minutes=5))

        assert await store.get_last_score("jdoe1", MealPeriod.LUNCH) == 40

    @pytest.mark.asyncio
    async def test_last_score_scoped_by_meal_and_user(self):
        store = InMemoryScoreStore()
        await store.save(record(80, period=MealPeriod.DINNER))
        await store.save(record(70, user_id="other"))

        assert await store.get_last_score("jdoe1", MealPeriod.LUNCH) is None

    @pytest.mark.asyncio
    async def test_get_by_user_newest_first(self):
        store = InMemoryScoreStore()
        await store.save(record(1, minutes=1))
        await store.save(record(3, minutes=3))
        await store.save(record(2, minutes=2))

        assert [r.score for r in await store.get_by_user("jdoe1")] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_clear(self):
        store = InMemoryScoreStore()
        await store.save(record(50))

        store.clear()

        assert store.count() == 0


class TestInMemoryLeaderboardStore:
    """Test InMemoryLeaderboardStore."""

    @pytest.mark.asyncio
    async def test_top_is_ranked(self):
        store = InMemoryLeaderboardStore()
        await store.add(LeaderboardEntry("LAT", 80, T0 + timedelta(minutes=5)))
        await store.add(LeaderboardEntry("TOP", 95, T0))
        await store.add(LeaderboardEntry("EAR", 80, T0))

        top = await store.get_top()

        assert [e.initials for e in top] == ["TOP", "EAR", "LAT"]

    @pytest.mark.asyncio
    async def test_entries_beyond_limit_retained(self):
        store = InMemoryLeaderboardStore()
        for i in range(12):
            await store.add(LeaderboardEntry("ABC", 50 + i, T0))

        assert len(await store.get_top()) == 10
        assert len(await store.get_top(limit=20)) == 12
        assert store.count() == 12
