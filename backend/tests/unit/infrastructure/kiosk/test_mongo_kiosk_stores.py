"""
Unit tests for MongoDB kiosk stores.

Uses a mocked motor client: no database is contacted.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from domain.kiosk.core.entities import LeaderboardEntry, ScoreRecord
from domain.kiosk.core.exceptions import PersistenceError
from domain.kiosk.core.value_objects import DishKind, MealPeriod
from infrastructure.persistence.mongodb import MongoLeaderboardStore, MongoScoreStore


@pytest.fixture
def mock_collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.create_index = AsyncMock()

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    return collection


@pytest.fixture
def mock_client(mock_collection):
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = mock_collection
    return client


@pytest.fixture
def sample_record():
    return ScoreRecord(
        user_id="jdoe1",
        meal_period=MealPeriod.DINNER,
        score=64,
        dish_kind=DishKind.SALAD,
        weight_grams=231.5,
        created_at=datetime(2025, 11, 12, 19, 0, tzinfo=timezone(timedelta(hours=1))),
    )


class TestMongoScoreStore:
    """Test MongoScoreStore."""

    def test_document_mapping(self, mock_client, sample_record):
        store = MongoScoreStore(client=mock_client)

        doc = store.to_document(sample_record)

        assert doc["_id"] == str(sample_record.id)
        assert doc["meal_period"] == "dinner"
        assert doc["dish_kind"] == "salad"
        assert doc["created_at"] == "2025-11-12T18:00:00+00:00"
        assert store.from_document(doc) == sample_record

    @pytest.mark.asyncio
    async def test_save_inserts(self, mock_client, mock_collection, sample_record):
        store = MongoScoreStore(client=mock_client)

        await store.save(sample_record)

        mock_collection.insert_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_last_score_query(self, mock_client, mock_collection):
        mock_collection.find_one.return_value = {"score": 77}
        store = MongoScoreStore(client=mock_client)

        assert await store.get_last_score("jdoe1", MealPeriod.LUNCH) == 77
        mock_collection.find_one.assert_awaited_once_with(
            {"user_id": "jdoe1", "meal_period": "lunch"},
            sort=[("created_at", -1)],
        )

    @pytest.mark.asyncio
    async def test_last_score_missing(self, mock_client):
        store = MongoScoreStore(client=mock_client)

        assert await store.get_last_score("jdoe1", MealPeriod.LUNCH) is None

    @pytest.mark.asyncio
    async def test_errors_become_persistence_errors(self, mock_client, mock_collection, sample_record):
        mock_collection.insert_one.side_effect = RuntimeError("network")
        store = MongoScoreStore(client=mock_client)

        with pytest.raises(PersistenceError):
            await store.save(sample_record)

    @pytest.mark.asyncio
    async def test_initialize_creates_indexes(self, mock_client, mock_collection):
        store = MongoScoreStore(client=mock_client)

        await store.initialize()

        mock_collection.create_index.assert_awaited_once_with(
            [("user_id", 1), ("meal_period", 1), ("created_at", -1)]
        )

    def test_requires_uri_without_client(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URI", raising=False)

        with pytest.raises(ValueError, match="MONGODB_URI"):
            MongoScoreStore()


class TestMongoLeaderboardStore:
    """Test MongoLeaderboardStore."""

    def test_document_mapping(self, mock_client):
        store = MongoLeaderboardStore(client=mock_client)
        entry = LeaderboardEntry(
            "ABC", 92, datetime(2025, 11, 12, 12, 5, tzinfo=timezone.utc), None, MealPeriod.LUNCH
        )

        doc = store.to_document(entry)

        assert doc["initials"] == "ABC"
        assert doc["meal_period"] == "lunch"
        assert store.from_document(doc) == entry

    @pytest.mark.asyncio
    async def test_get_top_sorted_in_query(self, mock_client, mock_collection):
        cursor = mock_collection.find.return_value
        cursor.to_list.return_value = [
            {"initials": "ABC", "score": 92, "created_at": "2025-11-12T12:05:00+00:00"},
        ]
        store = MongoLeaderboardStore(client=mock_client)

        top = await store.get_top(5)

        assert [e.initials for e in top] == ["ABC"]
        cursor.sort.assert_called_once_with([("score", -1), ("created_at", 1)])
        cursor.limit.assert_called_once_with(5)
