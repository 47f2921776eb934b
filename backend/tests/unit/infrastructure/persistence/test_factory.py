"""Unit tests for store factory.

Tests environment-based store selection with in-memory default.
"""

import pytest
from infrastructure.persistence.factory import (
    create_leaderboard_store,
    create_score_store,
    get_leaderboard_store,
    get_score_store,
    reset_stores,
)
from infrastructure.persistence.in_memory import InMemoryLeaderboardStore, InMemoryScoreStore


@pytest.fixture(autouse=True)
def _reset_singletons():
    reset_stores()
    yield
    reset_stores()


class TestScoreStoreFactory:
    """Test create_score_store() factory function."""

    def test_default_to_inmemory_when_env_not_set(self, monkeypatch):
        """Should return in-memory store when SCORE_STORE not set."""
        monkeypatch.delenv("SCORE_STORE", raising=False)
        store = create_score_store()
        assert isinstance(store, InMemoryScoreStore)

    def test_case_insensitive_selection(self, monkeypatch):
        """Should handle case-insensitive backend names."""
        monkeypatch.setenv("SCORE_STORE", "InMemory")
        assert isinstance(create_score_store(), InMemoryScoreStore)

    def test_mongodb_creates_mongo_store(self, monkeypatch):
        """Should create MongoScoreStore when mongodb mode."""
        from infrastructure.persistence.mongodb.score_store import MongoScoreStore

        monkeypatch.setenv("SCORE_STORE", "mongodb")
        monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")

        store = create_score_store()
        assert isinstance(store, MongoScoreStore)

    def test_mongodb_without_uri_raises_error(self, monkeypatch):
        """Should raise ValueError when mongodb but no MONGODB_URI."""
        monkeypatch.setenv("SCORE_STORE", "mongodb")
        monkeypatch.delenv("MONGODB_URI", raising=False)

        with pytest.raises(ValueError, match="MONGODB_URI not set"):
            create_score_store()

    def test_unknown_backend_raises_error(self, monkeypatch):
        monkeypatch.setenv("SCORE_STORE", "redis")

        with pytest.raises(ValueError, match="SCORE_STORE must be one of"):
            create_score_store()


class TestLeaderboardStoreFactory:
    """Test create_leaderboard_store() factory function."""

    def test_default_to_inmemory(self, monkeypatch):
        monkeypatch.delenv("LEADERBOARD_STORE", raising=False)
        assert isinstance(create_leaderboard_store(), InMemoryLeaderboardStore)

    def test_mongodb_creates_mongo_store(self, monkeypatch):
        from infrastructure.persistence.mongodb.leaderboard_store import MongoLeaderboardStore

        monkeypatch.setenv("LEADERBOARD_STORE", "mongodb")
        monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")

        assert isinstance(create_leaderboard_store(), MongoLeaderboardStore)


class TestSingletons:
    """Test get_*_store() singletons."""

    def test_singleton_returns_same_instance(self, monkeypatch):
        monkeypatch.delenv("SCORE_STORE", raising=False)
        monkeypatch.delenv("LEADERBOARD_STORE", raising=False)

        assert get_score_store() is get_score_store()
        assert get_leaderboard_store() is get_leaderboard_store()

    def test_reset_forces_recreation(self, monkeypatch):
        monkeypatch.delenv("SCORE_STORE", raising=False)
        first = get_score_store()

        reset_stores()

        assert get_score_store() is not first
