"""Store Factory for Persistence Layer.

Environment-based store selection with in-memory as the default.
Strategy:
- .env (runtime): SCORE_STORE=mongodb, LEADERBOARD_STORE=mongodb
- .env.test (pytest): inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

Usage:
    from infrastructure.persistence.factory import get_score_store

    store = create_score_store()  # inmemory or mongodb based on env
    store = get_score_store()     # Singleton instance
"""

import os
from typing import Optional

from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.core.ports.score_store import IScoreStore
from infrastructure.config import get_mongodb_uri
from infrastructure.persistence.in_memory.leaderboard_store import InMemoryLeaderboardStore
from infrastructure.persistence.in_memory.score_store import InMemoryScoreStore

_BACKENDS = ("inmemory", "mongodb")


def _backend(env_var: str) -> str:
    mode = os.getenv(env_var, "inmemory").strip().lower()
    if mode not in _BACKENDS:
        raise ValueError(f"{env_var} must be one of {_BACKENDS}, got '{mode}'")
    if mode == "mongodb" and not get_mongodb_uri():
        raise ValueError(
            f"{env_var}=mongodb but MONGODB_URI not set. "
            f"Set MONGODB_URI in .env or use {env_var}=inmemory"
        )
    return mode


def create_score_store() -> IScoreStore:
    """Create score store based on SCORE_STORE env var.

    Values:
        - "inmemory": In-memory store (default, transient)
        - "mongodb": MongoDB store (persistent, requires MONGODB_URI)

    Raises:
        ValueError: If the value is unknown or mongodb lacks MONGODB_URI
    """
    if _backend("SCORE_STORE") == "mongodb":
        from infrastructure.persistence.mongodb.score_store import MongoScoreStore

        return MongoScoreStore()
    return InMemoryScoreStore()


def create_leaderboard_store() -> ILeaderboardStore:
    """Create leaderboard store based on LEADERBOARD_STORE env var.

    Same values and errors as ``create_score_store``.
    """
    if _backend("LEADERBOARD_STORE") == "mongodb":
        from infrastructure.persistence.mongodb.leaderboard_store import MongoLeaderboardStore

        return MongoLeaderboardStore()
    return InMemoryLeaderboardStore()


# Singleton instances (lazy initialization)
_score_store: Optional[IScoreStore] = None
_leaderboard_store: Optional[ILeaderboardStore] = None


def get_score_store() -> IScoreStore:
    """Get singleton score store instance."""
    global _score_store
    if _score_store is None:
        _score_store = create_score_store()
    return _score_store


def get_leaderboard_store() -> ILeaderboardStore:
    """Get singleton leaderboard store instance."""
    global _leaderboard_store
    if _leaderboard_store is None:
        _leaderboard_store = create_leaderboard_store()
    return _leaderboard_store


def reset_stores() -> None:
    """Reset singleton store instances.

    Useful for testing to force re-creation with different env vars.
    """
    global _score_store, _leaderboard_store
    _score_store = None
    _leaderboard_store = None
