"""Leaderboard queries - snapshot, rank preview and statistics."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.leaderboard import (
    LEADERBOARD_SIZE,
    MIN_LEADERBOARD_SCORE,
    LeaderboardStats,
    leaderboard_stats,
    qualifies_for_leaderboard,
    rank_entries,
    rank_preview,
)
from domain.kiosk.session import SetLeaderboard

from application.kiosk.session import KioskSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetLeaderboardQuery:
    """
    Query: current leaderboard.

    Attributes:
        limit: Maximum number of entries
        refresh: Reload from the store (otherwise use the session snapshot)
    """

    limit: int = LEADERBOARD_SIZE
    refresh: bool = True


@dataclass(frozen=True)
class RankPreviewQuery:
    """
    Query: rank a score would get if submitted now.

    Attributes:
        score: Prospective score
        created_at: Prospective submission time (None means newest)
    """

    score: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class RankPreview:
    """Rank preview result."""

    score: int
    rank: int
    qualifies: bool
    on_board: bool


class GetLeaderboardQueryHandler:
    """Handler for leaderboard read queries.

    Reads go to the store first. When the store fails the session snapshot
    is served instead, so the kiosk screen never goes blank.
    """

    def __init__(
        self,
        session: KioskSession,
        leaderboard_store: ILeaderboardStore,
        min_score: int = MIN_LEADERBOARD_SCORE,
        leaderboard_size: int = LEADERBOARD_SIZE,
    ):
        """
        Initialize handler.

        Args:
            session: Kiosk session holding the snapshot
            leaderboard_store: Leaderboard store port
            min_score: Minimum qualifying score
            leaderboard_size: Board size
        """
        self._session = session
        self._leaderboard_store = leaderboard_store
        self._min_score = min_score
        self._leaderboard_size = leaderboard_size

    async def handle(self, query: GetLeaderboardQuery) -> List[LeaderboardEntry]:
        """
        Return the ranked leaderboard.

        A successful refresh also replaces the session snapshot.

        Args:
            query: GetLeaderboardQuery

        Returns:
            List[LeaderboardEntry]: Ranked entries, at most ``query.limit``
        """
        if query.refresh:
            try:
                top = await self._leaderboard_store.get_top(self._leaderboard_size)
            except Exception as e:
                logger.warning(
                    "Leaderboard refresh failed, serving snapshot",
                    extra={"error": str(e)},
                )
            else:
                self._session.dispatch(SetLeaderboard(tuple(top)))

        return rank_entries(self._session.context.leaderboard, limit=query.limit)

    async def preview(self, query: RankPreviewQuery) -> RankPreview:
        """
        Compute the rank a score would receive against the current snapshot.

        Args:
            query: RankPreviewQuery

        Returns:
            RankPreview
        """
        rank = rank_preview(query.score, self._session.context.leaderboard, query.created_at)
        qualifies = qualifies_for_leaderboard(query.score, self._min_score)
        logger.debug("Rank preview", extra={"score": query.score, "rank": rank})
        return RankPreview(
            score=query.score,
            rank=rank,
            qualifies=qualifies,
            on_board=qualifies and rank <= self._leaderboard_size,
        )

    async def stats(self) -> LeaderboardStats:
        """Summary statistics of the current snapshot."""
        return leaderboard_stats(self._session.context.leaderboard)
