"""Submit initials command and handler.

Puts the current score on the leaderboard under the user's initials.
The score itself is persisted at most once per measurement.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.exceptions.domain_errors import (
    NoActiveScoreError,
    ScoreNotQualifiedError,
)
from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod
from domain.kiosk.leaderboard import (
    LEADERBOARD_SIZE,
    MIN_LEADERBOARD_SCORE,
    qualifies_for_leaderboard,
    rank_preview,
)
from domain.kiosk.session import (
    LeaderboardEntryAdded,
    ScorePersistFailed,
    ScorePersisted,
    SessionState,
    SetLeaderboard,
)

from application.kiosk.session import KioskSession

logger = logging.getLogger(__name__)

_SCORED_STATES = (SessionState.SCORE, SessionState.LEADERBOARD)


@dataclass(frozen=True)
class SubmitInitialsCommand:
    """
    Command: submit the current score to the leaderboard.

    Attributes:
        initials: Raw initials from the keypad
    """
    initials: str


@dataclass(frozen=True)
class SubmitInitialsResult:
    """Outcome of a submission.

    Attributes:
        entry: Entry that was created
        rank: 1-based rank at submission time
        stored: False when the leaderboard store was unavailable and the
            entry only lives in the session snapshot
    """
    entry: LeaderboardEntry
    rank: int
    stored: bool


class SubmitInitialsCommandHandler:
    """Handler for SubmitInitialsCommand."""

    def __init__(
        self,
        session: KioskSession,
        leaderboard_store: ILeaderboardStore,
        score_store: IScoreStore,
        min_score: int = MIN_LEADERBOARD_SCORE,
        leaderboard_size: int = LEADERBOARD_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize handler.

        Args:
            session: Kiosk session holding the current score
            leaderboard_store: Leaderboard store port
            score_store: Score store port
            min_score: Minimum score accepted on the leaderboard
            leaderboard_size: Number of entries kept in the snapshot
            clock: Local wall clock used to resolve the meal period
        """
        self._session = session
        self._leaderboard_store = leaderboard_store
        self._score_store = score_store
        self._min_score = min_score
        self._leaderboard_size = leaderboard_size
        self._clock = clock

    async def handle(self, command: SubmitInitialsCommand) -> SubmitInitialsResult:
        """
        Execute submission.

        Flow:
        1. Check a qualifying score is on screen
        2. Build the entry and compute its rank against the snapshot
        3. Persist the score if not yet done
        4. Add the entry to the store and reload the snapshot; if the store
           fails, rank the entry into the local snapshot instead

        Args:
            command: SubmitInitialsCommand

        Returns:
            SubmitInitialsResult

        Raises:
            NoActiveScoreError: If no score is displayed
            ScoreNotQualifiedError: If the score is below the minimum
            InvalidLeaderboardEntryError: If the initials are invalid
        """
        ctx = self._session.context
        if self._session.state not in _SCORED_STATES or ctx.current_score is None:
            raise NoActiveScoreError(
                f"No score to submit in state {self._session.state.value}"
            )

        score = ctx.current_score
        if not qualifies_for_leaderboard(score, self._min_score):
            raise ScoreNotQualifiedError(score, self._min_score)

        meal_period = MealPeriod.current(self._clock())
        entry = LeaderboardEntry.create(
            initials=command.initials,
            score=score,
            user_id=ctx.user_id,
            meal_period=meal_period,
            created_at=datetime.now(timezone.utc),
        )
        rank = rank_preview(entry.score, ctx.leaderboard, entry.created_at)

        logger.info(
            "Submitting initials",
            extra={
                "initials": entry.initials,
                "score": entry.score,
                "rank": rank,
                "user_id": ctx.user_id,
            },
        )

        await self._persist_score_once(meal_period)
        stored = await self._store_entry(entry)

        return SubmitInitialsResult(entry=entry, rank=rank, stored=stored)

    async def _persist_score_once(self, meal_period: MealPeriod) -> None:
        ctx = self._session.context
        if ctx.score_persisted or ctx.user_id is None or ctx.dish_kind is None:
            return

        record = ScoreRecord(
            user_id=ctx.user_id,
            meal_period=meal_period,
            score=ctx.current_score,
            dish_kind=ctx.dish_kind,
            weight_grams=ctx.latest_weight(),
        )
        # claimed before the write so an Exit meanwhile does not persist it again
        self._session.dispatch(ScorePersisted())
        try:
            await self._score_store.save(record)
        except Exception as e:
            logger.error(
                "Score persistence failed",
                extra={"user_id": record.user_id, "error": str(e)},
                exc_info=True,
            )
            # a reset in the meantime already cleared the claim
            current = self._session.context
            if (
                self._session.state in _SCORED_STATES
                and current.user_id == record.user_id
                and current.current_score == record.score
            ):
                self._session.dispatch(ScorePersistFailed())

    async def _store_entry(self, entry: LeaderboardEntry) -> bool:
        try:
            await self._leaderboard_store.add(entry)
            top = await self._leaderboard_store.get_top(self._leaderboard_size)
        except Exception as e:
            logger.error(
                "Leaderboard store failed, ranking entry locally",
                extra={"initials": entry.initials, "error": str(e)},
                exc_info=True,
            )
            self._session.dispatch(LeaderboardEntryAdded(entry))
            return False

        self._session.dispatch(SetLeaderboard(tuple(top)))
        return True
