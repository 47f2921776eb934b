"""Identify user command and handler.

Validates the id typed on the welcome screen, assigns the study arm and
loads the user's previous score for the current meal period.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from domain.kiosk.core.exceptions.domain_errors import InvalidIdentityError, WeightNotReadyError
from domain.kiosk.core.ports.identity_validator import IIdentityValidator
from domain.kiosk.core.ports.score_store import IScoreStore
from domain.kiosk.core.value_objects.meal_period import MealPeriod
from domain.kiosk.core.value_objects.treatment_group import TreatmentGroup
from domain.kiosk.scoring.stability_gate import (
    DEFAULT_STD_DEV_THRESHOLD,
    DEFAULT_WINDOW_MS,
    is_weight_ready,
)
from domain.kiosk.session import (
    DEFAULT_INVALID_ID_MESSAGE,
    IdentifyInvalid,
    IdentifyValid,
    SessionState,
    SetPreviousScore,
)

from application.kiosk.session import KioskSession

logger = logging.getLogger(__name__)

EMPTY_ID_MESSAGE = "Please enter your user ID."
SESSION_IN_PROGRESS_MESSAGE = "Session in progress"
WEIGHT_NOT_READY_MESSAGE = "Place your dish on the scale and wait for the weight to settle."


@dataclass(frozen=True)
class IdentifyUserCommand:
    """
    Command: identify the user standing at the kiosk.

    Attributes:
        user_id: Id as typed (normalized by the handler)
    """
    user_id: str


@dataclass(frozen=True)
class IdentifyUserResult:
    """Outcome of identification."""
    user_id: str
    allowed: bool
    treatment_group: Optional[TreatmentGroup] = None
    previous_score: Optional[int] = None
    message: Optional[str] = None


class IdentifyUserCommandHandler:
    """Handler for IdentifyUserCommand."""

    def __init__(
        self,
        session: KioskSession,
        validator: IIdentityValidator,
        score_store: IScoreStore,
        treatment_split_enabled: bool = True,
        clock: Callable[[], datetime] = datetime.now,
        stability_threshold: float = DEFAULT_STD_DEV_THRESHOLD,
        stability_window_ms: int = DEFAULT_WINDOW_MS,
    ):
        """
        Initialize handler.

        Args:
            session: Kiosk session receiving the resulting events
            validator: Identity validator port
            score_store: Score store port (previous score lookup)
            treatment_split_enabled: False places everybody in TREATMENT
            clock: Local wall clock used to resolve the meal period
            stability_threshold: Max std dev (grams) of a settled weight
            stability_window_ms: Look-back window of the stability gate
        """
        self._session = session
        self._validator = validator
        self._score_store = score_store
        self._treatment_split_enabled = treatment_split_enabled
        self._clock = clock
        self._stability_threshold = stability_threshold
        self._stability_window_ms = stability_window_ms

    async def handle(self, command: IdentifyUserCommand) -> IdentifyUserResult:
        """
        Execute identification.

        Flow:
        1. Require a settled, non-zero weight on the scale
        2. Normalize and validate the id (validator failures count as rejection)
        3. Dispatch IdentifyValid with the assigned group, or IdentifyInvalid
        4. Load the previous score and dispatch SetPreviousScore

        Another identification may complete while this one awaits the
        validator; only the one that moves the session out of WELCOME is
        reported as allowed.

        Args:
            command: IdentifyUserCommand

        Returns:
            IdentifyUserResult

        Raises:
            WeightNotReadyError: If no settled dish weight is on the scale
        """
        user_id = command.user_id.strip().lower()

        if self._session.state is not SessionState.WELCOME:
            return self._in_progress(user_id)

        if not self.weight_ready():
            raise WeightNotReadyError(WEIGHT_NOT_READY_MESSAGE)

        try:
            await self._check(user_id)
        except InvalidIdentityError as e:
            message = EMPTY_ID_MESSAGE if not user_id else DEFAULT_INVALID_ID_MESSAGE
            logger.info(
                "User rejected",
                extra={"user_id": user_id, "reason": e.reason},
            )
            self._session.dispatch(IdentifyInvalid(user_id, message))
            return IdentifyUserResult(user_id=user_id, allowed=False, message=message)

        group = (
            TreatmentGroup.assign(user_id)
            if self._treatment_split_enabled
            else TreatmentGroup.TREATMENT
        )
        result = self._session.dispatch(IdentifyValid(user_id, group))
        if result.state is not SessionState.DISH_SELECT or result.context.user_id != user_id:
            return self._in_progress(user_id)

        previous_score = await self._previous_score(user_id)
        if self._owns_session(user_id):
            self._session.dispatch(SetPreviousScore(previous_score))

        logger.info(
            "User identified",
            extra={
                "user_id": user_id,
                "treatment_group": group.value,
                "previous_score": previous_score,
            },
        )
        return IdentifyUserResult(
            user_id=user_id,
            allowed=True,
            treatment_group=group,
            previous_score=previous_score,
        )

    def weight_ready(self) -> bool:
        """True when the scale holds a settled, non-zero weight."""
        return is_weight_ready(
            self._session.context.readings,
            std_dev_threshold=self._stability_threshold,
            window_ms=self._stability_window_ms,
        )

    def _owns_session(self, user_id: str) -> bool:
        return (
            self._session.state is not SessionState.WELCOME
            and self._session.context.user_id == user_id
        )

    def _in_progress(self, user_id: str) -> IdentifyUserResult:
        logger.warning(
            "Identification outside welcome screen ignored",
            extra={"user_id": user_id, "state": self._session.state.value},
        )
        return IdentifyUserResult(
            user_id=user_id, allowed=False, message=SESSION_IN_PROGRESS_MESSAGE
        )

    async def _check(self, user_id: str) -> None:
        if not user_id:
            raise InvalidIdentityError(user_id, "empty")
        try:
            allowed = await self._validator.is_allowed(user_id)
        except Exception as e:
            logger.error(
                "Identity validator failed",
                extra={"user_id": user_id, "error": str(e)},
                exc_info=True,
            )
            raise InvalidIdentityError(user_id, "validator unavailable") from e
        if not allowed:
            raise InvalidIdentityError(user_id)

    async def _previous_score(self, user_id: str) -> Optional[int]:
        meal_period = MealPeriod.current(self._clock())
        try:
            return await self._score_store.get_last_score(user_id, meal_period)
        except Exception as e:
            logger.warning(
                "Previous score lookup failed",
                extra={"user_id": user_id, "meal_period": meal_period.value, "error": str(e)},
            )
            return None
