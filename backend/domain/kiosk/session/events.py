"""Session events fed to the kiosk state machine.

Three independent sources produce them (scale transport, idle ticker,
user interaction); they are serialized into one stream before reaching
``step``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.entities.leaderboard_entry import LeaderboardEntry
from ..core.value_objects.dish_kind import DishKind
from ..core.value_objects.treatment_group import TreatmentGroup
from ..core.value_objects.weight_sample import WeightSample


@dataclass(frozen=True)
class SessionEvent:
    """Base class for session events."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class IdentifyValid(SessionEvent):
    """User id accepted by the identity validator.

    Attributes:
        user_id: Normalized user id
        treatment_group: Study arm; None behaves like CONTROL
    """

    user_id: str
    treatment_group: Optional[TreatmentGroup] = None


@dataclass(frozen=True)
class IdentifyInvalid(SessionEvent):
    """User id rejected by the identity validator."""

    user_id: str
    message: Optional[str] = None


@dataclass(frozen=True)
class SelectDish(SessionEvent):
    """User picked the dish currently on the scale."""

    dish_kind: DishKind


@dataclass(frozen=True)
class Back(SessionEvent):
    """User pressed Back."""


@dataclass(frozen=True)
class Exit(SessionEvent):
    """User pressed Exit / Done."""


@dataclass(frozen=True)
class ShowLeaderboard(SessionEvent):
    """User opened the leaderboard from the score screen."""


@dataclass(frozen=True)
class ReadingUpdate(SessionEvent):
    """New sample from the scale transport."""

    sample: WeightSample


@dataclass(frozen=True)
class IdleTick(SessionEvent):
    """One-second tick from the external idle timer."""


@dataclass(frozen=True)
class IdleReset(SessionEvent):
    """User activity: cancel the idle warning and restart the countdown."""


@dataclass(frozen=True)
class ErrorOccurred(SessionEvent):
    """Unrecoverable condition for the current flow (e.g. scale disconnected)."""

    message: str


@dataclass(frozen=True)
class SetPreviousScore(SessionEvent):
    """User's last score for this meal period, None if there is none."""

    score: Optional[int]


@dataclass(frozen=True)
class SetDebugWeight(SessionEvent):
    """Operator net weight override; None clears it."""

    grams: Optional[float]


@dataclass(frozen=True)
class SetLeaderboard(SessionEvent):
    """Fresh leaderboard snapshot loaded from the store."""

    entries: Tuple[LeaderboardEntry, ...]


@dataclass(frozen=True)
class LeaderboardEntryAdded(SessionEvent):
    """Entry ranked locally into the snapshot (store unavailable)."""

    entry: LeaderboardEntry


@dataclass(frozen=True)
class ScorePersisted(SessionEvent):
    """The current score is written, or being written, to the score store."""


@dataclass(frozen=True)
class ScorePersistFailed(SessionEvent):
    """A score write claimed by ScorePersisted did not go through."""
