"""Kiosk session state machine."""

from .context import (
    IDLE_TIMEOUT_SECONDS,
    CONTROL_AUTO_EXIT_SECONDS,
    IDLE_WARNING_SECONDS,
    MAX_READINGS,
    MAX_STABLE_READINGS,
    SessionContext,
)
from .effects import PersistBaseline, PersistScore, SideEffect
from .events import (
    Back,
    ErrorOccurred,
    Exit,
    IdentifyInvalid,
    IdentifyValid,
    IdleReset,
    IdleTick,
    LeaderboardEntryAdded,
    ReadingUpdate,
    ScorePersistFailed,
    ScorePersisted,
    SelectDish,
    SessionEvent,
    SetDebugWeight,
    SetLeaderboard,
    SetPreviousScore,
    ShowLeaderboard,
)
from .machine import DEFAULT_INVALID_ID_MESSAGE, StepResult, step
from .sample_buffer import SampleBuffer
from .states import SessionState

__all__ = [
    "IDLE_TIMEOUT_SECONDS",
    "IDLE_WARNING_SECONDS",
    "CONTROL_AUTO_EXIT_SECONDS",
    "MAX_READINGS",
    "MAX_STABLE_READINGS",
    "SessionContext",
    "SampleBuffer",
    "SessionState",
    "StepResult",
    "DEFAULT_INVALID_ID_MESSAGE",
    "step",
    "SideEffect",
    "PersistBaseline",
    "PersistScore",
    "SessionEvent",
    "IdentifyValid",
    "IdentifyInvalid",
    "SelectDish",
    "Back",
    "Exit",
    "ShowLeaderboard",
    "ReadingUpdate",
    "IdleTick",
    "IdleReset",
    "ErrorOccurred",
    "SetPreviousScore",
    "SetDebugWeight",
    "SetLeaderboard",
    "LeaderboardEntryAdded",
    "ScorePersisted",
    "ScorePersistFailed",
]
