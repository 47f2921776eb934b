"""Ports (interfaces) for the kiosk domain."""

from .identity_validator import IIdentityValidator
from .leaderboard_store import ILeaderboardStore
from .scale_transport import IScaleTransport, ReadingCallback
from .score_store import IScoreStore

__all__ = [
    "IIdentityValidator",
    "ILeaderboardStore",
    "IScaleTransport",
    "IScoreStore",
    "ReadingCallback",
]
