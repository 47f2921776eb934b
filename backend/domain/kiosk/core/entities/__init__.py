"""Entities for the kiosk domain."""

from .leaderboard_entry import INITIALS_LENGTH, LeaderboardEntry
from .score_record import ScoreRecord

__all__ = [
    "INITIALS_LENGTH",
    "LeaderboardEntry",
    "ScoreRecord",
]
