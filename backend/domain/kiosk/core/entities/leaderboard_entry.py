"""LeaderboardEntry entity - a submitted score with the user's initials."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from domain.kiosk.core.exceptions.domain_errors import InvalidLeaderboardEntryError
from domain.kiosk.core.value_objects.meal_period import MealPeriod

INITIALS_LENGTH = 3


@dataclass(frozen=True)
class LeaderboardEntry:
    """
    Entity: one row of the kiosk leaderboard.

    Immutable once created. Entries are never deduplicated: submitting
    the same initials and score twice yields two rows.

    Invariants:
    - initials are exactly three letters (stored upper-case)
    - score is an integer in [0, 100]

    Attributes:
        initials: Three-letter initials shown on the board
        score: Waste score that was submitted
        created_at: Submission time, used to break score ties
        user_id: Submitting user (kept for tracking, not displayed)
        meal_period: Service window of the submission
    """

    initials: str
    score: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: Optional[str] = None
    meal_period: Optional[MealPeriod] = None

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if len(self.initials) != INITIALS_LENGTH or not self.initials.isalpha():
            raise InvalidLeaderboardEntryError(
                f"initials must be exactly {INITIALS_LENGTH} letters, got '{self.initials}'"
            )
        if not self.initials.isupper():
            raise InvalidLeaderboardEntryError(
                f"initials must be upper-case, got '{self.initials}'"
            )
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise InvalidLeaderboardEntryError(f"score must be an integer, got {self.score!r}")
        if not 0 <= self.score <= 100:
            raise InvalidLeaderboardEntryError(f"score must be in [0, 100], got {self.score}")

    @classmethod
    def create(
        cls,
        initials: str,
        score: int,
        user_id: Optional[str] = None,
        meal_period: Optional[MealPeriod] = None,
        created_at: Optional[datetime] = None,
    ) -> "LeaderboardEntry":
        """Create an entry from raw kiosk input.

        Initials are trimmed, upper-cased and cut to three characters, the
        same normalization the initials keypad applies.

        Args:
            initials: Raw initials typed by the user
            score: Score being submitted
            user_id: Submitting user
            meal_period: Service window of the submission
            created_at: Submission time (defaults to now, UTC)

        Returns:
            New LeaderboardEntry

        Raises:
            InvalidLeaderboardEntryError: If normalized initials or score are invalid
        """
        return cls(
            initials=initials.strip().upper()[:INITIALS_LENGTH],
            score=score,
            created_at=created_at or datetime.now(timezone.utc),
            user_id=user_id,
            meal_period=meal_period,
        )
