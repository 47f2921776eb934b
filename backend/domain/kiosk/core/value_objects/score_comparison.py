"""ScoreComparison value object."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScoreComparison:
    """Outcome of comparing a score with the user's previous one.

    Attributes:
        is_higher: Current score beats the previous score
        is_lower: Current score is below the previous score
        has_comparison: A previous score existed
    """

    is_higher: bool
    is_lower: bool
    has_comparison: bool

    @classmethod
    def between(cls, current: int, previous: Optional[int]) -> "ScoreComparison":
        """Compare ``current`` against ``previous`` (None when no history).

        Example:
            >>> ScoreComparison.between(80, 60).is_higher
            True
        """
        if previous is None:
            return cls(is_higher=False, is_lower=False, has_comparison=False)
        return cls(
            is_higher=current > previous,
            is_lower=current < previous,
            has_comparison=True,
        )
