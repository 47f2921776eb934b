"""MealPeriod value object - dining hall service window."""

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Optional, Tuple

_MINUTES_PER_DAY = 24 * 60


class MealPeriod(str, Enum):
    """Service window a score belongs to.

    Windows (local time, start inclusive, end exclusive):
    - BREAKFAST: 08:00-10:00
    - LUNCH: 11:30-13:30
    - DINNER: 17:30-20:00
    - OTHER: outside meal hours
    """

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    OTHER = "other"

    @classmethod
    def at(cls, moment: time) -> "MealPeriod":
        """Resolve the meal period for a time of day.

        Example:
            >>> MealPeriod.at(time(12, 15))
            <MealPeriod.LUNCH: 'lunch'>
        """
        minutes = moment.hour * 60 + moment.minute
        for period in (cls.BREAKFAST, cls.LUNCH, cls.DINNER):
            start, end = period.window()
            if start <= minutes < end:
                return period
        return cls.OTHER

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> "MealPeriod":
        """Meal period for ``now`` (local wall clock by default)."""
        moment = now or datetime.now()
        return cls.at(moment.time())

    def window(self) -> Tuple[int, int]:
        """Window as (start, end) minutes after midnight.

        Raises:
            ValueError: For OTHER, which has no window.
        """
        if self is MealPeriod.OTHER:
            raise ValueError("MealPeriod.OTHER has no service window")
        return _WINDOWS[self]

    def display_name(self) -> str:
        """Capitalized name (e.g. "Lunch")."""
        return self.value.capitalize()

    def display_with_time(self) -> str:
        """Name with its service window, e.g. "Lunch (11:30-13:30)"."""
        if self is MealPeriod.OTHER:
            return "Other"
        start, end = self.window()
        return f"{self.display_name()} ({_fmt(start)}-{_fmt(end)})"


_WINDOWS = {
    MealPeriod.BREAKFAST: (8 * 60, 10 * 60),
    MealPeriod.LUNCH: (11 * 60 + 30, 13 * 60 + 30),
    MealPeriod.DINNER: (17 * 60 + 30, 20 * 60),
}


def _fmt(minutes: int) -> str:
    return f"{minutes // 60}:{minutes % 60:02d}"


@dataclass(frozen=True)
class NextMealInfo:
    """Upcoming meal period relative to a point in time.

    Attributes:
        next_meal: Current period when inside a window, otherwise the next one
        minutes_until_start: 0 when currently meal time
        is_currently_meal_time: True inside a service window
    """

    next_meal: MealPeriod
    minutes_until_start: int
    is_currently_meal_time: bool

    def time_until_start(self) -> str:
        """Format as "Now", "45m" or "2h 5m"."""
        if self.is_currently_meal_time:
            return "Now"
        hours, minutes = divmod(self.minutes_until_start, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"


def next_meal_info(now: Optional[datetime] = None) -> NextMealInfo:
    """Compute the next meal period and the time until it starts.

    Args:
        now: Reference time (local wall clock by default)

    Returns:
        NextMealInfo for the reference time

    Example:
        >>> next_meal_info(datetime(2025, 1, 1, 10, 30)).time_until_start()
        '1h 0m'
    """
    moment = now or datetime.now()
    current = MealPeriod.at(moment.time())
    if current is not MealPeriod.OTHER:
        return NextMealInfo(current, 0, True)

    minutes = moment.hour * 60 + moment.minute
    for period in (MealPeriod.BREAKFAST, MealPeriod.LUNCH, MealPeriod.DINNER):
        start, _ = period.window()
        if minutes < start:
            return NextMealInfo(period, start - minutes, False)

    # After dinner: tomorrow's breakfast
    start, _ = MealPeriod.BREAKFAST.window()
    return NextMealInfo(MealPeriod.BREAKFAST, start + _MINUTES_PER_DAY - minutes, False)
