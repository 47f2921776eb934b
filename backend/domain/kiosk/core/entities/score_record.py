"""ScoreRecord entity - one persisted kiosk measurement."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from domain.kiosk.core.value_objects.dish_kind import DishKind
from domain.kiosk.core.value_objects.meal_period import MealPeriod


@dataclass(frozen=True)
class ScoreRecord:
    """
    Entity: a measurement appended to the score store.

    Baseline records (control group) carry score 0; the weight is the
    data of interest for them.

    Attributes:
        user_id: User the measurement belongs to
        meal_period: Service window of the measurement
        score: Waste score in [0, 100]
        dish_kind: Dish that was on the scale
        weight_grams: Raw scale reading in grams
        id: Unique record identifier
        created_at: When the record was created (UTC)
    """

    user_id: str
    meal_period: MealPeriod
    score: int
    dish_kind: DishKind
    weight_grams: float
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.user_id.strip():
            raise ValueError("user_id cannot be empty")
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be in [0, 100], got {self.score}")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (use UTC)")
