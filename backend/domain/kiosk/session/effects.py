"""Side-effect intents emitted by the state machine.

Transitions never perform I/O. They describe what should happen and the
application layer executes the intents after the state update, out of
band: a failing intent never rolls back the transition that emitted it.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.value_objects.dish_kind import DishKind


@dataclass(frozen=True)
class SideEffect:
    """Base class for side-effect intents."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class PersistBaseline(SideEffect):
    """Record the weight of a control-group measurement.

    Attributes:
        user_id: Identified user (None if the session was never identified)
        dish_kind: Selected dish
        weight_grams: Latest raw scale reading
    """

    user_id: Optional[str]
    dish_kind: DishKind
    weight_grams: float


@dataclass(frozen=True)
class PersistScore(SideEffect):
    """Record a scored measurement that was not persisted yet."""

    user_id: str
    dish_kind: DishKind
    score: int
    weight_grams: float
