"""DishKind value object - container type placed on the kiosk scale."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class DishParameters:
    """Fixed scoring parameters for a dish kind (all values in grams).

    Attributes:
        tare: Weight of the empty container, subtracted from the reading.
        baseline: Net waste considered ideal; at or below it the score is 100.
        decay_constant: Exponential falloff of the score above the baseline.
    """

    tare: float
    baseline: float
    decay_constant: float

    def __post_init__(self) -> None:
        """Validate parameter invariants."""
        if self.tare < 0:
            raise ValueError(f"tare must be non-negative, got {self.tare}")
        if self.baseline < 0:
            raise ValueError(f"baseline must be non-negative, got {self.baseline}")
        if self.decay_constant <= 0:
            raise ValueError(f"decay_constant must be positive, got {self.decay_constant}")


class DishKind(str, Enum):
    """Dish placed on the scale by the user.

    Each kind maps to its own tare, baseline and decay constant:
    - PLATE: 200g tare, 60g baseline, 43.3g decay
    - SALAD: 150g tare, 40g baseline, 28.9g decay
    - CEREAL: 100g tare, 30g baseline, 21.6g decay
    """

    PLATE = "plate"
    SALAD = "salad"
    CEREAL = "cereal"

    def parameters(self) -> DishParameters:
        """Get scoring parameters for this dish.

        Returns:
            DishParameters: tare, baseline and decay constant

        Example:
            >>> DishKind.SALAD.parameters().tare
            150.0
        """
        return _DISH_PARAMETERS[self]

    @property
    def tare(self) -> float:
        return self.parameters().tare

    @property
    def baseline(self) -> float:
        return self.parameters().baseline

    @property
    def decay_constant(self) -> float:
        return self.parameters().decay_constant

    def display_name(self) -> str:
        """Get human-readable name (e.g. "Plate")."""
        return self.value.capitalize()


_DISH_PARAMETERS = {
    DishKind.PLATE: DishParameters(tare=200.0, baseline=60.0, decay_constant=43.3),
    DishKind.SALAD: DishParameters(tare=150.0, baseline=40.0, decay_constant=28.9),
    DishKind.CEREAL: DishParameters(tare=100.0, baseline=30.0, decay_constant=21.6),
}
