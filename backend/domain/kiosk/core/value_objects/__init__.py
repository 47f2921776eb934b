"""Value objects for the kiosk domain."""

from .dish_kind import DishKind, DishParameters
from .meal_period import MealPeriod, NextMealInfo, next_meal_info
from .score_comparison import ScoreComparison
from .treatment_group import TreatmentGroup
from .weight_sample import WeightSample

__all__ = [
    "DishKind",
    "DishParameters",
    "MealPeriod",
    "NextMealInfo",
    "next_meal_info",
    "ScoreComparison",
    "TreatmentGroup",
    "WeightSample",
]
