"""Food waste score calculation.

The score falls off exponentially once the net waste exceeds a baseline:

    delta = max(0, net - baseline)
    score = round_half_up(100 * exp(-delta / decay_constant))

clamped to [0, 100]. An empty (or lighter than tare) dish always scores
exactly 100.
"""

import math
from typing import Optional

from ..core.value_objects.dish_kind import DishKind

MAX_SCORE = 100
MIN_SCORE = 0

DEFAULT_BASELINE_GRAMS = 60.0
DEFAULT_DECAY_CONSTANT = 43.3


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score(
    net_weight_grams: float,
    baseline: float = DEFAULT_BASELINE_GRAMS,
    decay_constant: float = DEFAULT_DECAY_CONSTANT,
) -> int:
    """Convert net waste weight into a 0-100 score.

    Args:
        net_weight_grams: Tare-adjusted waste weight in grams
        baseline: Waste weight still considered ideal (score 100)
        decay_constant: Grams over baseline for the score to fall by a factor e

    Returns:
        int: Score in [0, 100], non-increasing in ``net_weight_grams``

    Example:
        >>> score(60)
        100
        >>> score(600)
        0
    """
    if net_weight_grams <= 0:
        return MAX_SCORE

    delta = max(0.0, net_weight_grams - baseline)
    raw = MAX_SCORE * math.exp(-delta / decay_constant)
    clamped = min(float(MAX_SCORE), max(float(MIN_SCORE), raw))
    return _round_half_up(clamped)


def net_weight(raw_weight_grams: float, dish: DishKind) -> float:
    """Raw reading minus the dish tare, floored at zero."""
    return max(0.0, raw_weight_grams - dish.tare)


def dish_score(
    raw_weight_grams: float,
    dish: DishKind,
    debug_override: Optional[float] = None,
) -> int:
    """Score a raw scale reading for a given dish.

    Args:
        raw_weight_grams: Reading from the scale, container included
        dish: Dish on the scale (selects tare, baseline and decay)
        debug_override: Operator-supplied net weight; bypasses tare subtraction

    Returns:
        int: Score in [0, 100]

    Example:
        >>> dish_score(800, DishKind.PLATE)
        0
        >>> dish_score(150, DishKind.SALAD)
        100
    """
    if debug_override is not None:
        net = debug_override
    else:
        net = net_weight(raw_weight_grams, dish)

    if net <= 0:
        return MAX_SCORE

    params = dish.parameters()
    return score(net, baseline=params.baseline, decay_constant=params.decay_constant)
