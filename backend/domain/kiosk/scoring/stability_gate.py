"""Stability gate for noisy scale readings.

Decides whether the recent samples describe a settled weight:
- fewer than MIN_SAMPLES in the time window: not stable
- any in-window sample flagged stable by the hardware: stable
- otherwise: population standard deviation below the threshold
"""

import math
from typing import Iterable, List, Optional

from ..core.value_objects.weight_sample import WeightSample, now_ms as _now_ms

MIN_SAMPLES = 3
DEFAULT_STD_DEV_THRESHOLD = 0.2
DEFAULT_WINDOW_MS = 800


def samples_in_window(
    samples: Iterable[WeightSample],
    window_ms: int = DEFAULT_WINDOW_MS,
    now_ms: Optional[int] = None,
) -> List[WeightSample]:
    """Samples strictly younger than ``window_ms`` relative to ``now_ms``."""
    now = _now_ms() if now_ms is None else now_ms
    return [s for s in samples if now - s.timestamp_ms < window_ms]


def population_std_dev(values: List[float]) -> float:
    """Population standard deviation (divides by N)."""
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def is_stable(
    samples: Iterable[WeightSample],
    std_dev_threshold: float = DEFAULT_STD_DEV_THRESHOLD,
    window_ms: int = DEFAULT_WINDOW_MS,
    now_ms: Optional[int] = None,
) -> bool:
    """Check whether recent samples are settled.

    Safe to call on every new sample: no hidden state, O(window size).

    Args:
        samples: Ordered samples, most recent last
        std_dev_threshold: Maximum spread (grams) for a settled weight
        window_ms: Only samples younger than this are considered
        now_ms: Reference time in epoch ms (wall clock if omitted)

    Returns:
        bool: True if the weight is settled

    Example:
        >>> recent = [WeightSample(g, 1_000) for g in (100.0, 100.1, 100.2)]
        >>> is_stable(recent, now_ms=1_100)
        True
    """
    recent = samples_in_window(samples, window_ms=window_ms, now_ms=now_ms)

    if len(recent) < MIN_SAMPLES:
        return False

    if any(s.is_flagged_stable() for s in recent):
        return True

    return population_std_dev([s.grams for s in recent]) < std_dev_threshold


def is_weight_ready(
    samples: Iterable[WeightSample],
    std_dev_threshold: float = DEFAULT_STD_DEV_THRESHOLD,
    window_ms: int = DEFAULT_WINDOW_MS,
    now_ms: Optional[int] = None,
) -> bool:
    """A dish is on the scale: readings are settled and the latest one is above zero.

    Identification is only offered once this holds.
    """
    samples = list(samples)
    if not samples or samples[-1].grams <= 0:
        return False
    return is_stable(samples, std_dev_threshold=std_dev_threshold, window_ms=window_ms, now_ms=now_ms)
