"""Waste scoring and scale stability."""

from .stability_gate import is_stable, is_weight_ready
from .waste_score import dish_score, net_weight, score

__all__ = [
    "dish_score",
    "is_stable",
    "is_weight_ready",
    "net_weight",
    "score",
]
