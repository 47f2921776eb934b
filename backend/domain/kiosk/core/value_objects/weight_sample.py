"""WeightSample value object.

Immutable timestamped reading produced by a scale transport.
"""

import math
import time
from dataclasses import dataclass
from typing import Optional

from domain.kiosk.core.exceptions.domain_errors import InvalidWeightSampleError


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class WeightSample:
    """Value object for a single scale reading.

    Attributes:
        grams: Reading in grams (after the transport's software tare)
        timestamp_ms: Epoch milliseconds when the reading was taken
        stable: Stability flag reported by the hardware, None if unknown

    Examples:
        >>> sample = WeightSample(grams=312.5, timestamp_ms=1_700_000_000_000)
        >>> sample.is_flagged_stable()
        False

    Raises:
        InvalidWeightSampleError: If grams is not a finite number.
    """

    grams: float
    timestamp_ms: int
    stable: Optional[bool] = None

    def __post_init__(self) -> None:
        """Validate sample invariants."""
        if not math.isfinite(self.grams):
            raise InvalidWeightSampleError(f"grams must be finite, got {self.grams}")

    @classmethod
    def now(cls, grams: float, stable: Optional[bool] = None) -> "WeightSample":
        """Create a sample stamped with the current wall-clock time."""
        return cls(grams=grams, timestamp_ms=now_ms(), stable=stable)

    def is_flagged_stable(self) -> bool:
        """True only when the transport explicitly reported stability."""
        return self.stable is True

    def __str__(self) -> str:
        """Human-readable representation."""
        flag = " (stable)" if self.is_flagged_stable() else ""
        return f"{self.grams:.1f}g@{self.timestamp_ms}{flag}"
