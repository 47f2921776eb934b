"""Simulated scale - Implements IScaleTransport port.

Produces a jittering reading around a fixed weight so the kiosk can run
without hardware. Every tenth sample is flagged stable.
"""

import asyncio
import logging
import random
from typing import Optional

from domain.kiosk.core.ports.scale_transport import ReadingCallback
from domain.kiosk.core.value_objects.weight_sample import WeightSample

logger = logging.getLogger(__name__)

MOCK_BASELINE_GRAMS = 120.0
SAMPLE_INTERVAL_S = 0.15
STABLE_EVERY = 10
JITTER_GRAMS = 1.0


class MockScale:
    """
    Mock implementation of IScaleTransport.

    Example:
        >>> scale = MockScale()
        >>> scale.on_reading(lambda s: print(s))
        >>> await scale.connect()
    """

    def __init__(
        self,
        weight_grams: float = MOCK_BASELINE_GRAMS,
        interval_s: float = SAMPLE_INTERVAL_S,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize mock scale.

        Args:
            weight_grams: Starting weight
            interval_s: Delay between samples
            rng: Random source (seeded in tests)
        """
        self._weight = weight_grams
        self._interval_s = interval_s
        self._rng = rng or random.Random()
        self._offset = 0.0
        self._count = 0
        self._callback: Optional[ReadingCallback] = None
        self._task: Optional[asyncio.Task] = None
        self._connected = False

    async def connect(self) -> None:
        if self._connected:
            return
        self._connected = True
        self._task = asyncio.create_task(self._simulate(), name="mock-scale")
        logger.info("Mock scale connected", extra={"weight_grams": self._weight})

    async def disconnect(self) -> None:
        self._connected = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Mock scale disconnected")

    def on_reading(self, callback: ReadingCallback) -> None:
        self._callback = callback

    def is_connected(self) -> bool:
        return self._connected

    def tare(self) -> None:
        self._offset = self._weight

    def get_offset(self) -> float:
        return self._offset

    def set_weight(self, grams: float) -> None:
        """Place a new simulated load on the scale."""
        self._weight = grams

    def emit(self) -> WeightSample:
        """Produce one sample and hand it to the callback."""
        self._weight += (self._rng.random() - 0.5) * 2 * JITTER_GRAMS
        self._count += 1
        sample = WeightSample.now(
            grams=max(0.0, self._weight - self._offset),
            stable=self._count % STABLE_EVERY == 0,
        )
        if self._callback is not None:
            self._callback(sample)
        return sample

    async def _simulate(self) -> None:
        while self._connected:
            self.emit()
            await asyncio.sleep(self._interval_s)
