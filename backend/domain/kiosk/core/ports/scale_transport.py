"""IScaleTransport port - live weight sample stream."""

from typing import Callable, Protocol

from ..value_objects.weight_sample import WeightSample

ReadingCallback = Callable[[WeightSample], None]


class IScaleTransport(Protocol):
    """
    Interface for a scale connection.

    Transports push samples through a single callback at irregular
    intervals. The stream is live, unbounded and cannot be restarted
    once disconnected; the kiosk never talks to raw device protocols.

    Example:
        >>> transport.on_reading(lambda sample: session.submit(ReadingUpdate(sample)))
        >>> await transport.connect()
    """

    async def connect(self) -> None:
        """Open the connection and start producing samples."""
        ...

    async def disconnect(self) -> None:
        """Stop producing samples and release the device."""
        ...

    def on_reading(self, callback: ReadingCallback) -> None:
        """Register the callback receiving every sample."""
        ...

    def is_connected(self) -> bool:
        """True while samples are being produced."""
        ...

    def tare(self) -> None:
        """Store the current raw weight as software tare offset."""
        ...

    def get_offset(self) -> float:
        """Current software tare offset in grams."""
        ...
