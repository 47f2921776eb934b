"""Line-oriented scale transport - Implements IScaleTransport port.

Reads ASCII lines such as "123.4 g" or "ST,GS, 0.500 kg" from an asyncio
stream (a serial-to-TCP bridge by default), converts them to grams with
the weight-line parser and emits WeightSamples. Lines that carry no value
are dropped.

A lost stream is reported once through the error callback; the transport
does not reconnect.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple

from domain.kiosk.core.exceptions.domain_errors import TransportError
from domain.kiosk.core.ports.scale_transport import ReadingCallback
from domain.kiosk.core.value_objects.weight_sample import WeightSample
from domain.kiosk.parsing import parse_line_to_grams

logger = logging.getLogger(__name__)

StreamOpener = Callable[[], Awaitable[Tuple[asyncio.StreamReader, Optional[asyncio.StreamWriter]]]]
ErrorCallback = Callable[[TransportError], None]

_STABLE_PREFIX = "ST"
_UNSTABLE_PREFIX = "US"


def stability_flag(line: str) -> Optional[bool]:
    """Stability reported by the common "ST,GS,..." / "US,GS,..." frames."""
    head = line.strip().upper()
    if head.startswith(_STABLE_PREFIX + ","):
        return True
    if head.startswith(_UNSTABLE_PREFIX + ","):
        return False
    return None


class SerialLineTransport:
    """
    Scale transport over a text line stream.

    Example:
        >>> transport = SerialLineTransport.tcp("127.0.0.1", 4001)
        >>> transport.on_reading(session_callback)
        >>> transport.on_error(lambda e: session.submit_nowait(ErrorOccurred(str(e))))
        >>> await transport.connect()
    """

    def __init__(self, opener: StreamOpener, encoding: str = "ascii"):
        """
        Initialize transport.

        Args:
            opener: Coroutine factory returning (reader, writer)
            encoding: Line encoding
        """
        self._opener = opener
        self._encoding = encoding
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._task: Optional[asyncio.Task] = None
        self._callback: Optional[ReadingCallback] = None
        self._error_callback: Optional[ErrorCallback] = None
        self._connected = False
        self._offset = 0.0
        self._last_raw: Optional[float] = None

    @classmethod
    def tcp(cls, host: str, port: int) -> "SerialLineTransport":
        """Transport reading from a serial-to-TCP bridge."""

        async def _open() -> Tuple[asyncio.StreamReader, Optional[asyncio.StreamWriter]]:
            return await asyncio.open_connection(host, port)

        return cls(_open)

    async def connect(self) -> None:
        """
        Open the stream and start reading.

        Raises:
            TransportError: If the stream cannot be opened
        """
        if self._connected:
            return
        try:
            self._reader, self._writer = await self._opener()
        except OSError as e:
            raise TransportError(f"Cannot open scale stream: {e}") from e

        self._connected = True
        self._task = asyncio.create_task(self._read_loop(), name="scale-reader")
        logger.info("Scale stream connected")

    async def disconnect(self) -> None:
        self._connected = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        logger.info("Scale stream disconnected")

    def on_reading(self, callback: ReadingCallback) -> None:
        self._callback = callback

    def on_error(self, callback: ErrorCallback) -> None:
        self._error_callback = callback

    def is_connected(self) -> bool:
        return self._connected

    def tare(self) -> None:
        """Zero the scale on the last raw reading."""
        if self._last_raw is not None:
            self._offset = self._last_raw

    def get_offset(self) -> float:
        return self._offset

    def handle_line(self, line: str) -> Optional[WeightSample]:
        """Convert one line into a sample and emit it; None if dropped."""
        grams = parse_line_to_grams(line)
        if grams is None:
            logger.debug("Dropped scale line", extra={"line": line.strip()})
            return None

        self._last_raw = grams
        sample = WeightSample.now(grams=grams - self._offset, stable=stability_flag(line))
        if self._callback is not None:
            self._callback(sample)
        return sample

    async def _read_loop(self) -> None:
        assert self._reader is not None
        try:
            while True:
                raw = await self._reader.readline()
                if not raw:
                    raise TransportError("Scale stream closed")
                self.handle_line(raw.decode(self._encoding, errors="replace"))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._connected = False
            error = e if isinstance(e, TransportError) else TransportError(f"Scale read failed: {e}")
            logger.error("Scale transport lost", extra={"error": str(error)}, exc_info=True)
            if self._error_callback is not None:
                self._error_callback(error)
