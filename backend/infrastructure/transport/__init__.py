"""Scale transport adapters."""

from infrastructure.transport.mock_scale import MockScale
from infrastructure.transport.serial_line import SerialLineTransport

__all__ = ["MockScale", "SerialLineTransport"]
