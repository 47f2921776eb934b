"""Scale transport factory.

Environment variable: SCALE_TRANSPORT
Values:
    - "mock": simulated scale (default)
    - "tcp": line stream at SCALE_HOST:SCALE_PORT (serial-to-TCP bridge)
"""

import os
from typing import Union

from infrastructure.transport.mock_scale import MockScale
from infrastructure.transport.serial_line import SerialLineTransport

ScaleTransport = Union[MockScale, SerialLineTransport]


def create_scale_transport() -> ScaleTransport:
    """Create scale transport based on SCALE_TRANSPORT env var.

    Raises:
        ValueError: If the mode is unknown or tcp mode lacks SCALE_HOST
    """
    mode = os.getenv("SCALE_TRANSPORT", "mock").strip().lower()

    if mode == "mock":
        return MockScale()

    if mode == "tcp":
        host = os.getenv("SCALE_HOST")
        if not host:
            raise ValueError("SCALE_TRANSPORT=tcp but SCALE_HOST not set")
        port = int(os.getenv("SCALE_PORT", "4001"))
        return SerialLineTransport.tcp(host, port)

    raise ValueError(f"SCALE_TRANSPORT must be 'mock' or 'tcp', got '{mode}'")
