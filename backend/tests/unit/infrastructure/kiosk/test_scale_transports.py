"""
Unit tests for scale transports.

Tests:
- MockScale sample generation and tare
- SerialLineTransport line handling, stream reading and loss reporting
- create_scale_transport selection
"""

import asyncio
import random

import pytest

from domain.kiosk.core.exceptions import TransportError
from infrastructure.transport import MockScale, SerialLineTransport
from infrastructure.transport.factory import create_scale_transport
from infrastructure.transport.mock_scale import STABLE_EVERY
from infrastructure.transport.serial_line import stability_flag


class TestMockScale:
    """Test MockScale."""

    def test_emit_jitters_around_weight(self):
        scale = MockScale(weight_grams=300.0, rng=random.Random(7))
        received = []
        scale.on_reading(received.append)

        samples = [scale.emit() for _ in range(STABLE_EVERY)]

        assert received == samples
        assert all(280.0 < s.grams < 320.0 for s in samples)
        assert [s.stable for s in samples].count(True) == 1
        assert samples[-1].stable is True

    def test_tare_zeroes_reading(self):
        scale = MockScale(weight_grams=300.0, rng=random.Random(1))
        scale.tare()

        assert scale.get_offset() == 300.0
        assert scale.emit().grams < 5.0

    def test_reading_never_negative(self):
        scale = MockScale(weight_grams=0.0, rng=random.Random(3))

        assert all(scale.emit().grams >= 0.0 for _ in range(20))

    @pytest.mark.asyncio
    async def test_connect_streams_samples(self):
        scale = MockScale(interval_s=0.001)
        received = []
        scale.on_reading(received.append)

        await scale.connect()
        await asyncio.sleep(0.02)
        await scale.disconnect()

        assert received
        assert scale.is_connected() is False


def stream_transport(*lines):
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line)
    reader.feed_eof()

    async def _open():
        return reader, None

    return SerialLineTransport(_open)


class TestSerialLineTransport:
    """Test SerialLineTransport."""

    def test_stability_flag(self):
        assert stability_flag("ST,GS, 0.500 kg") is True
        assert stability_flag("us,gs, 0.500 kg") is False
        assert stability_flag("0.500 kg") is None

    def test_handle_line(self):
        transport = SerialLineTransport(None)
        received = []
        transport.on_reading(received.append)

        sample = transport.handle_line("ST,GS, 0.250 kg\r\n")

        assert sample.grams == pytest.approx(250.0)
        assert sample.stable is True
        assert received == [sample]

    def test_unparseable_line_dropped(self):
        transport = SerialLineTransport(None)
        received = []
        transport.on_reading(received.append)

        assert transport.handle_line("ERR") is None
        assert received == []

    def test_tare_uses_last_raw_reading(self):
        transport = SerialLineTransport(None)
        transport.handle_line("150 g")

        transport.tare()

        assert transport.get_offset() == 150.0
        assert transport.handle_line("400 g").grams == pytest.approx(250.0)

    @pytest.mark.asyncio
    async def test_reads_until_eof_then_reports_loss(self):
        transport = stream_transport(b"100 g\n", b"garbage\n", b"US,GS, 0.2 kg\n")
        received, errors = [], []
        transport.on_reading(received.append)
        transport.on_error(errors.append)

        await transport.connect()
        await asyncio.wait_for(transport._task, timeout=1)

        assert [s.grams for s in received] == [pytest.approx(100.0), pytest.approx(200.0)]
        assert len(errors) == 1
        assert isinstance(errors[0], TransportError)
        assert transport.is_connected() is False

    @pytest.mark.asyncio
    async def test_connect_failure(self):
        async def _open():
            raise ConnectionRefusedError("refused")

        transport = SerialLineTransport(_open)

        with pytest.raises(TransportError):
            await transport.connect()
        assert transport.is_connected() is False


class TestCreateScaleTransport:
    """Test create_scale_transport()."""

    def test_default_mock(self, monkeypatch):
        monkeypatch.delenv("SCALE_TRANSPORT", raising=False)

        assert isinstance(create_scale_transport(), MockScale)

    def test_tcp(self, monkeypatch):
        monkeypatch.setenv("SCALE_TRANSPORT", "tcp")
        monkeypatch.setenv("SCALE_HOST", "127.0.0.1")

        assert isinstance(create_scale_transport(), SerialLineTransport)

    def test_tcp_without_host(self, monkeypatch):
        monkeypatch.setenv("SCALE_TRANSPORT", "tcp")
        monkeypatch.delenv("SCALE_HOST", raising=False)

        with pytest.raises(ValueError, match="SCALE_HOST"):
            create_scale_transport()
