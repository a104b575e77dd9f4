from __future__ import annotations

from typing import List

import pytest
import serial

from simrig.hardware import AxisValue, SerialConnection
from simrig.motion import AxisIdentity


class FakeSerial:
    """Minimal pyserial port double fed from a byte buffer."""

    instances: List["FakeSerial"] = []

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.is_open = True
        self.written: List[bytes] = []
        self.buffer = b""
        self.write_error = None
        FakeSerial.instances.append(self)

    @property
    def in_waiting(self) -> int:
        return len(self.buffer)

    def read(self, size: int) -> bytes:
        chunk, self.buffer = self.buffer[:size], self.buffer[size:]
        return chunk

    def write(self, data: bytes) -> int:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)
        return len(data)

    def flush(self) -> None:
        pass

    def reset_input_buffer(self) -> None:
        self.buffer = b""

    def close(self) -> None:
        self.is_open = False


@pytest.fixture
def fake_serial(monkeypatch):
    FakeSerial.instances = []
    monkeypatch.setattr(serial, "Serial", FakeSerial)
    return FakeSerial


@pytest.fixture
def connection(fake_serial) -> SerialConnection:
    link = SerialConnection("/dev/ttyTEST", settle_time=0)
    assert link.connect() is True
    return link


def test_connect_opens_port_with_settings(connection, fake_serial) -> None:
    port = fake_serial.instances[-1]

    assert connection.is_connected
    assert port.kwargs["port"] == "/dev/ttyTEST"
    assert port.kwargs["baudrate"] == 115200


def test_connect_failure_reports_false(monkeypatch) -> None:
    def refuse(**kwargs):
        raise serial.SerialException("no such port")

    monkeypatch.setattr(serial, "Serial", refuse)
    link = SerialConnection("/dev/missing", settle_time=0)

    assert link.connect() is False
    assert not link.is_connected


def test_send_command_writes_terminated_line(connection, fake_serial) -> None:
    assert connection.send_command("z:720") is True
    assert fake_serial.instances[-1].written == [b"z:720\n"]


def test_send_sequence_writes_in_order(connection, fake_serial) -> None:
    assert connection.send_sequence(["x:432", "z:720", "f:425", "s:697"], delay=0) is True
    assert fake_serial.instances[-1].written == [b"x:432\n", b"z:720\n", b"f:425\n", b"s:697\n"]


def test_send_sequence_stops_at_first_failure(connection, fake_serial) -> None:
    fake_serial.instances[-1].write_error = serial.SerialTimeoutException("write timeout")

    assert connection.send_sequence(["x:432", "z:720"], delay=0) is False
    assert fake_serial.instances[-1].written == []


def test_send_without_connection_is_refused() -> None:
    link = SerialConnection("/dev/ttyTEST", settle_time=0)

    assert link.send_command("z:720") is False


def test_disconnect_closes_port(connection, fake_serial) -> None:
    connection.disconnect()

    assert fake_serial.instances[-1].is_open is False
    assert not connection.is_connected
    assert connection.read_notifications(timeout=0.05) == []


def test_read_notifications_keeps_partial_line(connection, fake_serial) -> None:
    port = fake_serial.instances[-1]
    port.buffer = b"z:845,f:300\nx:43"

    assert connection.read_notifications(timeout=0.2) == [
        AxisValue(AxisIdentity.SEAT_Z, 845),
        AxisValue(AxisIdentity.FLOOR_Z, 300),
    ]

    port.buffer = b"2,s:650\n"
    assert connection.read_notifications(timeout=0.2) == [
        AxisValue(AxisIdentity.SEAT_X, 432),
        AxisValue(AxisIdentity.STEER_TILT, 650),
    ]


def test_read_notifications_times_out_without_data(connection) -> None:
    assert connection.read_notifications(timeout=0.05) == []
