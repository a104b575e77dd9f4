from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from simrig.hardware import AxisValue, parse_notification
from simrig.motion import AxisIdentity, LiveConfiguration, get_axis


@pytest.fixture
def seat_axis():
    return get_axis(AxisIdentity.SEAT_Z)


@pytest.fixture
def floor_axis():
    return get_axis(AxisIdentity.FLOOR_Z)


@pytest.fixture
def tilt_axis():
    return get_axis(AxisIdentity.STEER_TILT)


@pytest.fixture
def seat_x_axis():
    return get_axis(AxisIdentity.SEAT_X)


@pytest.fixture
def start_live() -> LiveConfiguration:
    """Power-up positions of the rig."""

    return LiveConfiguration(seat_z=720.0, floor_z=425.0, steer_tilt=697.5, seat_x=432.5)


@pytest.fixture
def raised_live() -> LiveConfiguration:
    """Seat fully raised with floor and tilt at baseline, which is at risk."""

    return LiveConfiguration(seat_z=845.0, floor_z=300.0, steer_tilt=650.0, seat_x=432.5)


class FakeConnection:
    """Stand-in for SerialConnection recording what would be sent."""

    def __init__(self, connected: bool = True, accept: bool = True) -> None:
        self.is_connected = connected
        self.accept = accept
        self.commands: List[str] = []
        self.sequences: List[List[str]] = []
        self.delays: List[float] = []
        self.incoming: List[str] = []

    def connect(self) -> bool:
        self.is_connected = True
        return True

    def disconnect(self) -> None:
        self.is_connected = False

    def send_command(self, command: str) -> bool:
        self.commands.append(command)
        return self.accept

    def send_sequence(self, commands, delay: float = 0.0) -> bool:
        self.sequences.append(list(commands))
        self.delays.append(delay)
        return self.accept

    def read_notifications(self, timeout: float = 0.5) -> List[AxisValue]:
        values: List[AxisValue] = []
        while self.incoming:
            values.extend(parse_notification(self.incoming.pop(0)))
        return values


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()
