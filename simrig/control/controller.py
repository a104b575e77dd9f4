"""
Main rig controller
Holds the live rig positions and gates commands through the safety checks
"""

import math
import threading
import logging
from typing import Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field

from ..config import SERIAL_DEFAULTS
from ..hardware import SerialConnection, CommandBuilder, AxisValue, parse_notification
from ..motion import (AxisIdentity, AxisSpec, AXES_CONFIG, DEFAULT_LIVE_CONFIGURATION,
                      Calibration, ClearanceResult, DEFAULT_CALIBRATION, InputValidator,
                      LiveConfiguration, SafeRange, evaluate_configuration, h30_point,
                      to_measurement)

logger = logging.getLogger(__name__)

def finite_or_none(value: Optional[float]) -> Optional[float]:
    """JSON has no NaN or infinity; report those as null"""
    if value is None or not math.isfinite(value):
        return None
    return value

@dataclass
class RigStatus:
    """Derived view of one live configuration"""
    live: LiveConfiguration
    clearance: ClearanceResult
    h30: float
    safe_ranges: Dict[AxisIdentity, SafeRange] = field(default_factory=dict)
    measurements: Dict[AxisIdentity, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Plain dict for JSON output, non-finite numbers become None"""
        return {
            "positions": {name: finite_or_none(value)
                          for name, value in self.live.as_dict().items()},
            "collision_risk": self.clearance.is_risk,
            "remaining_clearance": finite_or_none(self.clearance.display_clearance),
            "h30": finite_or_none(self.h30),
            "safe_ranges": {
                axis_id.name.lower(): {
                    "lower": finite_or_none(limits.lower),
                    "upper": finite_or_none(limits.upper),
                    "fully_restricted": limits.fully_restricted,
                }
                for axis_id, limits in self.safe_ranges.items()
            },
            "measurements": {axis_id.name.lower(): finite_or_none(value)
                             for axis_id, value in self.measurements.items()},
        }

class RigController:
    """Live state holder and command gate for the simulator rig"""

    def __init__(self, connection: Optional[SerialConnection] = None,
                 calibration: Calibration = DEFAULT_CALIBRATION,
                 axes: Tuple[AxisSpec, ...] = AXES_CONFIG,
                 live: LiveConfiguration = DEFAULT_LIVE_CONFIGURATION,
                 command_delay: float = SERIAL_DEFAULTS["command_delay"]):
        # Hardware
        self.connection = connection
        self.cmd_builder = CommandBuilder(axes)
        self.command_delay = command_delay

        # Safety
        self.validator = InputValidator(calibration, axes)

        # State
        self._live = live
        self._state_lock = threading.Lock()

    # ==================== Connection Management ====================

    def connect(self) -> bool:
        """Connect to rig"""
        if self.connection is None:
            logger.warning("No connection configured")
            return False
        return self.connection.connect()

    def disconnect(self):
        """Disconnect from rig"""
        if self.connection is not None:
            self.connection.disconnect()

    @property
    def connected(self) -> bool:
        return self.connection is not None and self.connection.is_connected

    # ==================== State Management ====================

    @property
    def live(self) -> LiveConfiguration:
        """Consistent snapshot of the current positions"""
        with self._state_lock:
            return self._live

    def update_position(self, axis_id: AxisIdentity, value: float):
        with self._state_lock:
            self._live = self._live.with_axis(axis_id, float(value))

    def apply_values(self, values: List[AxisValue]):
        """Apply several reported positions as one update"""
        with self._state_lock:
            live = self._live
            for item in values:
                live = live.with_axis(item.axis, float(item.value))
            self._live = live

    def apply_notification(self, message: str) -> List[AxisValue]:
        """Apply a raw notification from the rig"""
        values = parse_notification(message, self.validator.axes)
        self.apply_values(values)
        return values

    def poll(self, timeout: float = 0.5) -> List[AxisValue]:
        """Read pending notifications from the rig and apply them"""
        if not self.connected:
            return []
        values = self.connection.read_notifications(timeout)
        self.apply_values(values)
        return values

    def status(self) -> RigStatus:
        live = self.live
        calibration = self.validator.calibration
        measurements = {}
        for axis in self.validator.axes:
            value = live.value_of(axis.id)
            if value is not None:
                measurements[axis.id] = to_measurement(axis.id, value)
        return RigStatus(
            live=live,
            clearance=evaluate_configuration(live, calibration),
            h30=h30_point(live.seat_z, live.floor_z),
            safe_ranges=self.validator.safe_ranges(live),
            measurements=measurements,
        )

    # ==================== Commands ====================

    def _send(self, command: str) -> bool:
        if not self.connected:
            logger.warning(f"Not connected, dropping {command}")
            return False
        return self.connection.send_command(command)

    def request_move(self, axis_id: AxisIdentity, value: float) -> bool:
        """
        Send a move for one axis if the safety gate allows it

        Out of range values are refused, and while the rig is at risk
        only risk-reducing directions go through.
        """
        if not self.validator.is_move_allowed(axis_id, value, self.live):
            return False
        return self._send(self.cmd_builder.axis_command(axis_id, value))

    def stop(self, axis_id: AxisIdentity) -> bool:
        """Hold an axis where it is by re-sending its position"""
        current = self.live.value_of(axis_id)
        if current is None:
            logger.warning(f"{axis_id.name} position unknown, cannot stop")
            return False
        return self._send(self.cmd_builder.axis_command(axis_id, current))

    def move_all(self, values: Mapping[AxisIdentity, float]) -> bool:
        """
        Send all axes in table order

        Every axis needs a value inside its static range; nothing is sent
        otherwise.
        """
        for axis in self.validator.axes:
            if axis.id not in values:
                logger.warning(f"⚠️ No value for {axis.label}, not sending")
                return False
            if not self.validator.validate_range(axis.id, values[axis.id]):
                logger.warning(f"⚠️ {axis.label}={values[axis.id]} out of range, not sending")
                return False

        if not self.connected:
            logger.warning("Not connected")
            return False
        return self.connection.send_sequence(self.cmd_builder.sequence(values), self.command_delay)

    def stop_all(self) -> bool:
        """Re-send every known position"""
        live = self.live
        values = {axis.id: live.value_of(axis.id) for axis in self.validator.axes
                  if live.value_of(axis.id) is not None}
        if not self.connected:
            logger.warning("Not connected")
            return False
        return self.connection.send_sequence(self.cmd_builder.sequence(values), self.command_delay)
