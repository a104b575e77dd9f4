"""
Clearance model for the seat / steering-plate / wheel-tilt stack

The three coupled axes share one vertical gap. Raising the seat eats into
it, raising the floor plate or tilting the wheel up gives it back. The
model is linear in each axis:

    lost      = dSeat - dFloor - k * dTilt
    remaining = safe_clearance - max(0, lost)
    risk      = remaining < min_allowed_clearance

with deltas taken against the calibrated baseline. Only lost clearance
counts; a configuration roomier than baseline never reports more than
safe_clearance.
"""

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from dataclasses_json import dataclass_json

from ..config.defaults import CALIBRATION
from ..exceptions import ConfigurationError
from .axes import AxisIdentity


@dataclass(frozen=True)
class Calibration:
    """Baseline and clearance constants of one rig design"""

    base_seat_z: float = CALIBRATION["base_seat_z"]
    base_floor_z: float = CALIBRATION["base_floor_z"]
    base_steer_tilt: float = CALIBRATION["base_steer_tilt"]
    safe_clearance: float = CALIBRATION["safe_clearance"]
    min_allowed_clearance: float = CALIBRATION["min_allowed_clearance"]
    steer_tilt_factor: float = CALIBRATION["steer_tilt_factor"]

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) \
                    or not math.isfinite(value):
                raise ConfigurationError(f"Calibration {f.name} must be a finite number, got {value!r}")
        if self.min_allowed_clearance > self.safe_clearance:
            raise ConfigurationError(
                f"min_allowed_clearance {self.min_allowed_clearance} exceeds "
                f"safe_clearance {self.safe_clearance}; baseline would be at risk"
            )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Calibration":
        """Build from a partial mapping, defaults fill the gaps"""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown calibration keys: {', '.join(unknown)}")
        return cls(**data)

    @property
    def risk_budget(self) -> float:
        """Lost clearance tolerated before risk is declared"""
        return self.safe_clearance - self.min_allowed_clearance

    def baseline(self, axis_id: AxisIdentity) -> float:
        """Baseline position of a coupled axis"""
        if axis_id is AxisIdentity.SEAT_Z:
            return self.base_seat_z
        if axis_id is AxisIdentity.FLOOR_Z:
            return self.base_floor_z
        if axis_id is AxisIdentity.STEER_TILT:
            return self.base_steer_tilt
        raise ValueError(f"{axis_id.name} is not part of the clearance model")

    def coefficient(self, axis_id: AxisIdentity) -> float:
        """d(lost)/d(axis) for a coupled axis"""
        if axis_id is AxisIdentity.SEAT_Z:
            return 1.0
        if axis_id is AxisIdentity.FLOOR_Z:
            return -1.0
        if axis_id is AxisIdentity.STEER_TILT:
            return -self.steer_tilt_factor
        raise ValueError(f"{axis_id.name} is not part of the clearance model")

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CALIBRATION = Calibration()


@dataclass_json
@dataclass(frozen=True)
class ClearanceResult:
    """
    Outcome of one clearance evaluation

    remaining_clearance is signed and unfloored; it is the value the
    risk decision was made on. Use display_clearance for anything shown
    to a user.
    """

    is_risk: bool
    remaining_clearance: float

    @property
    def display_clearance(self) -> float:
        if math.isnan(self.remaining_clearance):
            return self.remaining_clearance
        return max(0.0, self.remaining_clearance)


def lost_clearance(seat_z, floor_z, steer_tilt,
                   calibration: Calibration = DEFAULT_CALIBRATION):
    """
    Signed clearance lost relative to baseline

    Plain arithmetic, so numpy arrays work as well as floats.
    """
    delta_seat = seat_z - calibration.base_seat_z
    delta_floor = floor_z - calibration.base_floor_z
    delta_tilt = steer_tilt - calibration.base_steer_tilt
    return delta_seat - delta_floor - calibration.steer_tilt_factor * delta_tilt


def evaluate(seat_z: float, floor_z: float, steer_tilt: float,
             calibration: Calibration = DEFAULT_CALIBRATION) -> ClearanceResult:
    """
    Evaluate collision risk for one configuration

    NaN anywhere in the inputs gives a NaN remaining clearance and is
    reported as a risk.
    """
    lost = lost_clearance(seat_z, floor_z, steer_tilt, calibration)
    if math.isnan(lost):
        return ClearanceResult(is_risk=True, remaining_clearance=math.nan)

    remaining = calibration.safe_clearance - max(0.0, lost)
    return ClearanceResult(
        is_risk=remaining < calibration.min_allowed_clearance,
        remaining_clearance=remaining,
    )


def evaluate_configuration(live, calibration: Calibration = DEFAULT_CALIBRATION) -> ClearanceResult:
    """Evaluate a LiveConfiguration snapshot"""
    return evaluate(live.seat_z, live.floor_z, live.steer_tilt, calibration)


def h30_point(seat_z: float, floor_z: float) -> float:
    """Seat height above the steering plate (H30 on the rig drawing)"""
    return seat_z - floor_z
