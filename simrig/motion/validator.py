"""
Input validation and clamping
Sits between requested values (slider, keyboard, wire) and the axis state
"""

import math
import logging
from typing import Dict, Optional, Tuple, Union

from .axes import AxisIdentity, AxisSpec, AXES_CONFIG, LiveConfiguration, get_axis
from .clearance import Calibration, DEFAULT_CALIBRATION, evaluate_configuration
from .limits import SafeRange, safe_range

logger = logging.getLogger(__name__)


def _clamp(value: float, lower: float, upper: float) -> float:
    if math.isnan(value):
        return value
    return min(max(value, lower), upper)


def validate_range(value: float, axis: AxisSpec) -> bool:
    """Static range check, independent of collision state"""
    return axis.min_value <= value <= axis.max_value


def clamp_to_range(value: float, axis: AxisSpec) -> float:
    return _clamp(value, axis.min_value, axis.max_value)


def clamp_to_safe_range(value: float, axis: AxisSpec, live: LiveConfiguration,
                        calibration: Calibration = DEFAULT_CALIBRATION) -> float:
    """
    Clamp to the static travel, then into the collision-safe range

    SeatX only gets the static clamp. A fully restricted axis clamps to
    its least risky position.
    """
    clamped = clamp_to_range(value, axis)
    if not axis.id.in_collision_model:
        return clamped
    return safe_range(axis, live, calibration).clamp(clamped)


def is_movement_allowed_under_risk(axis: Union[AxisSpec, AxisIdentity], requested: float,
                                   current: float, currently_at_risk: bool) -> bool:
    """
    Direction gate applied while the rig is already at risk

    Seat may only go down, floor plate may only go up; other axes are not
    restricted. This says nothing about the destination itself, re-evaluate
    clearance after the move.
    """
    if not currently_at_risk:
        return True

    axis_id = axis.id if isinstance(axis, AxisSpec) else axis
    if axis_id is AxisIdentity.SEAT_Z:
        return requested < current
    if axis_id is AxisIdentity.FLOOR_Z:
        return requested > current
    return True


def restriction_message(value: float, axis: AxisSpec, live: LiveConfiguration,
                        calibration: Calibration = DEFAULT_CALIBRATION) -> Optional[str]:
    """Short warning to show next to an axis input, None if nothing to say"""
    if value < axis.min_value:
        return f"Below min ({int(axis.min_value)})"
    if value > axis.max_value:
        return f"Above max ({int(axis.max_value)})"
    if not axis.id.in_collision_model:
        return None

    limits = safe_range(axis, live, calibration)
    if limits.fully_restricted:
        return "No safe position (collision risk)"
    if value >= limits.upper and limits.upper < axis.max_value:
        return f"Restricted {int(limits.upper)} (collision risk)"
    if value <= limits.lower and limits.lower > axis.min_value:
        return f"Restricted {int(limits.lower)} (collision risk)"
    return None


class InputValidator:
    """Validate and clamp axis requests against one rig's limits"""

    def __init__(self, calibration: Calibration = DEFAULT_CALIBRATION,
                 axes: Tuple[AxisSpec, ...] = AXES_CONFIG):
        self.calibration = calibration
        self.axes = axes

    def axis(self, axis_id: AxisIdentity) -> AxisSpec:
        return get_axis(axis_id, self.axes)

    def safe_range(self, axis_id: AxisIdentity, live: LiveConfiguration) -> SafeRange:
        return safe_range(self.axis(axis_id), live, self.calibration)

    def safe_ranges(self, live: LiveConfiguration) -> Dict[AxisIdentity, SafeRange]:
        return {axis.id: safe_range(axis, live, self.calibration) for axis in self.axes}

    def validate_range(self, axis_id: AxisIdentity, value: float) -> bool:
        return validate_range(value, self.axis(axis_id))

    def clamp(self, axis_id: AxisIdentity, value: float, live: LiveConfiguration) -> float:
        """
        Clamp a requested value into the safe range

        Logs a warning whenever the value had to be changed.
        """
        axis = self.axis(axis_id)
        clamped = clamp_to_safe_range(value, axis, live, self.calibration)
        if clamped != value:
            logger.warning(
                f"⚠️ {axis.label or axis_id.name}={value:.1f} clamped to {clamped:.1f} "
                f"(limits: {axis.min_value:.0f} to {axis.max_value:.0f})"
            )
        return clamped

    def is_move_allowed(self, axis_id: AxisIdentity, requested: float,
                        live: LiveConfiguration) -> bool:
        """
        Static range check plus the direction gate for the current risk state
        """
        axis = self.axis(axis_id)
        if not validate_range(requested, axis):
            logger.warning(f"⚠️ {axis.label}: {requested} outside {axis.min_value:.0f}-{axis.max_value:.0f}")
            return False

        at_risk = evaluate_configuration(live, self.calibration).is_risk
        current = live.value_of(axis_id)
        if current is None:
            # Nothing to compare against; only SeatX can be unknown and it is never gated
            return True
        if not is_movement_allowed_under_risk(axis, requested, current, at_risk):
            logger.warning(
                f"🚫 {axis.label}: move {current:.0f} -> {requested:.0f} refused, "
                f"rig is at collision risk"
            )
            return False
        return True

    def message(self, axis_id: AxisIdentity, value: float, live: LiveConfiguration) -> Optional[str]:
        return restriction_message(value, self.axis(axis_id), live, self.calibration)
