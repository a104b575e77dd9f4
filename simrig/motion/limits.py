"""
Safe travel range of each axis given the positions of the others

Holding two coupled axes fixed, lost clearance is linear in the third,
so the risk-free part of its travel is a half-line cut at one threshold.
safe_range() solves for that threshold directly. scan_safe_range() walks
the travel in fixed steps and is kept as the reference the closed form
is checked against.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from dataclasses_json import dataclass_json

from ..config.defaults import SCAN_STEP
from .axes import AxisSpec, LiveConfiguration
from .clearance import Calibration, DEFAULT_CALIBRATION, evaluate, lost_clearance

logger = logging.getLogger(__name__)

# Max ulp nudges when float rounding lands a bound on the risk side
_MAX_NUDGES = 64


@dataclass_json
@dataclass(frozen=True)
class SafeRange:
    """
    Closed risk-free sub-interval of an axis' travel

    fully_restricted marks the case where no position of the axis is
    risk-free; lower == upper then holds the least risky position and
    callers should refuse movement on that axis.
    """

    lower: float
    upper: float
    fully_restricted: bool = False

    def contains(self, value: float) -> bool:
        if self.fully_restricted:
            return False
        return self.lower <= value <= self.upper

    def clamp(self, value: float) -> float:
        if math.isnan(self.lower) or math.isnan(self.upper):
            return math.nan
        if math.isnan(value):
            return value
        return min(max(value, self.lower), self.upper)

    def is_narrower_than(self, axis: AxisSpec) -> bool:
        """True if collision limits cut into the static travel"""
        return self.lower > axis.min_value or self.upper < axis.max_value


def _full_range(axis: AxisSpec) -> SafeRange:
    return SafeRange(axis.min_value, axis.max_value)


def _restricted(axis: AxisSpec, coefficient: float) -> SafeRange:
    # Least lost clearance sits at the end where the axis term is smallest
    point = axis.max_value if coefficient < 0 else axis.min_value
    logger.debug(f"{axis.id.name}: no risk-free position, holding at {point}")
    return SafeRange(point, point, fully_restricted=True)


def _is_risk_at(axis: AxisSpec, value: float, live: LiveConfiguration,
                calibration: Calibration) -> bool:
    probe = live.with_axis(axis.id, value)
    return evaluate(probe.seat_z, probe.floor_z, probe.steer_tilt, calibration).is_risk


def _settle(axis: AxisSpec, bound: float, toward: float, live: LiveConfiguration,
            calibration: Calibration) -> Optional[float]:
    """
    Step a computed bound inward until the model agrees it is safe
    None if no safe value turned up within _MAX_NUDGES steps
    """
    for _ in range(_MAX_NUDGES):
        if not _is_risk_at(axis, bound, live, calibration):
            return bound
        bound = math.nextafter(bound, toward)
    if not _is_risk_at(axis, bound, live, calibration):
        return bound
    logger.debug(f"{axis.id.name}: bound {bound} still at risk after {_MAX_NUDGES} nudges")
    return None


def safe_range(axis: AxisSpec, live: LiveConfiguration,
               calibration: Calibration = DEFAULT_CALIBRATION) -> SafeRange:
    """
    Risk-free range of `axis` with the other axes held at `live`

    The axis' own value in `live` is ignored. SeatX is never restricted.
    """
    if not axis.id.in_collision_model:
        return _full_range(axis)

    coefficient = calibration.coefficient(axis.id)
    base = calibration.baseline(axis.id)

    # Lost clearance with this axis parked at its baseline
    parked = live.with_axis(axis.id, base)
    rest = lost_clearance(parked.seat_z, parked.floor_z, parked.steer_tilt, calibration)
    if math.isnan(rest):
        return SafeRange(math.nan, math.nan, fully_restricted=True)

    # Safe iff coefficient * (v - base) + rest <= risk_budget
    headroom = calibration.risk_budget - rest

    if coefficient == 0:
        return _full_range(axis) if headroom >= 0 else _restricted(axis, coefficient)

    threshold = base + headroom / coefficient

    if coefficient > 0:
        # Safe below the threshold
        if threshold < axis.min_value:
            return _restricted(axis, coefficient)
        upper = _settle(axis, min(threshold, axis.max_value), -math.inf, live, calibration)
        if upper is None or upper < axis.min_value:
            return _restricted(axis, coefficient)
        return SafeRange(axis.min_value, upper)

    # Safe above the threshold
    if threshold > axis.max_value:
        return _restricted(axis, coefficient)
    lower = _settle(axis, max(threshold, axis.min_value), math.inf, live, calibration)
    if lower is None or lower > axis.max_value:
        return _restricted(axis, coefficient)
    return SafeRange(lower, axis.max_value)


def _scan_lost(axis: AxisSpec, live: LiveConfiguration, candidates: np.ndarray,
               calibration: Calibration) -> np.ndarray:
    """Lost clearance for each candidate value of `axis`"""
    probe = {
        "seat_z": np.full_like(candidates, live.seat_z),
        "floor_z": np.full_like(candidates, live.floor_z),
        "steer_tilt": np.full_like(candidates, live.steer_tilt),
    }
    probe[axis.id.field_name] = candidates
    return lost_clearance(probe["seat_z"], probe["floor_z"], probe["steer_tilt"], calibration)


def scan_safe_range(axis: AxisSpec, live: LiveConfiguration,
                    calibration: Calibration = DEFAULT_CALIBRATION,
                    step: Optional[float] = None) -> SafeRange:
    """
    Safe range found by stepping through the travel

    Walks up from min_value and down from max_value in `step` units; the
    first risk-free value from each side becomes the bound. If nothing in
    the travel is risk-free the least risky grid value is returned as a
    fully restricted range.
    """
    if not axis.id.in_collision_model:
        return _full_range(axis)

    step = SCAN_STEP if step is None else step
    if step <= 0:
        raise ValueError(f"Scan step must be positive, got {step}")

    count = int(math.floor(axis.span / step + 1e-9)) + 1
    offsets = step * np.arange(count)
    ascending = axis.min_value + offsets
    descending = axis.max_value - offsets

    up_lost = _scan_lost(axis, live, ascending, calibration)
    down_lost = _scan_lost(axis, live, descending, calibration)

    # NaN compares False, so it counts as risk
    up_safe = calibration.safe_clearance - np.maximum(up_lost, 0.0) >= calibration.min_allowed_clearance
    down_safe = calibration.safe_clearance - np.maximum(down_lost, 0.0) >= calibration.min_allowed_clearance

    if not up_safe.any() and not down_safe.any():
        if np.isnan(up_lost).all():
            return SafeRange(math.nan, math.nan, fully_restricted=True)
        point = float(ascending[int(np.nanargmin(up_lost))])
        return SafeRange(point, point, fully_restricted=True)

    lower = float(ascending[int(np.argmax(up_safe))]) if up_safe.any() else axis.min_value
    upper = float(descending[int(np.argmax(down_safe))]) if down_safe.any() else axis.max_value
    return SafeRange(lower, upper)
