"""
Axis identities, static axis specs and live rig positions
"""

import math
from enum import Enum
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from ..config.defaults import AXIS_DEFINITIONS, AXIS_SEND_ORDER, START_POSITIONS
from ..exceptions import ConfigurationError


class AxisIdentity(Enum):
    """Physical axes of the rig"""

    SEAT_X = "seat_x_axis"          # L63, fore/aft
    SEAT_Z = "seat_z_axis"          # H5, seat lift
    FLOOR_Z = "floor_z_axis"        # HF, steering plate
    STEER_TILT = "stg_wheel_center" # H17, wheel tilt

    @property
    def in_collision_model(self) -> bool:
        """SeatX has no geometric coupling to the other axes"""
        return self is not AxisIdentity.SEAT_X

    @property
    def field_name(self) -> str:
        """Attribute of LiveConfiguration holding this axis"""
        return _FIELD_NAMES[self]


# Attribute of LiveConfiguration holding each axis
_FIELD_NAMES = {
    AxisIdentity.SEAT_X: "seat_x",
    AxisIdentity.SEAT_Z: "seat_z",
    AxisIdentity.FLOOR_Z: "floor_z",
    AxisIdentity.STEER_TILT: "steer_tilt",
}


@dataclass(frozen=True)
class AxisSpec:
    """Static travel limits of one axis"""

    id: AxisIdentity
    min_value: float
    max_value: float
    label: str = ""
    key: str = ""

    def __post_init__(self):
        if not (math.isfinite(self.min_value) and math.isfinite(self.max_value)):
            raise ConfigurationError(f"{self.id.name}: limits must be finite")
        if self.min_value >= self.max_value:
            raise ConfigurationError(
                f"{self.id.name}: min {self.min_value} must be below max {self.max_value}"
            )

    @property
    def span(self) -> float:
        return self.max_value - self.min_value


@dataclass(frozen=True)
class LiveConfiguration:
    """
    Snapshot of the actuator positions at one instant.

    Owned by whoever tracks the rig; safety functions only read it.
    seat_x is optional since it never enters the clearance model.
    """

    seat_z: float
    floor_z: float
    steer_tilt: float
    seat_x: Optional[float] = None

    def value_of(self, axis_id: AxisIdentity) -> Optional[float]:
        return getattr(self, axis_id.field_name)

    def with_axis(self, axis_id: AxisIdentity, value: float) -> "LiveConfiguration":
        """Copy with one axis replaced"""
        return replace(self, **{axis_id.field_name: value})

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {name: getattr(self, name) for name in _FIELD_NAMES.values()}


def _build_axes() -> Tuple[AxisSpec, ...]:
    axes = []
    for tag in AXIS_SEND_ORDER:
        definition = AXIS_DEFINITIONS[tag]
        axes.append(AxisSpec(
            id=AxisIdentity(tag),
            min_value=float(definition["min"]),
            max_value=float(definition["max"]),
            label=definition["label"],
            key=definition["key"],
        ))
    return tuple(axes)


AXES_CONFIG = _build_axes()

DEFAULT_LIVE_CONFIGURATION = LiveConfiguration(**START_POSITIONS)


def get_axis(axis_id: AxisIdentity, axes: Tuple[AxisSpec, ...] = AXES_CONFIG) -> AxisSpec:
    """Look up the spec of an axis"""
    for axis in axes:
        if axis.id is axis_id:
            return axis
    raise KeyError(axis_id)


def axis_for_key(key: str, axes: Tuple[AxisSpec, ...] = AXES_CONFIG) -> Optional[AxisSpec]:
    """Find the axis with the given wire key, None if unknown"""
    for axis in axes:
        if axis.key == key:
            return axis
    return None


def resolve_axis(name: str, axes: Tuple[AxisSpec, ...] = AXES_CONFIG) -> AxisSpec:
    """
    Resolve a user supplied axis name

    Accepts the wire key ("z"), the identity name ("seat_z") or the
    axis tag ("seat_z_axis"), case-insensitive.
    """
    needle = name.strip().lower()
    for axis in axes:
        if needle in (axis.key, axis.id.name.lower(), axis.id.value):
            return axis
    raise ValueError(f"Unknown axis: {name!r}")
