"""
Slider value to physical measurement mapping
Only used for the MEAS scale; safety math always runs on slider values
"""

from dataclasses import dataclass
from typing import Dict

from ..config.defaults import MEASUREMENT_MAPPINGS
from .axes import AxisIdentity


@dataclass(frozen=True)
class AxisMapping:
    """Linear map from slider range onto measurement range"""

    slider_min: float
    slider_max: float
    meas_min: float
    meas_max: float

    def to_measurement(self, slider_value: float) -> float:
        # Extrapolates outside the slider range
        normalized = (slider_value - self.slider_min) / (self.slider_max - self.slider_min)
        return self.meas_min + (self.meas_max - self.meas_min) * normalized


AXIS_MAPPINGS: Dict[AxisIdentity, AxisMapping] = {
    AxisIdentity(tag): AxisMapping(**mapping)
    for tag, mapping in MEASUREMENT_MAPPINGS.items()
}


def to_measurement(axis_id: AxisIdentity, slider_value: float) -> float:
    """Measurement shown for a slider value"""
    return AXIS_MAPPINGS[axis_id].to_measurement(slider_value)
