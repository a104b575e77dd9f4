"""
Text protocol of the rig controller
Notifications and commands are "<key>:<integer>" pairs, e.g. "x:432,z:720"
"""

import math
import logging
from dataclasses import dataclass
from typing import List, Mapping, Tuple

from dataclasses_json import dataclass_json

from ..config import PROTOCOL
from ..motion.axes import AxisIdentity, AxisSpec, AXES_CONFIG, axis_for_key, get_axis

logger = logging.getLogger(__name__)


@dataclass_json
@dataclass(frozen=True)
class AxisValue:
    """One axis position reported by the rig"""

    axis: AxisIdentity
    value: int


def parse_notification(message: str, axes: Tuple[AxisSpec, ...] = AXES_CONFIG) -> List[AxisValue]:
    """
    Parse a notification into axis values

    Values are truncated to integers. Malformed pairs, non-finite numbers
    and unknown keys are skipped.
    """
    values = []
    for component in message.strip().split(PROTOCOL["pair_separator"]):
        parts = component.strip().split(PROTOCOL["value_separator"])
        if len(parts) != 2:
            if component.strip():
                logger.debug(f"Ignoring malformed pair: {component!r}")
            continue

        key, raw = parts[0].strip(), parts[1].strip()
        try:
            number = float(raw)
        except ValueError:
            logger.debug(f"Ignoring non-numeric value: {component!r}")
            continue
        if not math.isfinite(number):
            logger.debug(f"Ignoring non-finite value: {component!r}")
            continue

        axis = axis_for_key(key, axes)
        if axis is None:
            logger.debug(f"Ignoring unknown axis key: {key!r}")
            continue

        values.append(AxisValue(axis=axis.id, value=int(number)))
    return values


class CommandBuilder:
    """Build rig commands"""

    def __init__(self, axes: Tuple[AxisSpec, ...] = AXES_CONFIG):
        self.axes = axes

    def axis_command(self, axis_id: AxisIdentity, value: float) -> str:
        """
        Build a single axis command
        Value is truncated to an integer as the controller expects
        """
        axis = get_axis(axis_id, self.axes)
        return f"{axis.key}{PROTOCOL['value_separator']}{int(value)}"

    def sequence(self, values: Mapping[AxisIdentity, float]) -> List[str]:
        """Commands for several axes, in table order"""
        return [
            self.axis_command(axis.id, values[axis.id])
            for axis in self.axes
            if axis.id in values
        ]

    @staticmethod
    def encode(command: str) -> bytes:
        """Frame a command for the serial bridge"""
        return (command + PROTOCOL["line_terminator"]).encode(PROTOCOL["encoding"])
