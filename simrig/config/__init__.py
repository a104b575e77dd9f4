"""Configuration module for SimRig"""

from .defaults import *
from .settings import Settings

__all__ = [
    'AXIS_DEFINITIONS', 'AXIS_SEND_ORDER', 'START_POSITIONS', 'CALIBRATION',
    'SCAN_STEP', 'MEASUREMENT_MAPPINGS', 'PROTOCOL', 'SERIAL_DEFAULTS',
    'PORT_HINTS', 'Settings'
]
