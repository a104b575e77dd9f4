"""Collision safety and axis range module"""

from .axes import (AxisIdentity, AxisSpec, LiveConfiguration, AXES_CONFIG,
                   DEFAULT_LIVE_CONFIGURATION, get_axis, axis_for_key, resolve_axis)
from .clearance import (Calibration, ClearanceResult, DEFAULT_CALIBRATION,
                        evaluate, evaluate_configuration, lost_clearance, h30_point)
from .limits import SafeRange, safe_range, scan_safe_range
from .validator import (InputValidator, validate_range, clamp_to_range, clamp_to_safe_range,
                        is_movement_allowed_under_risk, restriction_message)
from .measurement import AxisMapping, AXIS_MAPPINGS, to_measurement

__all__ = [
    'AxisIdentity',
    'AxisSpec',
    'LiveConfiguration',
    'AXES_CONFIG',
    'DEFAULT_LIVE_CONFIGURATION',
    'get_axis',
    'axis_for_key',
    'resolve_axis',
    'Calibration',
    'ClearanceResult',
    'DEFAULT_CALIBRATION',
    'evaluate',
    'evaluate_configuration',
    'lost_clearance',
    'h30_point',
    'SafeRange',
    'safe_range',
    'scan_safe_range',
    'InputValidator',
    'validate_range',
    'clamp_to_range',
    'clamp_to_safe_range',
    'is_movement_allowed_under_risk',
    'restriction_message',
    'AxisMapping',
    'AXIS_MAPPINGS',
    'to_measurement',
]
