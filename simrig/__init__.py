"""
SimRig - Collision safety for a motion simulator rig
=====================================================

Clearance model, safe travel ranges and input gating for the seat lift,
steering plate and wheel tilt of a seating simulator.
"""

__version__ = "1.0.0"
__author__ = "SimRig Team"

# Version check
import sys
if sys.version_info < (3, 9):
    raise RuntimeError("SimRig requires Python 3.9 or later")

# Convenience imports
from .motion import (AxisIdentity, AxisSpec, LiveConfiguration, Calibration,
                     ClearanceResult, SafeRange, evaluate, safe_range,
                     clamp_to_safe_range, validate_range, is_movement_allowed_under_risk)
from .control.controller import RigController

__all__ = [
    'AxisIdentity', 'AxisSpec', 'LiveConfiguration', 'Calibration',
    'ClearanceResult', 'SafeRange', 'evaluate', 'safe_range',
    'clamp_to_safe_range', 'validate_range', 'is_movement_allowed_under_risk',
    'RigController'
]
