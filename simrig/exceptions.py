"""Exceptions raised by SimRig"""


class ConfigurationError(ValueError):
    """
    Raised when axis specs, calibration or settings are inconsistent.

    Numeric safety checks never raise; only configuration loaded at
    start-up can be rejected.
    """
    pass
