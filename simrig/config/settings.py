"""
Runtime settings management
Handles loading/saving user preferences and calibration overrides
"""

import os
import logging
import yaml
from pathlib import Path
from typing import Dict, Optional
from dataclasses import dataclass, asdict, field

from .defaults import SERIAL_DEFAULTS

logger = logging.getLogger(__name__)

@dataclass
class Settings:
    """Runtime settings that can be modified by user"""

    # Connection settings
    port: Optional[str] = None
    baudrate: int = SERIAL_DEFAULTS["baudrate"]
    timeout: float = SERIAL_DEFAULTS["timeout"]
    settle_time: float = SERIAL_DEFAULTS["settle_time"]
    command_delay: float = SERIAL_DEFAULTS["command_delay"]

    # Logging
    debug_mode: bool = False
    log_level: str = "INFO"

    # Overrides for collision calibration (see CALIBRATION)
    calibration: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def load(cls, filepath: str = None) -> "Settings":
        """Load settings from YAML file"""
        if filepath is None:
            filepath = cls._get_default_path()

        if os.path.exists(filepath):
            try:
                with open(filepath, 'r') as f:
                    data = yaml.safe_load(f) or {}
                    return cls(**data)
            except (OSError, yaml.YAMLError, TypeError) as e:
                logger.warning(f"⚠️ Could not load settings from {filepath}: {e}")

        return cls()  # Return defaults

    def save(self, filepath: str = None):
        """Save settings to YAML file"""
        if filepath is None:
            filepath = self._get_default_path()

        # Ensure directory exists
        os.makedirs(os.path.dirname(filepath), exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.safe_dump(asdict(self), f, default_flow_style=False)

    def calibration_model(self):
        """Build the collision calibration, applying any overrides"""
        from ..motion.clearance import Calibration
        return Calibration.from_dict(self.calibration)

    @staticmethod
    def _get_default_path() -> str:
        """Get default settings path"""
        home = Path.home()
        return str(home / ".simrig" / "settings.yaml")

    def reset_to_defaults(self):
        """Reset all settings to defaults"""
        default = Settings()
        for name in default.__dataclass_fields__:
            setattr(self, name, getattr(default, name))
