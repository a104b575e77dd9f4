"""
Default configuration values for SimRig
Axis travel limits, collision calibration and transport settings
"""

# ==================== AXES ====================

# Static travel limits in native slider units (from the rig drawing)
# key: one-letter code used on the wire
AXIS_DEFINITIONS = {
    "seat_x_axis": {
        "label": "Seat X Axis (L63)",
        "key": "x",
        "min": 345.0,
        "max": 520.0,
    },
    "seat_z_axis": {
        "label": "Seat Z Axis (H5)",
        "key": "z",
        "min": 595.0,
        "max": 845.0,
    },
    "floor_z_axis": {
        "label": "Floor Z Axis (HF)",
        "key": "f",
        "min": 300.0,
        "max": 550.0,
    },
    "stg_wheel_center": {
        "label": "STG-Center (H17)",
        "key": "s",
        "min": 650.0,
        "max": 745.0,
    },
}

# Order in which "all axes" commands are sent
AXIS_SEND_ORDER = ("seat_x_axis", "seat_z_axis", "floor_z_axis", "stg_wheel_center")

# Rig position at power-up
START_POSITIONS = {
    "seat_x": 432.5,
    "seat_z": 720.0,
    "floor_z": 425.0,
    "steer_tilt": 697.5,
}

# ==================== COLLISION CALIBRATION ====================

# Baseline is the zero-risk reference configuration of the rig
CALIBRATION = {
    "base_seat_z": 595.0,           # H5 slider value at baseline
    "base_floor_z": 300.0,          # HF slider value at baseline
    "base_steer_tilt": 650.0,       # H17 slider value at baseline
    "safe_clearance": 230.0,        # mm physical gap at baseline
    "min_allowed_clearance": 80.0,  # mm, below this is a collision risk
    "steer_tilt_factor": 1.0,       # vertical contribution of H17
}

# Step of the legacy range scan, in native axis units
SCAN_STEP = 1.0

# ==================== DISPLAY ====================

# Slider value -> physical measurement shown on the MEAS scale
MEASUREMENT_MAPPINGS = {
    "seat_x_axis": {"slider_min": 345.0, "slider_max": 520.0,
                    "meas_min": 175.0, "meas_max": 0.0},
    "seat_z_axis": {"slider_min": 595.0, "slider_max": 845.0,
                    "meas_min": 300.0, "meas_max": 550.0},
    "floor_z_axis": {"slider_min": 300.0, "slider_max": 550.0,
                     "meas_min": 300.0, "meas_max": 550.0},
    "stg_wheel_center": {"slider_min": 650.0, "slider_max": 745.0,
                         "meas_min": 5.0, "meas_max": 100.0},
}

# ==================== COMMUNICATION ====================

# Text protocol of the rig controller ("z:720,f:425")
PROTOCOL = {
    "pair_separator": ",",
    "value_separator": ":",
    "line_terminator": "\n",
    "encoding": "utf-8",
}

# Serial settings for the BLE-UART bridge
SERIAL_DEFAULTS = {
    "baudrate": 115200,
    "timeout": 2.0,
    "write_timeout": 1.0,
    "settle_time": 2.0,         # wait after opening the port
    "command_delay": 0.1,       # 100ms between sequential commands
    "read_timeout": 0.5,
}

# Substrings that identify likely bridge devices, in priority order
PORT_HINTS = ("usbserial", "usbmodem", "ttyACM", "ttyUSB", "nrf", "uart")
