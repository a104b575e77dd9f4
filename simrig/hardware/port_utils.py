"""
Serial port detection utilities
Finds the BLE-UART bridge the rig controller is paired with
"""

import sys
import serial.tools.list_ports
from typing import List, Optional

from ..config import PORT_HINTS

def _fallback_port() -> str:
    if sys.platform == "darwin":  # macOS
        return "/dev/cu.usbserial-10"
    elif sys.platform.startswith("linux"):
        return "/dev/ttyUSB0"
    return "COM3"

def get_default_port() -> str:
    """
    Auto-detect the most likely bridge port
    Ports matching PORT_HINTS win in hint order, then the first port,
    then a platform default when nothing is attached.
    """
    ports = list(serial.tools.list_ports.comports())

    if not ports:
        return _fallback_port()

    for hint in PORT_HINTS:
        needle = hint.lower()
        for port in ports:
            text = f"{port.device} {port.description or ''}".lower()
            if needle in text:
                return port.device

    return ports[0].device

def list_available_ports() -> List[dict]:
    """
    List all available serial ports with details
    Returns list of dicts with device, description, hwid and bridge flag
    """
    result = []
    for port in serial.tools.list_ports.comports():
        text = f"{port.device} {port.description or ''}".lower()
        result.append({
            'device': port.device,
            'description': port.description or "",
            'hwid': port.hwid or "",
            'is_bridge': any(hint.lower() in text for hint in PORT_HINTS),
        })
    return result

def find_port(name: Optional[str]) -> str:
    """Use the given port, or auto-detect one"""
    return name if name else get_default_port()
