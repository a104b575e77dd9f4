"""Hardware communication module"""

from .serial_comm import SerialConnection
from .port_utils import get_default_port, list_available_ports, find_port
from .protocol import AxisValue, CommandBuilder, parse_notification

__all__ = [
    'SerialConnection',
    'get_default_port',
    'list_available_ports',
    'find_port',
    'AxisValue',
    'CommandBuilder',
    'parse_notification'
]
