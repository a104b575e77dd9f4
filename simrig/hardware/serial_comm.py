"""
Thread-safe serial communication handler
Talks to the rig controller through a BLE-UART bridge
"""

import serial
import time
import threading
import logging
from typing import Iterable, List, Optional

from ..config import PROTOCOL, SERIAL_DEFAULTS
from .protocol import AxisValue, CommandBuilder, parse_notification

logger = logging.getLogger(__name__)

class SerialConnection:
    """Thread-safe line-based link to the rig"""

    def __init__(self, port: str, baudrate: int = SERIAL_DEFAULTS["baudrate"],
                 timeout: float = SERIAL_DEFAULTS["timeout"],
                 settle_time: float = SERIAL_DEFAULTS["settle_time"]):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.settle_time = settle_time
        self._serial: Optional[serial.Serial] = None
        self._lock = threading.Lock()
        self._connected = False
        self._pending = b""

    @property
    def is_connected(self) -> bool:
        """Check if serial connection is open"""
        return bool(self._connected and self._serial and self._serial.is_open)

    def connect(self) -> bool:
        """Establish serial connection"""
        with self._lock:
            try:
                if self._serial and self._serial.is_open:
                    self._serial.close()

                self._serial = serial.Serial(
                    port=self.port,
                    baudrate=self.baudrate,
                    timeout=self.timeout,
                    write_timeout=SERIAL_DEFAULTS["write_timeout"],
                    bytesize=serial.EIGHTBITS,
                    parity=serial.PARITY_NONE,
                    stopbits=serial.STOPBITS_ONE
                )

                # Bridge needs a moment after the port opens
                time.sleep(self.settle_time)
                self._serial.reset_input_buffer()
                self._pending = b""

                self._connected = True
                logger.info(f"✅ Connected to {self.port} @ {self.baudrate} baud")
                return True

            except serial.SerialException as e:
                logger.error(f"❌ Connection failed: {e}")
                self._connected = False
                return False

    def disconnect(self):
        """Close serial connection"""
        with self._lock:
            if self._serial and self._serial.is_open:
                try:
                    self._serial.close()
                    logger.info("🔌 Serial connection closed")
                except serial.SerialException as e:
                    logger.error(f"Error closing serial: {e}")
            self._connected = False

    def send_command(self, command: str) -> bool:
        """Send one command line, True if it was written"""
        if not self.is_connected:
            logger.warning("Not connected")
            return False

        with self._lock:
            try:
                self._serial.write(CommandBuilder.encode(command))
                self._serial.flush()
                logger.debug(f"→ {command}")
                return True
            except serial.SerialTimeoutException:
                logger.error("Serial write timeout")
                return False
            except serial.SerialException as e:
                logger.error(f"Command error: {e}")
                return False

    def send_sequence(self, commands: Iterable[str],
                      delay: float = SERIAL_DEFAULTS["command_delay"]) -> bool:
        """
        Send commands one after another
        Stops at the first command that cannot be written
        """
        commands = list(commands)
        for index, command in enumerate(commands):
            if not self.send_command(command):
                return False
            if index < len(commands) - 1:
                time.sleep(delay)
        return True

    def read_notifications(self, timeout: float = SERIAL_DEFAULTS["read_timeout"]) -> List[AxisValue]:
        """Collect axis values from complete lines received within timeout"""
        if not self.is_connected:
            return []

        terminator = PROTOCOL["line_terminator"].encode(PROTOCOL["encoding"])
        values: List[AxisValue] = []
        deadline = time.time() + timeout

        with self._lock:
            try:
                while time.time() < deadline:
                    waiting = self._serial.in_waiting
                    if waiting:
                        self._pending += self._serial.read(waiting)
                        while terminator in self._pending:
                            line, self._pending = self._pending.split(terminator, 1)
                            text = line.decode(PROTOCOL["encoding"], errors="ignore")
                            values.extend(parse_notification(text))
                        if values:
                            break
                    time.sleep(0.01)  # Small delay to prevent busy waiting
            except serial.SerialException as e:
                logger.error(f"Read error: {e}")

        return values
