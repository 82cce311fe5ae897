"""Serial transport for the EasyVR module.

The module speaks 8N1 at 9600 baud after power-up. This layer only moves
bytes: it does not interpret commands or status codes.
"""
from __future__ import annotations

import logging
from typing import Optional

import serial

from ..errors import TransportError, PortNotFoundError, MultiplePortsError
from .base import Transport
from .port_finder import find_single_port, is_port_available

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 9600
WRITE_TIMEOUT = 1.0  # seconds


class SerialTransport(Transport):
    """Transport over a pyserial port.

    Responsibilities:
    - Open/close the serial port (auto-detecting it when not given)
    - Write raw bytes
    - Read single bytes with a per-call timeout

    Example:
        >>> transport = SerialTransport(port="/dev/ttyUSB0")
        >>> transport.connect()
        True
        >>> transport.write(b"b")
        >>> transport.read_byte(0.2)
        111
        >>> transport.disconnect()
    """

    def __init__(self,
                 port: Optional[str] = None,
                 baudrate: int = DEFAULT_BAUDRATE,
                 expected_vid: Optional[int] = None,
                 expected_pid: Optional[int] = None,
                 product_substring: Optional[str] = None):
        """Initialize serial transport.

        Args:
            port: Serial port path (e.g., '/dev/ttyUSB0'), or None to auto-detect the
                single port behind a known USB-serial bridge
            baudrate: Serial baud rate (default 9600)
            expected_vid: USB VID of the serial adapter, narrowing auto-detection
            expected_pid: USB PID of the serial adapter, used for auto-detection
            product_substring: Product string of the adapter, used for auto-detection
        """
        self._port = port
        self._baudrate = baudrate
        self._expected_vid = expected_vid
        self._expected_pid = expected_pid
        self._product_substring = product_substring

        self._serial: Optional[serial.Serial] = None
        self._connected = False
        self._read_timeout: Optional[float] = None

    @property
    def port(self) -> Optional[str]:
        return self._port

    @property
    def baudrate(self) -> int:
        return self._baudrate

    def connect(self) -> bool:
        """Open the serial port.

        If port is None, attempts to auto-detect it.

        Returns:
            True if connection successful, False otherwise
        """
        if self._connected:
            logger.warning("Already connected")
            return True

        if self._port is None:
            try:
                info = find_single_port(
                    expected_vid=self._expected_vid,
                    expected_pid=self._expected_pid,
                    product_substring=self._product_substring,
                )
                self._port = info.port
                logger.info(f"Auto-detected serial port {self._port}")
            except (PortNotFoundError, MultiplePortsError) as e:
                logger.error(f"Serial port not found: {e}")
                return False

        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                timeout=self._read_timeout,
                write_timeout=WRITE_TIMEOUT,
            )
            self._serial.reset_input_buffer()
            self._serial.reset_output_buffer()
        except serial.SerialException as e:
            logger.error(f"Failed to open {self._port}: {e}")
            self._serial = None
            return False

        self._connected = True
        logger.info(f"Connected to {self._port} @ {self._baudrate} baud")
        return True

    def disconnect(self) -> None:
        """Close the serial port."""
        if not self._connected:
            return

        self._connected = False
        if self._serial:
            try:
                self._serial.close()
            except serial.SerialException as e:
                logger.error(f"Error closing serial port: {e}")
            finally:
                self._serial = None

        logger.info(f"Disconnected from {self._port}")

    def is_connected(self) -> bool:
        return self._connected and self._serial is not None

    def is_port_available(self) -> bool:
        """Check if the configured port is present, without opening it."""
        if self.is_connected():
            return True
        if self._port is None:
            return False
        return is_port_available(self._port)

    def write(self, data: bytes) -> None:
        """Write raw bytes and wait until they are sent."""
        port = self._require_serial()
        try:
            port.write(data)
            port.flush()
        except serial.SerialException as e:
            logger.error(f"Send error: {e}")
            self._handle_error(e)
            raise TransportError(f"Write to {self._port} failed: {e}") from e

    def read_byte(self, timeout: Optional[float]) -> Optional[int]:
        """Read one byte, waiting at most timeout seconds (None blocks)."""
        port = self._require_serial()
        try:
            if timeout != self._read_timeout:
                port.timeout = timeout
                self._read_timeout = timeout
            data = port.read(1)
        except serial.SerialException as e:
            logger.error(f"Serial read error: {e}")
            self._handle_error(e)
            raise TransportError(f"Read from {self._port} failed: {e}") from e

        if not data:
            return None
        return data[0]

    def reset_input_buffer(self) -> None:
        self._require_serial().reset_input_buffer()

    def set_baudrate(self, baudrate: int) -> None:
        """Change the local port speed, e.g. after the module switched speed."""
        self._baudrate = baudrate
        if self._serial is not None:
            self._serial.baudrate = baudrate
            logger.info(f"Serial speed set to {baudrate} baud")

    # Internal methods

    def _require_serial(self) -> serial.Serial:
        if not self.is_connected():
            raise TransportError("Not connected")
        return self._serial

    def _handle_error(self, error: Exception) -> None:
        """Close resources after a fatal error (e.g. adapter unplugged)."""
        logger.warning(f"Handling connection error: {error}")
        self._connected = False

        if self._serial:
            try:
                self._serial.close()
            except serial.SerialException:
                logger.debug("Ignoring error while closing a failed port", exc_info=True)
            self._serial = None

        logger.info("Connection closed due to error")
