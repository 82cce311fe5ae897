"""Unit tests for SerialTransport (pyserial mocked)."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import serial

from easyvr.errors import TransportError, PortNotFoundError
from easyvr.transport.port_finder import PortInfo
from easyvr.transport.serial import SerialTransport


class TestSerialTransportInit(unittest.TestCase):
    """Tests for SerialTransport initialization."""

    def test_init_defaults(self):
        """Test initialization with default parameters."""
        transport = SerialTransport()

        self.assertIsNone(transport.port)
        self.assertEqual(transport.baudrate, 9600)
        self.assertFalse(transport.is_connected())

    def test_init_custom_params(self):
        transport = SerialTransport(port="/dev/ttyUSB3", baudrate=115200)

        self.assertEqual(transport.port, "/dev/ttyUSB3")
        self.assertEqual(transport.baudrate, 115200)


class TestSerialTransportConnect(unittest.TestCase):
    """Tests for connection management."""

    @patch('easyvr.transport.serial.serial.Serial')
    def test_connect_explicit_port(self, mock_serial_class):
        """Test connecting with explicit port."""
        mock_serial = MagicMock()
        mock_serial_class.return_value = mock_serial

        transport = SerialTransport(port="/dev/ttyUSB0")
        result = transport.connect()

        self.assertTrue(result)
        self.assertTrue(transport.is_connected())
        mock_serial_class.assert_called_once_with(
            port="/dev/ttyUSB0",
            baudrate=9600,
            timeout=None,
            write_timeout=1.0,
        )
        mock_serial.reset_input_buffer.assert_called_once()
        mock_serial.reset_output_buffer.assert_called_once()

    @patch('easyvr.transport.serial.serial.Serial')
    @patch('easyvr.transport.serial.find_single_port')
    def test_connect_auto_detect(self, mock_find, mock_serial_class):
        """Test connecting with auto-detection."""
        mock_find.return_value = PortInfo(
            port="/dev/ttyUSB1", vid=0x0403, pid=0x6001,
            product="FT232R USB UART", hwid="USB VID:PID=0403:6001",
        )
        mock_serial_class.return_value = MagicMock()

        transport = SerialTransport(expected_vid=0x0403, expected_pid=0x6001)

        self.assertTrue(transport.connect())
        self.assertEqual(transport.port, "/dev/ttyUSB1")
        mock_find.assert_called_once_with(
            expected_vid=0x0403, expected_pid=0x6001, product_substring=None
        )

    @patch('easyvr.transport.serial.serial.Serial')
    @patch('easyvr.transport.port_finder.core.list_ports.comports')
    def test_auto_detect_ignores_builtin_uart(self, mock_comports, mock_serial_class):
        """Test that auto-detection opens the USB-serial adapter, not ttyS0."""
        mock_comports.return_value = [
            SimpleNamespace(device="/dev/ttyS0", vid=None, pid=None, product=None, hwid="n/a"),
            SimpleNamespace(device="/dev/ttyUSB0", vid=0x10C4, pid=0xEA60,
                            product="CP2102 USB to UART", hwid="USB VID:PID=10C4:EA60"),
        ]
        mock_serial_class.return_value = MagicMock()

        transport = SerialTransport()

        self.assertTrue(transport.connect())
        self.assertEqual(transport.port, "/dev/ttyUSB0")

    @patch('easyvr.transport.serial.find_single_port')
    def test_connect_auto_detect_fails(self, mock_find):
        """Test that a missing adapter makes connect() return False."""
        mock_find.side_effect = PortNotFoundError("No matching serial port found")

        transport = SerialTransport()

        self.assertFalse(transport.connect())
        self.assertFalse(transport.is_connected())

    @patch('easyvr.transport.serial.serial.Serial')
    def test_connect_failure(self, mock_serial_class):
        mock_serial_class.side_effect = serial.SerialException("Port busy")

        transport = SerialTransport(port="/dev/ttyUSB0")

        self.assertFalse(transport.connect())
        self.assertFalse(transport.is_connected())

    @patch('easyvr.transport.serial.serial.Serial')
    def test_connect_already_connected(self, mock_serial_class):
        mock_serial_class.return_value = MagicMock()

        transport = SerialTransport(port="/dev/ttyUSB0")
        transport.connect()

        self.assertTrue(transport.connect())
        mock_serial_class.assert_called_once()

    @patch('easyvr.transport.serial.serial.Serial')
    def test_disconnect(self, mock_serial_class):
        mock_serial = MagicMock()
        mock_serial_class.return_value = mock_serial

        transport = SerialTransport(port="/dev/ttyUSB0")
        transport.connect()
        transport.disconnect()
        transport.disconnect()

        self.assertFalse(transport.is_connected())
        mock_serial.close.assert_called_once()


class TestSerialTransportIO(unittest.TestCase):
    """Tests for reading and writing bytes."""

    def setUp(self):
        patcher = patch('easyvr.transport.serial.serial.Serial')
        self.mock_serial_class = patcher.start()
        self.addCleanup(patcher.stop)

        self.mock_serial = MagicMock()
        self.mock_serial_class.return_value = self.mock_serial

        self.transport = SerialTransport(port="/dev/ttyUSB0")
        self.transport.connect()

    def test_write(self):
        self.transport.write(b"gDF")

        self.mock_serial.write.assert_called_once_with(b"gDF")
        self.mock_serial.flush.assert_called_once()

    def test_write_not_connected(self):
        transport = SerialTransport(port="/dev/ttyUSB0")
        with self.assertRaises(TransportError):
            transport.write(b"b")

    def test_write_error_closes_port(self):
        self.mock_serial.write.side_effect = serial.SerialException("Device removed")

        with self.assertRaises(TransportError):
            self.transport.write(b"b")

        self.assertFalse(self.transport.is_connected())
        self.mock_serial.close.assert_called_once()

    def test_read_byte(self):
        self.mock_serial.read.return_value = b"o"

        self.assertEqual(self.transport.read_byte(0.5), ord('o'))
        self.mock_serial.read.assert_called_once_with(1)
        self.assertEqual(self.mock_serial.timeout, 0.5)

    def test_read_byte_timeout(self):
        self.mock_serial.read.return_value = b""
        self.assertIsNone(self.transport.read_byte(0))

    def test_read_byte_error(self):
        self.mock_serial.read.side_effect = serial.SerialException("Device removed")

        with self.assertRaises(TransportError):
            self.transport.read_byte(0.5)
        self.assertFalse(self.transport.is_connected())

    def test_set_baudrate(self):
        self.transport.set_baudrate(115200)

        self.assertEqual(self.transport.baudrate, 115200)
        self.assertEqual(self.mock_serial.baudrate, 115200)

    def test_context_manager(self):
        with SerialTransport(port="/dev/ttyUSB0") as transport:
            self.assertTrue(transport.is_connected())
        self.assertFalse(transport.is_connected())


class TestPortAvailability(unittest.TestCase):

    @patch('easyvr.transport.serial.is_port_available')
    def test_is_port_available(self, mock_available):
        mock_available.return_value = True

        transport = SerialTransport(port="/dev/ttyUSB0")

        self.assertTrue(transport.is_port_available())
        mock_available.assert_called_once_with("/dev/ttyUSB0")

    def test_no_port_configured(self):
        self.assertFalse(SerialTransport().is_port_available())


if __name__ == '__main__':
    unittest.main()
