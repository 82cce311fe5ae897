"""Unit tests for serial port discovery (pyserial's port listing mocked)."""

import unittest
from types import SimpleNamespace
from unittest.mock import patch

from easyvr.transport.port_finder import (
    PortInfo,
    find_single_port,
    is_matching_port,
    is_port_available,
    PortNotFoundError,
    MultiplePortsError,
)

FTDI_VID = 0x0403
FTDI_PID = 0x6001


def fake_port(device, vid=FTDI_VID, pid=FTDI_PID, product="FT232R USB UART"):
    return SimpleNamespace(
        device=device,
        vid=vid,
        pid=pid,
        product=product,
        hwid="n/a" if vid is None else f"USB VID:PID={vid:04X}:{pid:04X}",
    )


BUILTIN_UART = fake_port("/dev/ttyS0", vid=None, pid=None, product=None)
USB_MOUSE = fake_port("/dev/hidraw0", vid=0x046D, pid=0xC077, product="USB Optical Mouse")


class TestMatching(unittest.TestCase):
    """Tests for is_matching_port."""

    def setUp(self):
        self.ftdi = PortInfo("/dev/ttyUSB0", FTDI_VID, FTDI_PID, "FT232R USB UART", "hwid")

    def test_known_adapter_matches_by_default(self):
        self.assertTrue(is_matching_port(self.ftdi))
        self.assertEqual(self.ftdi.adapter, "FTDI")

    def test_builtin_uart_does_not_match_by_default(self):
        info = PortInfo("/dev/ttyS0", None, None, None, "n/a")
        self.assertIsNone(info.adapter)
        self.assertFalse(is_matching_port(info))

    def test_unknown_usb_device_does_not_match_by_default(self):
        info = PortInfo("/dev/ttyACM3", 0x046D, 0xC077, "Mouse", "hwid")
        self.assertFalse(is_matching_port(info))

    def test_vid_pid(self):
        self.assertTrue(is_matching_port(self.ftdi, expected_vid=FTDI_VID, expected_pid=FTDI_PID))
        self.assertFalse(is_matching_port(self.ftdi, expected_vid=0x10C4))
        self.assertFalse(is_matching_port(self.ftdi, expected_pid=0xEA60))

    def test_explicit_criteria_replace_default(self):
        info = PortInfo("/dev/ttyACM3", 0x1234, 0x0001, "Custom Bridge", "hwid")
        self.assertTrue(is_matching_port(info, expected_vid=0x1234))

    def test_product_substring_case_insensitive(self):
        self.assertTrue(is_matching_port(self.ftdi, product_substring="ft232r"))
        self.assertFalse(is_matching_port(self.ftdi, product_substring="CP210"))

    def test_product_substring_without_product(self):
        info = PortInfo("/dev/ttyUSB1", FTDI_VID, FTDI_PID, None, "hwid")
        self.assertFalse(is_matching_port(info, product_substring="FT232R"))


@patch('easyvr.transport.port_finder.core.list_ports.comports')
class TestDiscovery(unittest.TestCase):
    """Tests for find_single_port and is_port_available."""

    def test_skips_unrelated_ports(self, mock_comports):
        mock_comports.return_value = [BUILTIN_UART, USB_MOUSE, fake_port("/dev/ttyUSB0")]

        info = find_single_port()

        self.assertEqual(info.port, "/dev/ttyUSB0")

    def test_only_builtin_uart(self, mock_comports):
        mock_comports.return_value = [BUILTIN_UART]

        with self.assertRaises(PortNotFoundError):
            find_single_port()

    def test_no_ports(self, mock_comports):
        mock_comports.return_value = []

        with self.assertRaises(PortNotFoundError):
            find_single_port()

    def test_multiple_adapters(self, mock_comports):
        mock_comports.return_value = [
            fake_port("/dev/ttyUSB0"),
            fake_port("/dev/ttyACM0", vid=0x2341, pid=0x0043, product="Arduino Uno"),
        ]

        with self.assertRaises(MultiplePortsError) as ctx:
            find_single_port()
        self.assertEqual(len(ctx.exception.ports), 2)

    def test_criteria_narrow_multiple_adapters(self, mock_comports):
        mock_comports.return_value = [
            fake_port("/dev/ttyUSB0"),
            fake_port("/dev/ttyACM0", vid=0x2341, pid=0x0043, product="Arduino Uno"),
        ]

        info = find_single_port(expected_vid=0x2341)

        self.assertEqual(info.port, "/dev/ttyACM0")
        self.assertEqual(info.adapter, "Arduino")

    def test_is_port_available(self, mock_comports):
        mock_comports.return_value = [fake_port("/dev/ttyUSB0")]

        self.assertTrue(is_port_available("/dev/ttyUSB0"))
        self.assertFalse(is_port_available("/dev/ttyUSB9"))


if __name__ == '__main__':
    unittest.main()
