from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from serial.tools import list_ports

from ...errors import PortNotFoundError, MultiplePortsError

logger = logging.getLogger(__name__)

# USB-serial bridges an EasyVR module is reached through: stand-alone adapter
# cables and the host boards the EasyVR Shield plugs into.
KNOWN_ADAPTER_VIDS: Dict[int, str] = {
    0x0403: "FTDI",
    0x10C4: "Silicon Labs CP210x",
    0x067B: "Prolific PL2303",
    0x1A86: "WCH CH340",
    0x2341: "Arduino",
    0x2A03: "Arduino (arduino.org)",
}


@dataclass(frozen=True)
class PortInfo:
    """
    One candidate serial port.

    Attributes:
        port: Port name to open with pyserial (e.g. 'COM3', '/dev/ttyUSB0').
        vid: USB Vendor ID, or None for ports without a USB bridge.
        pid: USB Product ID, or None for ports without a USB bridge.
        product: USB product string, if available.
        hwid: Raw hardware ID string from pyserial (for logging).
    """
    port: str
    vid: Optional[int]
    pid: Optional[int]
    product: Optional[str]
    hwid: str

    @property
    def adapter(self) -> Optional[str]:
        """Name of the known USB-serial bridge, if recognised."""
        if self.vid is None:
            return None
        return KNOWN_ADAPTER_VIDS.get(self.vid)


def is_matching_port(
    info: PortInfo,
    *,
    expected_vid: Optional[int] = None,
    expected_pid: Optional[int] = None,
    product_substring: Optional[str] = None,
) -> bool:
    """
    Decide whether a port may lead to an EasyVR module.

    Without criteria, any port behind a known USB-serial bridge matches;
    built-in UARTs and unrelated USB devices do not. Given criteria are
    AND-combined and replace the default.
    """
    if expected_vid is None and expected_pid is None and product_substring is None:
        return info.adapter is not None

    if expected_vid is not None and info.vid != expected_vid:
        return False

    if expected_pid is not None and info.pid != expected_pid:
        return False

    if product_substring is not None:
        if not info.product or product_substring.lower() not in info.product.lower():
            return False

    return True


def is_port_available(port: str) -> bool:
    """Check if a port name is currently listed by the OS."""
    return any(p.device == port for p in list_ports.comports())


def _list_ports() -> List[PortInfo]:
    return [
        PortInfo(port=p.device, vid=p.vid, pid=p.pid, product=p.product, hwid=p.hwid)
        for p in list_ports.comports()
    ]


def find_single_port(
    *,
    expected_vid: Optional[int] = None,
    expected_pid: Optional[int] = None,
    product_substring: Optional[str] = None,
) -> PortInfo:
    """
    Find exactly one serial port that may lead to an EasyVR module.

    Raises:
        PortNotFoundError: No port matches
        MultiplePortsError: More than one port matches; pass a port name or
            narrower criteria instead of guessing
    """
    matches = [
        info for info in _list_ports()
        if is_matching_port(
            info,
            expected_vid=expected_vid,
            expected_pid=expected_pid,
            product_substring=product_substring,
        )
    ]

    if not matches:
        raise PortNotFoundError("No USB-serial adapter found")

    if len(matches) > 1:
        logger.error(f"Several candidate ports found: {[m.port for m in matches]}")
        raise MultiplePortsError(
            f"Multiple candidate serial ports found ({len(matches)} ports)",
            ports=matches,
        )

    info = matches[0]
    logger.debug(f"Selected {info.port} ({info.adapter or info.hwid})")
    return info
