from .core import (
    KNOWN_ADAPTER_VIDS,
    PortInfo,
    find_single_port,
    is_matching_port,
    is_port_available,
)
from ...errors import PortNotFoundError, MultiplePortsError

__all__ = [
    "KNOWN_ADAPTER_VIDS",
    "PortInfo",
    "find_single_port",
    "is_matching_port",
    "is_port_available",
    "PortNotFoundError",
    "MultiplePortsError",
]
