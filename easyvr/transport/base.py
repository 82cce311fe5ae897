"""Abstract base class for the transport layer.

The Transport interface is the byte stream the protocol engine talks through.
Implementations can be a serial port, a TCP bridge or a scripted test double.

Key principles:
- Raw bytes only (no knowledge of commands or status codes)
- Synchronous writes
- Single-byte reads bounded by a timeout
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class Transport(ABC):
    """Abstract byte-stream transport to an EasyVR module.

    Transports are responsible for:
    1. Managing connection lifecycle
    2. Writing bytes to the module
    3. Reading single bytes with a bounded wait

    Transports should NOT interpret the protocol. They are pure
    communication channels.
    """

    @abstractmethod
    def connect(self) -> bool:
        """Open the connection.

        Returns:
            True if connection successful, False otherwise
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection.

        Should be safe to call multiple times.
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write bytes to the module.

        Raises:
            TransportError: If not connected or the write fails
        """
        pass

    @abstractmethod
    def read_byte(self, timeout: Optional[float]) -> Optional[int]:
        """Read one byte.

        Args:
            timeout: Seconds to wait. 0 returns immediately if nothing is
                pending, None blocks until a byte arrives.

        Returns:
            The byte value, or None if the timeout expired

        Raises:
            TransportError: If not connected or the read fails
        """
        pass

    def reset_input_buffer(self) -> None:
        """Discard any bytes received but not read yet."""
        pass

    def __enter__(self) -> Transport:
        """Context manager support - connect on enter."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager support - disconnect on exit."""
        self.disconnect()
