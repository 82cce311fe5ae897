"""Command/argument channel over a byte-stream transport.

The module never volunteers an argument byte: the host polls for each one by
sending ARG_ACK, then reads a single byte. This layer implements that
handshake and nothing else; it never touches the session state.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import TransportTimeout, ProtocolError
from ..transport.base import Transport
from .codec import encode_argument, decode_argument, decode_label, is_argument_byte
from .constants import ARG_ACK, DEF_TIMEOUT

logger = logging.getLogger(__name__)


class CommandChannel:
    """Framing primitives of the EasyVR protocol.

    Example:
        >>> channel = CommandChannel(transport)
        >>> channel.send_command(ord('c'))
        >>> channel.send_argument(3)
        >>> channel.read_status()
        99
        >>> channel.receive_argument()
        5
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def send_command(self, command: int) -> None:
        """Write a command byte. No response is read."""
        logger.debug(f"TX command {chr(command)!r}")
        self._transport.write(bytes((command,)))

    def send_argument(self, value: int) -> None:
        """Encode an argument value and write it."""
        byte = encode_argument(value)
        logger.debug(f"TX argument {value} ({chr(byte)!r})")
        self._transport.write(bytes((byte,)))

    def send_raw_byte(self, byte: int) -> None:
        """Write a literal byte (label characters, reset selectors)."""
        logger.debug(f"TX raw {chr(byte)!r}")
        self._transport.write(bytes((byte,)))

    def send_raw_bytes(self, data: bytes) -> None:
        if data:
            logger.debug(f"TX raw {data!r}")
            self._transport.write(data)

    def read_status(self, timeout: Optional[float] = DEF_TIMEOUT) -> Optional[int]:
        """Read the first byte of a response.

        Args:
            timeout: Seconds to wait, 0 to poll, None to block

        Returns:
            The status byte, or None if nothing arrived in time
        """
        byte = self._transport.read_byte(timeout)
        if byte is not None:
            logger.debug(f"RX status {chr(byte)!r}")
        return byte

    def receive_raw_argument(self, timeout: Optional[float] = DEF_TIMEOUT) -> int:
        """Poll for one argument byte and return it undecoded.

        Raises:
            TransportTimeout: If no byte arrives in time
            ProtocolError: If the byte is outside the argument alphabet
        """
        self._transport.write(bytes((ARG_ACK,)))
        byte = self._transport.read_byte(timeout)
        if byte is None:
            raise TransportTimeout(f"No argument received within {timeout}s")
        if not is_argument_byte(byte):
            raise ProtocolError(f"Unexpected byte {byte:#04x} while reading an argument", byte=byte)
        return byte

    def receive_argument(self, timeout: Optional[float] = DEF_TIMEOUT) -> int:
        """Poll for one argument and decode it to [-1, 31]."""
        value = decode_argument(self.receive_raw_argument(timeout))
        logger.debug(f"RX argument {value}")
        return value

    def receive_label(self, length: int, timeout: Optional[float] = DEF_TIMEOUT) -> str:
        """Pull a label of `length` wire units (escapes included) and decode it."""
        data = bytes(self.receive_raw_argument(timeout) for _ in range(length))
        return decode_label(data)
