"""Transport layer for EasyVR communication."""

from .base import Transport
from .serial import SerialTransport

__all__ = ["Transport", "SerialTransport"]
