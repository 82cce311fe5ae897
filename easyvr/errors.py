"""Exceptions raised by the EasyVR SDK."""


class EasyVRError(RuntimeError):
    """Base class for every error raised by this package."""
    pass


class ValidationError(EasyVRError, ValueError):
    """Raised when a caller-supplied argument is outside its documented range.

    Always raised before anything is written to the transport.
    """
    pass


class EncodingError(ValidationError):
    """Raised when a value has no protocol argument encoding."""
    pass


class TransportError(EasyVRError):
    """Raised when the transport is not connected or a write fails."""
    pass


class TransportTimeout(EasyVRError, TimeoutError):
    """Raised when the module does not answer within the operation timeout."""
    pass


class ProtocolError(EasyVRError):
    """Raised when a received byte matches no expected status or argument.

    Attributes:
        byte: The offending byte, or None when not applicable
    """
    def __init__(self, message, byte=None):
        super().__init__(message)
        self.byte = byte


class DecodingError(ProtocolError):
    """Raised when a byte is outside the argument alphabet."""
    pass


class TransactionPendingError(EasyVRError):
    """Raised when a command is issued while an earlier one is still pending."""
    pass


class PortNotFoundError(EasyVRError):
    """Raised when no matching serial port could be found."""
    pass


class MultiplePortsError(EasyVRError):
    """Raised when more than one matching serial port is found."""
    def __init__(self, message, ports):
        super().__init__(message)
        self.ports = ports  # list[PortInfo]
