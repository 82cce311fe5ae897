"""EasyVR SDK - host-side client for the EasyVR speech recognition module."""

from .client import EasyVR, Timeouts
from .errors import (
    EasyVRError,
    ValidationError,
    EncodingError,
    DecodingError,
    TransportError,
    TransportTimeout,
    ProtocolError,
    TransactionPendingError,
)
from .models import (
    Baudrate,
    BitNumber,
    CommandData,
    CommandLatency,
    Distance,
    ErrorCode,
    GrammarFlag,
    GrammarInfo,
    Group,
    Knob,
    Language,
    Level,
    MessageAttenuation,
    MessageInfo,
    MessageSpeed,
    MessageType,
    ModuleId,
    PhoneTone,
    PinConfig,
    PinNumber,
    RejectionLevel,
    SoundTable,
    SoundVolume,
    StatusSnapshot,
    TrailingSilence,
    WakeMode,
    Wordset,
)
from .transport import Transport, SerialTransport

__all__ = [
    "EasyVR",
    "Timeouts",
    "EasyVRError",
    "ValidationError",
    "EncodingError",
    "DecodingError",
    "TransportError",
    "TransportTimeout",
    "ProtocolError",
    "TransactionPendingError",
    "Baudrate",
    "BitNumber",
    "CommandData",
    "CommandLatency",
    "Distance",
    "ErrorCode",
    "GrammarFlag",
    "GrammarInfo",
    "Group",
    "Knob",
    "Language",
    "Level",
    "MessageAttenuation",
    "MessageInfo",
    "MessageSpeed",
    "MessageType",
    "ModuleId",
    "PhoneTone",
    "PinConfig",
    "PinNumber",
    "RejectionLevel",
    "SoundTable",
    "SoundVolume",
    "StatusSnapshot",
    "TrailingSilence",
    "WakeMode",
    "Wordset",
    "Transport",
    "SerialTransport",
]
