"""Protocol layer for serial communication with the EasyVR module."""

from .channel import CommandChannel
from .codec import (
    encode_argument,
    decode_argument,
    is_argument_byte,
    encode_label,
    decode_label,
    label_length,
)
from .status import SessionState, StatusDecoder, DecoderState
from .timing import quantize_delay, sonicnet_ticks

__all__ = [
    "CommandChannel",
    "encode_argument",
    "decode_argument",
    "is_argument_byte",
    "encode_label",
    "decode_label",
    "label_length",
    "SessionState",
    "StatusDecoder",
    "DecoderState",
    "quantize_delay",
    "sonicnet_ticks",
]
