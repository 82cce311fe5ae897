"""Session state and status decoding for the EasyVR protocol.

The first byte of every response classifies the outcome and decides how many
follow-up arguments must be pulled through the channel. The decoder applies
the outcome to a SessionState, which accessors later read back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, Dict, Optional

from ..errors import TransportTimeout, ProtocolError
from ..models import StatusSnapshot
from .channel import CommandChannel
from .constants import (
    STS_SUCCESS,
    STS_SIMILAR,
    STS_RESULT,
    STS_TOKEN,
    STS_AWAKEN,
    STS_TIMEOUT,
    STS_INVALID,
    STS_ERROR,
    DEF_TIMEOUT,
)

logger = logging.getLogger(__name__)


class DecoderState(Enum):
    IDLE = "idle"
    AWAITING_STATUS = "awaiting_status"
    DECODING_ARGUMENTS = "decoding_arguments"


@dataclass
class SessionState:
    """Mutable record of the most recently decoded outcome.

    Owned by one engine instance. Flags are cleared at the start of every
    decode; last_group and last_module_id are caches that survive resets.
    """
    builtin_word_recognized: bool = False
    custom_command_recognized: bool = False
    error_pending: bool = False
    timed_out: bool = False
    invalid_sequence: bool = False
    memory_full: bool = False
    training_conflict: bool = False
    token_received: bool = False
    awakened: bool = False
    last_value: int = 0
    last_group: int = -1
    last_module_id: int = -1

    def reset(self) -> None:
        """Clear every outcome flag and the last value."""
        self.builtin_word_recognized = False
        self.custom_command_recognized = False
        self.error_pending = False
        self.timed_out = False
        self.invalid_sequence = False
        self.memory_full = False
        self.training_conflict = False
        self.token_received = False
        self.awakened = False
        self.last_value = 0

    def fail(self) -> None:
        """Defensive outcome for unexpected conditions: only the error flag."""
        self.reset()
        self.error_pending = True

    @property
    def is_clear(self) -> bool:
        """True when no outcome flag is set."""
        return not any(
            getattr(self, f.name) for f in fields(StatusSnapshot) if f.name != "last_value"
        )

    def snapshot(self) -> StatusSnapshot:
        """Create an immutable copy of the outcome flags and value."""
        return StatusSnapshot(
            **{f.name: getattr(self, f.name) for f in fields(StatusSnapshot)}
        )


class StatusDecoder:
    """State machine that interprets status bytes.

    Idle -> AwaitingStatus -> (DecodingArguments)* -> Idle

    Handles:
    - o              success, no payload
    - w, t, v        awakened / timeout / invalid, flag only
    - s, r           built-in word / custom command, one argument
    - f              SonicNet token, two arguments (high << 5 | low)
    - e              error code, two arguments (high << 4 | low)

    Anything else, or an argument read that fails half-way, leaves only the
    error flag set with last_value 0.
    """

    def __init__(self, channel: CommandChannel, state: SessionState):
        self._channel = channel
        self._state = state
        self._phase = DecoderState.IDLE
        self._handlers: Dict[int, Callable[[], None]] = {
            STS_SUCCESS: self._decode_success,
            STS_SIMILAR: self._decode_builtin_word,
            STS_RESULT: self._decode_custom_command,
            STS_TOKEN: self._decode_token,
            STS_AWAKEN: self._decode_awakened,
            STS_TIMEOUT: self._decode_timeout,
            STS_INVALID: self._decode_invalid,
            STS_ERROR: self._decode_error,
        }

    @property
    def phase(self) -> DecoderState:
        return self._phase

    @property
    def state(self) -> SessionState:
        return self._state

    def poll(self, timeout: Optional[float] = DEF_TIMEOUT) -> Optional[int]:
        """Wait for a status byte and decode it.

        Returns:
            The status byte, or None (state untouched) if none arrived
        """
        self._phase = DecoderState.AWAITING_STATUS
        try:
            status = self._channel.read_status(timeout)
        finally:
            self._phase = DecoderState.IDLE
        if status is None:
            return None
        self.decode(status)
        return status

    def decode(self, status: int) -> bool:
        """Apply a status byte (and its payload) to the session state.

        Returns:
            True if the status was recognised and fully read, False if the
            error outcome was applied instead
        """
        self._state.reset()
        handler = self._handlers.get(status)
        if handler is None:
            logger.warning(f"Unknown status byte {status:#04x}")
            self._state.fail()
            return False

        self._phase = DecoderState.DECODING_ARGUMENTS
        try:
            handler()
        except (TransportTimeout, ProtocolError) as e:
            logger.warning(f"Status {chr(status)!r} payload incomplete: {e}")
            self._state.fail()
            return False
        finally:
            self._phase = DecoderState.IDLE

        logger.debug(f"Decoded status {chr(status)!r}: {self._state.snapshot()}")
        return True

    # Variant handlers

    def _decode_success(self) -> None:
        pass

    def _decode_builtin_word(self) -> None:
        self._read_word_index()
        self._state.builtin_word_recognized = True

    def _decode_custom_command(self) -> None:
        self._read_word_index()
        self._state.custom_command_recognized = True

    def _read_word_index(self) -> None:
        """Shared payload of word and command results: one argument."""
        self._state.last_value = self._channel.receive_argument()

    def _decode_token(self) -> None:
        high = self._channel.receive_argument()
        low = self._channel.receive_argument()
        self._state.last_value = (high << 5) | low
        self._state.token_received = True

    def _decode_error(self) -> None:
        high = self._channel.receive_argument()
        low = self._channel.receive_argument()
        self._state.last_value = ((high << 4) | low) & 0xFF
        self._state.error_pending = True

    def _decode_awakened(self) -> None:
        self._state.awakened = True

    def _decode_timeout(self) -> None:
        self._state.timed_out = True

    def _decode_invalid(self) -> None:
        self._state.invalid_sequence = True
