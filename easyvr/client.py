"""High-level client for the EasyVR speech recognition module.

Every public operation is one half-duplex transaction: validate the inputs,
send a command byte and its arguments, then either read the response
(synchronous operations) or return at once and leave the module busy
(asynchronous operations, polled with has_finished()).
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Type, Union

from .errors import (
    ValidationError,
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
    GrammarInfo,
    Knob,
    Language,
    Level,
    MessageAttenuation,
    MessageInfo,
    MessageSpeed,
    MessageType,
    ModuleId,
    PinConfig,
    PinNumber,
    RejectionLevel,
    SoundTable,
    StatusSnapshot,
    WakeMode,
)
from .protocol import constants as c
from .protocol.channel import CommandChannel
from .protocol.codec import (
    encode_label,
    label_length,
    decode_argument,
    is_argument_byte,
    MAX_LABEL_LENGTH,
)
from .protocol.status import SessionState, StatusDecoder
from .protocol.timing import quantize_delay, sonicnet_ticks
from .transport.base import Transport
from .transport.serial import SerialTransport, DEFAULT_BAUDRATE

logger = logging.getLogger(__name__)

GROUP_MAX = 16
INDEX_MAX = 31
WORDSET_MAX = 31
SOUND_INDEX_MAX = 1023
VOLUME_MAX = 31
TIMEOUT_MAX = 31
LIPSYNC_THRESHOLD_MAX = 1023
LIPSYNC_TIMEOUT_MAX = 255
PHONE_TONE_DURATION_MAX = 32
DTMF_UNIT = 0.04  # seconds per duration unit, for keypad tones

NOT_SET = -1

EnumArg = Union[IntEnum, int]


@dataclass(frozen=True)
class Timeouts:
    """Read timeouts, in seconds, for each class of operation."""
    default: float = c.DEF_TIMEOUT
    storage: float = c.STORAGE_TIMEOUT
    wake: float = c.WAKE_TIMEOUT
    play: float = c.PLAY_TIMEOUT
    token: float = c.TOKEN_TIMEOUT
    maintenance: float = c.MAINTENANCE_TIMEOUT


def _check_range(name: str, value: int, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{name} must be in [{low}, {high}], got {value!r}")
    return int(value)


def _check_enum(name: str, enum_cls: Type[IntEnum], value: EnumArg) -> IntEnum:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{name} must be one of {enum_cls.__name__}, got {value!r}") from None


class EasyVR:
    """Protocol engine for one EasyVR module.

    The engine owns its transport and its session state. Operations are
    serialized by an internal lock, and an asynchronous operation keeps the
    engine busy until has_finished() returns True or stop() is called.

    Example:
        >>> vr = EasyVR(port="/dev/ttyUSB0")
        >>> vr.connect()
        True
        >>> vr.detect()
        True
        >>> vr.recognize_word(Wordset.ACTION_SET)
        >>> while not vr.has_finished():
        ...     time.sleep(0.05)
        >>> vr.get_word()
        3
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        port: Optional[str] = None,
        baudrate: int = DEFAULT_BAUDRATE,
        timeouts: Optional[Timeouts] = None,
    ):
        """Initialize the engine.

        Args:
            transport: Existing Transport instance, or None to create a SerialTransport
            port: Serial port for a new transport (if transport is None)
            baudrate: Baud rate for a new transport (if transport is None)
            timeouts: Read timeouts per operation class (default: protocol values)
        """
        self._transport = transport or SerialTransport(port=port, baudrate=baudrate)
        self._timeouts = timeouts or Timeouts()
        self._channel = CommandChannel(self._transport)
        self._state = SessionState()
        self._decoder = StatusDecoder(self._channel, self._state)

        self._lock = threading.Lock()
        self._pending: Optional[str] = None
        self._protocol_faults = 0
        self._faulted = False

    # --- Connection ---

    @property
    def transport(self) -> Transport:
        return self._transport

    def connect(self) -> bool:
        return self._transport.connect()

    def disconnect(self) -> None:
        self._pending = None
        self._transport.disconnect()

    def is_connected(self) -> bool:
        return self._transport.is_connected()

    def __enter__(self) -> EasyVR:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    @property
    def pending_operation(self) -> Optional[str]:
        """Name of the asynchronous operation in flight, if any."""
        return self._pending

    @property
    def protocol_fault_count(self) -> int:
        """Consecutive transactions that ended with a protocol fault.

        A growing count points at a persistent fault (wrong baud rate, noise,
        firmware mismatch) rather than a one-off glitch.
        """
        return self._protocol_faults

    # --- Transaction helpers ---

    @contextmanager
    def _transaction(self, name: str, allow_pending: bool = False) -> Iterator[None]:
        with self._lock:
            if self._pending is not None and not allow_pending:
                raise TransactionPendingError(
                    f"Cannot start {name}: {self._pending} is still pending"
                )
            self._faulted = False
            try:
                yield
            except ProtocolError:
                self._protocol_faults += 1
                logger.warning(f"{name} failed with a protocol fault "
                               f"({self._protocol_faults} in a row)")
                raise
            if not self._faulted:
                self._protocol_faults = 0

    def _send(self, command: int, *args: int) -> None:
        self._channel.send_command(command)
        for arg in args:
            self._channel.send_argument(arg)

    def _read_status(self, timeout: Optional[float]) -> int:
        status = self._channel.read_status(timeout)
        if status is None:
            raise TransportTimeout(f"No response within {timeout}s")
        return status

    def _decode(self, status: int) -> None:
        if not self._decoder.decode(status):
            self._faulted = True
            self._protocol_faults += 1

    def _expect(self, expected: int, timeout: Optional[float]) -> bool:
        """Read a status byte; decode it into the session state if unexpected."""
        status = self._read_status(timeout)
        if status == expected:
            return True
        self._decode(status)
        return False

    def _simple(self, name: str, command: int, *args: int,
                timeout: Optional[float] = None) -> bool:
        """Synchronous command answered by a plain success status."""
        with self._transaction(name):
            self._send(command, *args)
            status = self._read_status(self._timeouts.default if timeout is None else timeout)
            return status == c.STS_SUCCESS

    def _start(self, name: str, command: int, *args: int) -> None:
        """Asynchronous command: send and leave the module busy."""
        with self._transaction(name):
            self._send(command, *args)
            self._pending = name
            logger.debug(f"{name} started")

    def _receive_count(self) -> int:
        count = self._channel.receive_argument(self._timeouts.default)
        return 32 if count == -1 else count

    # --- Detection and housekeeping ---

    def detect(self) -> bool:
        """Detect a module, waking it from sleep and checking it responds."""
        with self._transaction("detect"):
            self._transport.reset_input_buffer()
            for attempt in range(c.DETECT_ATTEMPTS):
                self._channel.send_command(c.CMD_BREAK)
                if self._channel.read_status(self._timeouts.wake) == c.STS_SUCCESS:
                    logger.info(f"Module detected after {attempt + 1} attempt(s)")
                    return True
            logger.warning("No module detected")
            return False

    def stop(self) -> bool:
        """Interrupt recognition, training, playback or token detection.

        Returns:
            True if the module acknowledged the interruption
        """
        with self._transaction("stop", allow_pending=True):
            self._channel.send_command(c.CMD_BREAK)
            status = self._read_status(self._timeouts.storage)
            self._pending = None
            return status in (c.STS_INTERR, c.STS_SUCCESS)

    def sleep(self, mode: EnumArg) -> bool:
        """Put the module in power-down mode until the selected wake event."""
        mode = _check_enum("mode", WakeMode, mode)
        return self._simple("sleep", c.CMD_SLEEP, mode)

    def change_baudrate(self, baudrate: EnumArg) -> bool:
        """Set the module's serial speed.

        A SerialTransport owned by this engine follows the new speed
        automatically; other transports must be reconfigured by the caller.
        """
        baudrate = _check_enum("baudrate", Baudrate, baudrate)
        ok = self._simple("change_baudrate", c.CMD_BAUDRATE, baudrate)
        if ok and isinstance(self._transport, SerialTransport):
            self._transport.set_baudrate(baudrate.bits_per_second)
        return ok

    def get_id(self) -> int:
        """Get the module identification number.

        Returns:
            A ModuleId (or the raw id if unknown), -1 on an unexpected reply
        """
        with self._transaction("get_id"):
            self._channel.send_command(c.CMD_ID)
            if not self._expect(c.STS_ID, self._timeouts.default):
                self._state.last_module_id = NOT_SET
                return NOT_SET
            module_id = self._channel.receive_argument(self._timeouts.default)
            self._state.last_module_id = module_id
            try:
                return ModuleId(module_id)
            except ValueError:
                return module_id

    @property
    def module_id(self) -> int:
        """Module id cached by the last get_id() call (-1 if unknown)."""
        return self._state.last_module_id

    # --- Settings ---

    def set_language(self, language: EnumArg) -> bool:
        language = _check_enum("language", Language, language)
        return self._simple("set_language", c.CMD_LANGUAGE, language)

    def set_level(self, level: EnumArg) -> bool:
        """Set the strictness of custom command recognition."""
        level = _check_enum("level", Level, level)
        return self._simple("set_level", c.CMD_LEVEL, level)

    def set_knob(self, knob: EnumArg) -> bool:
        """Set the confidence threshold of built-in word recognition."""
        knob = _check_enum("knob", Knob, knob)
        return self._simple("set_knob", c.CMD_KNOB, knob)

    def set_mic_distance(self, distance: EnumArg) -> bool:
        distance = _check_enum("distance", Distance, distance)
        return self._simple("set_mic_distance", c.CMD_MIC_DIST, -1, distance)

    def set_trailing_silence(self, duration: int) -> bool:
        """Set the trailing silence (0-31, 100 ms + 25 ms per step).

        Accepts a TrailingSilence value or its raw step count.
        """
        duration = _check_range("duration", duration, 0, 31)
        return self._simple("set_trailing_silence", c.CMD_TRAILING, -1, duration)

    def set_command_latency(self, mode: EnumArg) -> bool:
        mode = _check_enum("mode", CommandLatency, mode)
        return self._simple("set_command_latency", c.CMD_FAST_SD, -1, mode)

    def set_timeout(self, seconds: int) -> bool:
        """Set the recognition timeout in seconds (0 = infinite)."""
        seconds = _check_range("seconds", seconds, 0, TIMEOUT_MAX)
        return self._simple("set_timeout", c.CMD_TIMEOUT, seconds)

    def set_delay(self, millis: int) -> bool:
        """Set the delay before the module replies, in milliseconds (0-1000)."""
        if isinstance(millis, bool) or not isinstance(millis, int):
            raise ValidationError(f"millis must be an integer, got {millis!r}")
        return self._simple("set_delay", c.CMD_DELAY, quantize_delay(millis))

    # --- Custom commands ---

    def add_command(self, group: int, index: int) -> bool:
        """Add a new custom command to a group.

        When the module is out of memory, is_memory_full() becomes True.
        """
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        with self._transaction("add_command"):
            self._send(c.CMD_GROUP_SD, group, index)
            status = self._read_status(self._timeouts.default)
            self._state.reset()
            if status == c.STS_SUCCESS:
                return True
            if status == c.STS_OUT_OF_MEM:
                self._state.memory_full = True
            return False

    def remove_command(self, group: int, index: int) -> bool:
        """Remove a custom command from a group."""
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        return self._simple("remove_command", c.CMD_UNGROUP_SD, group, index)

    def erase_command(self, group: int, index: int) -> bool:
        """Erase the training data of a custom command."""
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        return self._simple("erase_command", c.CMD_ERASE_SD, group, index)

    def set_command_label(self, group: int, index: int, name: str) -> bool:
        """Set the name of a custom command.

        Letters are sent upper-case, digits escaped, anything else as '_'.
        """
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        length = label_length(name)
        if length > MAX_LABEL_LENGTH:
            raise ValidationError(
                f"Label {name!r} needs {length} characters on the wire, "
                f"at most {MAX_LABEL_LENGTH} allowed"
            )
        with self._transaction("set_command_label"):
            self._send(c.CMD_NAME_SD, group, index, length)
            self._channel.send_raw_bytes(encode_label(name))
            return self._read_status(self._timeouts.storage) == c.STS_SUCCESS

    def train_command(self, group: int, index: int) -> None:
        """Start training a custom command. Poll with has_finished()."""
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        self._start("train_command", c.CMD_TRAIN_SD, group, index)

    def get_command_count(self, group: int) -> int:
        """Get the number of commands in a group (-1 on an unexpected reply)."""
        group = _check_range("group", group, 0, GROUP_MAX)
        with self._transaction("get_command_count"):
            self._send(c.CMD_COUNT_SD, group)
            if not self._expect(c.STS_COUNT, self._timeouts.default):
                return NOT_SET
            return self._receive_count()

    def get_group_mask(self) -> Optional[int]:
        """Get a bit mask of the groups holding at least one command."""
        with self._transaction("get_group_mask"):
            self._channel.send_command(c.CMD_MASK_SD)
            if not self._expect(c.STS_MASK, self._timeouts.default):
                return None
            mask = 0
            for i in range(c.GROUP_MASK_BYTES):
                mask |= self._receive_nibble_byte(low_first=True) << (8 * i)
            return mask

    def dump_command(self, group: int, index: int) -> Optional[CommandData]:
        """Retrieve the label and training count of a custom command.

        Conflict and recognition details of the training are reported
        through is_conflict(), get_command() and get_word().
        """
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        timeout = self._timeouts.default
        with self._transaction("dump_command"):
            self._send(c.CMD_DUMP_SD, group, index)
            if not self._expect(c.STS_DATA, timeout):
                return None

            # stays flagged if the payload is cut short
            self._state.fail()
            flags = self._channel.receive_argument(timeout)
            value = self._channel.receive_argument(timeout)
            length = self._channel.receive_argument(timeout)
            name = self._channel.receive_label(length, timeout)

            training = flags & 0x07
            if flags == -1 or training == 7:
                training = 0

            self._state.reset()
            self._state.training_conflict = (flags & 0x18) != 0
            self._state.custom_command_recognized = (flags & 0x08) != 0
            self._state.builtin_word_recognized = (flags & 0x10) != 0
            self._state.last_value = value
            return CommandData(name=name, training=training)

    def export_command(self, group: int, index: int) -> Optional[bytes]:
        """Retrieve the raw internal data of a custom command."""
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        timeout = self._timeouts.storage
        with self._transaction("export_command"):
            self._send(c.CMD_SERVICE, c.SVC_EXPORT_SD - c.ARG_ZERO, group, index)
            if not self._expect(c.STS_SERVICE, timeout):
                return None
            reply = self._channel.receive_argument(timeout)
            if reply != c.SVC_DUMP_SD - c.ARG_ZERO:
                raise ProtocolError(f"Unexpected service reply {reply}")
            return bytes(
                self._receive_nibble_byte(low_first=False)
                for _ in range(c.COMMAND_DATA_SIZE)
            )

    def import_command(self, group: int, index: int, data: bytes) -> bool:
        """Overwrite the raw internal data of a custom command.

        Imported commands should be checked with verify_command().
        """
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        if len(data) != c.COMMAND_DATA_SIZE:
            raise ValidationError(
                f"Command data must be {c.COMMAND_DATA_SIZE} bytes, got {len(data)}"
            )
        with self._transaction("import_command"):
            self._send(c.CMD_SERVICE, c.SVC_IMPORT_SD - c.ARG_ZERO, group, index)
            for byte in data:
                self._channel.send_argument((byte >> 4) & 0x0F)
                self._channel.send_argument(byte & 0x0F)
            return self._read_status(self._timeouts.storage) == c.STS_SUCCESS

    def verify_command(self, group: int, index: int) -> None:
        """Start verifying the training of an imported command. Poll with has_finished()."""
        group = _check_range("group", group, 0, GROUP_MAX)
        index = _check_range("index", index, 0, INDEX_MAX)
        self._start("verify_command", c.CMD_SERVICE, c.SVC_VERIFY_SD - c.ARG_ZERO, group, index)

    def _receive_nibble_byte(self, low_first: bool) -> int:
        first = self._channel.receive_argument(self._timeouts.default)
        second = self._channel.receive_argument(self._timeouts.default)
        if low_first:
            return (first & 0x0F) | ((second << 4) & 0xF0)
        return ((first << 4) & 0xF0) | (second & 0x0F)

    # --- Recognition ---

    def recognize_command(self, group: int) -> None:
        """Start recognition of the custom commands in a group."""
        group = _check_range("group", group, 0, GROUP_MAX)
        with self._transaction("recognize_command"):
            self._send(c.CMD_RECOG_SD, group)
            self._state.last_group = group
            self._pending = "recognize_command"
            logger.debug("recognize_command started")

    def recognize_word(self, wordset: int) -> None:
        """Start recognition of a built-in word set or custom grammar."""
        wordset = _check_range("wordset", wordset, 0, WORDSET_MAX)
        self._start("recognize_word", c.CMD_RECOG_SI, wordset)

    def has_finished(self) -> bool:
        """Poll an asynchronous operation without blocking.

        Returns:
            True once the completion status has been received and decoded
        """
        with self._transaction("has_finished", allow_pending=True):
            status = self._channel.read_status(c.NO_TIMEOUT)
            if status is None:
                return False
            self._decode(status)
            if self._pending:
                logger.debug(f"{self._pending} finished")
            self._pending = None
            return True

    @property
    def last_group(self) -> int:
        """Group of the last recognize_command() call (-1 if none)."""
        return self._state.last_group

    # --- Grammars ---

    def get_grammars_count(self) -> int:
        """Get the number of grammars, built-in and custom (-1 on an unexpected reply)."""
        with self._transaction("get_grammars_count"):
            self._send(c.CMD_DUMP_SI, -1)
            if not self._expect(c.STS_COUNT, self._timeouts.default):
                return NOT_SET
            return self._receive_count()

    def dump_grammar(self, grammar: int) -> Optional[GrammarInfo]:
        """Retrieve the flags and word count of a grammar.

        The word labels follow and are read with get_next_word_label().
        """
        grammar = _check_range("grammar", grammar, 0, WORDSET_MAX)
        with self._transaction("dump_grammar"):
            self._send(c.CMD_DUMP_SI, grammar)
            if not self._expect(c.STS_GRAMMAR, self._timeouts.default):
                return None
            flags = self._channel.receive_argument(self._timeouts.default)
            if flags == -1:
                flags = 32
            count = self._channel.receive_argument(self._timeouts.default)
            return GrammarInfo(flags=flags, count=count)

    def get_next_word_label(self) -> str:
        """Read the next word label of the grammar dumped by dump_grammar()."""
        with self._transaction("get_next_word_label"):
            length = self._receive_count()
            return self._channel.receive_label(length, self._timeouts.default)

    # --- Sound table ---

    def dump_sound_table(self) -> Optional[SoundTable]:
        """Retrieve the sound table label and the number of sounds."""
        timeout = self._timeouts.default
        with self._transaction("dump_sound_table"):
            self._channel.send_command(c.CMD_DUMP_SX)
            if not self._expect(c.STS_TABLE_SX, timeout):
                return None
            high = self._channel.receive_argument(timeout)
            low = self._channel.receive_argument(timeout)
            length = self._channel.receive_argument(timeout)
            name = self._channel.receive_label(length, timeout)
            return SoundTable(name=name, count=(high << 5) | low)

    def _sound_args(self, index: int, volume: int):
        index = _check_range("index", index, 0, SOUND_INDEX_MAX)
        volume = _check_range("volume", volume, 0, VOLUME_MAX)
        return (index >> 5) & 0x1F, index & 0x1F, volume

    def play_sound(self, index: int, volume: int) -> bool:
        """Play a sound from the sound table and wait for it to finish."""
        args = self._sound_args(index, volume)
        return self._simple("play_sound", c.CMD_PLAY_SX, *args, timeout=self._timeouts.play)

    def play_sound_async(self, index: int, volume: int) -> None:
        """Start playing a sound from the sound table. Poll with has_finished()."""
        args = self._sound_args(index, volume)
        self._start("play_sound_async", c.CMD_PLAY_SX, *args)

    def play_phone_tone(self, tone: int, duration: int) -> bool:
        """Play a DTMF tone (duration in 40 ms units) or the dial tone (in seconds)."""
        tone = _check_range("tone", tone, -1, 15)
        duration = _check_range("duration", duration, 1, PHONE_TONE_DURATION_MAX)
        play_time = duration if tone < 0 else duration * DTMF_UNIT
        return self._simple("play_phone_tone", c.CMD_PLAY_DTMF, -1, tone, duration - 1,
                            timeout=play_time + self._timeouts.default)

    # --- SonicNet tokens ---

    @staticmethod
    def _token_args(bits: EnumArg, token: int):
        bits = _check_enum("bits", BitNumber, bits)
        token = _check_range("token", token, 0, bits.max_token)
        return bits, (token >> 5) & 0x1F, token & 0x1F

    def send_token(self, bits: EnumArg, token: int) -> bool:
        """Play a SonicNet token and wait for it to finish."""
        args = self._token_args(bits, token)
        return self._simple("send_token", c.CMD_SEND_SN, *args, 0, 0,
                            timeout=self._timeouts.token)

    def send_token_async(self, bits: EnumArg, token: int) -> None:
        """Start playing a SonicNet token. Poll with has_finished()."""
        args = self._token_args(bits, token)
        self._start("send_token_async", c.CMD_SEND_SN, *args, 0, 0)

    def embed_token(self, bits: EnumArg, token: int, delay: int) -> bool:
        """Schedule a token `delay` ms after the next sound starts playing.

        Valid for one playback only: call play_sound() right after.
        """
        args = self._token_args(bits, token)
        if isinstance(delay, bool) or not isinstance(delay, int):
            raise ValidationError(f"delay must be an integer, got {delay!r}")
        # must be > 0 to embed in some audio
        ticks = max(sonicnet_ticks(delay), 1)
        return self._simple("embed_token", c.CMD_SEND_SN, *args,
                            (ticks >> 5) & 0x1F, ticks & 0x1F)

    def detect_token(self, bits: EnumArg, rejection: EnumArg, timeout: int) -> None:
        """Start listening for a SonicNet token. Poll with has_finished().

        Args:
            bits: Token length
            rejection: Noise rejection level
            timeout: Milliseconds to listen (1-28090), or 0 without limit
        """
        bits = _check_enum("bits", BitNumber, bits)
        rejection = _check_enum("rejection", RejectionLevel, rejection)
        if isinstance(timeout, bool) or not isinstance(timeout, int):
            raise ValidationError(f"timeout must be an integer, got {timeout!r}")
        ticks = sonicnet_ticks(timeout)
        self._start("detect_token", c.CMD_RECV_SN, bits, rejection,
                    (ticks >> 5) & 0x1F, ticks & 0x1F)

    # --- I/O pins ---

    def set_pin_output(self, pin: EnumArg, value: EnumArg) -> bool:
        """Drive a pin low or high."""
        pin = _check_enum("pin", PinNumber, pin)
        value = _check_enum("value", PinConfig, value)
        if value.is_input:
            raise ValidationError(f"{value.name} is not an output level")
        return self._simple("set_pin_output", c.CMD_QUERY_IO, pin, value)

    def get_pin_input(self, pin: EnumArg, config: EnumArg) -> int:
        """Configure a pin as input and read its level (-1 on an unexpected reply)."""
        pin = _check_enum("pin", PinNumber, pin)
        config = _check_enum("config", PinConfig, config)
        if not config.is_input:
            raise ValidationError(f"{config.name} is not an input configuration")
        with self._transaction("get_pin_input"):
            self._send(c.CMD_QUERY_IO, pin, config)
            if not self._expect(c.STS_PIN, self._timeouts.default):
                return NOT_SET
            return self._channel.receive_argument(self._timeouts.default)

    # --- Lip-sync ---

    def realtime_lipsync(self, threshold: int, timeout: int) -> bool:
        """Start real-time lip-sync on the microphone input.

        Mouth positions are then read with fetch_mouth_position() until it
        returns None.

        Args:
            threshold: Audio level threshold (0-1023)
            timeout: Seconds of silence before lip-sync stops (0-255)
        """
        threshold = _check_range("threshold", threshold, 0, LIPSYNC_THRESHOLD_MAX)
        timeout = _check_range("timeout", timeout, 0, LIPSYNC_TIMEOUT_MAX)
        with self._transaction("realtime_lipsync"):
            self._send(c.CMD_LIPSYNC, -1,
                       (threshold >> 5) & 0x1F, threshold & 0x1F,
                       (timeout >> 4) & 0x0F, timeout & 0x0F)
            if not self._expect(c.STS_LIPSYNC, self._timeouts.default):
                return False
            self._pending = "realtime_lipsync"
            return True

    def fetch_mouth_position(self) -> Optional[int]:
        """Get the current mouth opening (0-31) during lip-sync.

        Returns:
            The position, or None once lip-sync has finished (the final status
            is decoded into the session state)
        """
        allowed = self._pending in (None, "realtime_lipsync")
        with self._transaction("fetch_mouth_position", allow_pending=allowed):
            self._channel.send_raw_byte(c.ARG_ACK)
            status = self._read_status(self._timeouts.default)
            if is_argument_byte(status):
                return decode_argument(status)
            self._decode(status)
            self._pending = None
            return None

    # --- Recorded messages ---

    def record_message_async(self, index: int, bits: EnumArg, timeout: int) -> None:
        """Start recording a message. Poll with has_finished()."""
        index = _check_range("index", index, 0, INDEX_MAX)
        bits = _check_enum("bits", MessageType, bits)
        timeout = _check_range("timeout", timeout, 0, TIMEOUT_MAX)
        self._start("record_message_async", c.CMD_RECORD_RP, -1, index, bits, timeout)

    def play_message_async(self, index: int, speed: EnumArg, attenuation: EnumArg) -> None:
        """Start playing a recorded message. Poll with has_finished()."""
        index = _check_range("index", index, 0, INDEX_MAX)
        speed = _check_enum("speed", MessageSpeed, speed)
        attenuation = _check_enum("attenuation", MessageAttenuation, attenuation)
        self._start("play_message_async", c.CMD_PLAY_RP, -1, index,
                    (speed << 2) | (attenuation & 3))

    def erase_message_async(self, index: int) -> None:
        """Start erasing a recorded message. Poll with has_finished()."""
        index = _check_range("index", index, 0, INDEX_MAX)
        self._start("erase_message_async", c.CMD_ERASE_RP, -1, index)

    def dump_message(self, index: int) -> Optional[MessageInfo]:
        """Retrieve the type and length of a recorded message.

        On failure get_error() tells why.
        """
        index = _check_range("index", index, 0, INDEX_MAX)
        with self._transaction("dump_message"):
            self._send(c.CMD_DUMP_RP, -1, index)
            if not self._expect(c.STS_MESSAGE, self._timeouts.storage):
                return None

            # stays flagged if the payload is cut short
            self._state.fail()
            msg_type = self._channel.receive_argument(self._timeouts.default)
            length = 0
            if msg_type != 0:
                for i in range(c.MESSAGE_LENGTH_BYTES):
                    length |= self._receive_nibble_byte(low_first=True) << (8 * i)
            self._state.reset()
            return MessageInfo(type=msg_type, length=length)

    def check_messages(self) -> bool:
        """Check recorded messages for consistency.

        When the check fails get_error() returns ERR_CUSTOM_INVALID.
        """
        with self._transaction("check_messages"):
            self._send(c.CMD_VERIFY_RP, -1, 0)
            self._decode(self._read_status(self._timeouts.storage))
            return self._state.is_clear

    def fix_messages(self, wait: bool = True) -> bool:
        """Check recorded messages and drop incomplete ones.

        This takes several seconds. With wait=False the call returns at once
        and completion is polled with has_finished().
        """
        return self._maintenance("fix_messages", c.CMD_VERIFY_RP, wait, args=(-1, 1))

    # --- Memory reset ---

    def reset_all(self, wait: bool = True) -> bool:
        """Erase all custom commands, groups and recorded messages."""
        return self._maintenance("reset_all", c.CMD_RESETALL, wait, raw=c.RESET_ALL)

    def reset_commands(self, wait: bool = True) -> bool:
        """Erase all custom commands and groups."""
        return self._maintenance("reset_commands", c.CMD_RESET_SD, wait, raw=c.RESET_COMMANDS)

    def reset_messages(self, wait: bool = True) -> bool:
        """Erase all recorded messages."""
        return self._maintenance("reset_messages", c.CMD_RESET_RP, wait, raw=c.RESET_MESSAGES)

    def _maintenance(self, name: str, command: int, wait: bool,
                     args=(), raw: Optional[int] = None) -> bool:
        with self._transaction(name):
            self._send(command, *args)
            if raw is not None:
                self._channel.send_raw_byte(raw)
            if not wait:
                self._pending = name
                return True
            logger.info(f"{name}: waiting up to {self._timeouts.maintenance}s")
            return self._read_status(self._timeouts.maintenance) == c.STS_SUCCESS

    # --- Results ---

    @property
    def status(self) -> StatusSnapshot:
        """Snapshot of the last decoded outcome."""
        return self._state.snapshot()

    def get_command(self) -> int:
        """Index of the recognised custom command, or -1."""
        return self._state.last_value if self._state.custom_command_recognized else NOT_SET

    def get_word(self) -> int:
        """Index of the recognised built-in word, or -1."""
        return self._state.last_value if self._state.builtin_word_recognized else NOT_SET

    def get_token(self) -> int:
        """Index of the received SonicNet token, or -1."""
        return self._state.last_value if self._state.token_received else NOT_SET

    def get_error(self) -> int:
        """Last error code (0-255), or -1 if no error was reported."""
        return self._state.last_value if self._state.error_pending else NOT_SET

    def is_awakened(self) -> bool:
        return self._state.awakened

    def is_conflict(self) -> bool:
        return self._state.training_conflict

    def is_invalid(self) -> bool:
        return self._state.invalid_sequence

    def is_memory_full(self) -> bool:
        return self._state.memory_full

    def is_timeout(self) -> bool:
        return self._state.timed_out
