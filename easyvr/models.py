"""Data models for the EasyVR module: configuration enums and result records.

Configuration values are closed enumerations mapped 1:1 to protocol integers.
Result records are frozen dataclasses returned by value from queries.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Baudrate(IntEnum):
    """Serial speeds, expressed as the bit-time divisor the module expects."""
    B115200 = 1
    B57600 = 2
    B38400 = 3
    B19200 = 6
    B9600 = 12

    @property
    def bits_per_second(self) -> int:
        return 115200 // self.value


class Language(IntEnum):
    """Languages of the built-in speaker independent word sets."""
    ENGLISH = 0
    ITALIAN = 1
    JAPANESE = 2
    GERMAN = 3
    SPANISH = 4
    FRENCH = 5


class Group(IntEnum):
    """Special custom command groups."""
    TRIGGER = 0
    PASSWORD = 16


class Wordset(IntEnum):
    """Built-in speaker independent word sets."""
    TRIGGER_SET = 0
    ACTION_SET = 1
    DIRECTION_SET = 2
    NUMBER_SET = 3


class Level(IntEnum):
    """Strictness of custom command recognition."""
    EASY = 1
    NORMAL = 2
    HARD = 3
    HARDER = 4
    HARDEST = 5


class Knob(IntEnum):
    """Confidence threshold of built-in word recognition."""
    LOOSER = 0
    LOOSE = 1
    TYPICAL = 2
    STRICT = 3
    STRICTER = 4


class Distance(IntEnum):
    """Microphone distance from the user's mouth."""
    HEADSET = 1
    ARMS_LENGTH = 2
    FAR_MIC = 3


class TrailingSilence(IntEnum):
    """Trailing silence before the end of a command, in 25 ms steps from 100 ms."""
    TRAILING_MIN = 0
    TRAILING_DEF = 12
    TRAILING_MAX = 31
    TRAILING_100MS = 0
    TRAILING_200MS = 4
    TRAILING_300MS = 8
    TRAILING_400MS = 12
    TRAILING_500MS = 16
    TRAILING_600MS = 20
    TRAILING_700MS = 24
    TRAILING_800MS = 28


class CommandLatency(IntEnum):
    MODE_NORMAL = 0
    MODE_FAST = 1


class WakeMode(IntEnum):
    """Events that bring the module back from sleep."""
    WAKE_ON_CHAR = 0
    WAKE_ON_WHISTLE = 1
    WAKE_ON_LOUDSOUND = 2
    WAKE_ON_2CLAPS = 3
    WAKE_ON_3CLAPS = 6


class PinNumber(IntEnum):
    IO1 = 1
    IO2 = 2
    IO3 = 3
    IO4 = 4
    IO5 = 5
    IO6 = 6


class PinConfig(IntEnum):
    """Pin configuration. Output levels double as output values."""
    OUTPUT_LOW = 0
    OUTPUT_HIGH = 1
    INPUT_HIZ = 2
    INPUT_STRONG = 3

    @property
    def is_input(self) -> bool:
        return self in (PinConfig.INPUT_HIZ, PinConfig.INPUT_STRONG)


class MessageType(IntEnum):
    MSG_EMPTY = 0
    MSG_8BIT = 8


class MessageSpeed(IntEnum):
    SPEED_NORMAL = 0
    SPEED_FASTER = 1


class MessageAttenuation(IntEnum):
    ATTEN_NONE = 0
    ATTEN_2DB2 = 1
    ATTEN_4DB5 = 2
    ATTEN_6DB7 = 3


class BitNumber(IntEnum):
    """Length of SonicNet tokens."""
    BITS_4 = 4
    BITS_8 = 8

    @property
    def max_token(self) -> int:
        return (1 << self.value) - 1


class RejectionLevel(IntEnum):
    """Noise rejection while listening for SonicNet tokens."""
    REJECTION_MIN = 0
    REJECTION_AVG = 1
    REJECTION_MAX = 2


class SoundVolume(IntEnum):
    VOL_MIN = 0
    VOL_HALF = 7
    VOL_FULL = 15
    VOL_DOUBLE = 31


class PhoneTone(IntEnum):
    """DTMF tones, plus the dial tone."""
    DIAL_TONE = -1
    TONE_0 = 0
    TONE_1 = 1
    TONE_2 = 2
    TONE_3 = 3
    TONE_4 = 4
    TONE_5 = 5
    TONE_6 = 6
    TONE_7 = 7
    TONE_8 = 8
    TONE_9 = 9
    TONE_STAR = 10
    TONE_HASH = 11
    TONE_A = 12
    TONE_B = 13
    TONE_C = 14
    TONE_D = 15


class ModuleId(IntEnum):
    """Module identification reported by ``get_id``."""
    VRBOT = 0
    EASYVR = 1
    EASYVR2 = 2
    EASYVR2_3 = 3
    EASYVR3 = 8
    EASYVR3_1 = 9
    EASYVR3_2 = 10
    EASYVR3_3 = 11
    EASYVR3_4 = 12
    EASYVR3_5 = 13
    EASYVR3_6 = 14
    EASYVR3_7 = 15
    EASYVR3PLUS = 16


class ErrorCode(IntEnum):
    """Error codes reported with the error status."""
    ERR_DATACOL_TOO_LONG = 0x02
    ERR_DATACOL_TOO_NOISY = 0x03
    ERR_DATACOL_TOO_SOFT = 0x04
    ERR_DATACOL_TOO_LOUD = 0x05
    ERR_DATACOL_TOO_SOON = 0x06
    ERR_DATACOL_TOO_CHOPPY = 0x07
    ERR_DATACOL_BAD_WEIGHTS = 0x08
    ERR_DATACOL_BAD_SETUP = 0x09
    ERR_RECOG_FAIL = 0x11
    ERR_RECOG_LOW_CONF = 0x12
    ERR_RECOG_MID_CONF = 0x13
    ERR_RECOG_BAD_TEMPLATE = 0x14
    ERR_RECOG_BAD_WEIGHTS = 0x15
    ERR_RECOG_DURATION = 0x17
    ERR_T2SI_EXCESS_STATES = 0x21
    ERR_T2SI_BAD_VERSION = 0x22
    ERR_T2SI_OUT_OF_RAM = 0x23
    ERR_T2SI_UNEXPECTED = 0x24
    ERR_T2SI_OVERFLOW = 0x25
    ERR_T2SI_PARAMETER = 0x26
    ERR_T2SI_NN_TOO_BIG = 0x29
    ERR_T2SI_NN_BAD_VERSION = 0x2A
    ERR_T2SI_NN_NOT_READY = 0x2B
    ERR_T2SI_NN_BAD_LAYERS = 0x2C
    ERR_T2SI_TRIG_OOV = 0x2D
    ERR_T2SI_TOO_SHORT = 0x2F
    ERR_RP_BAD_LEVEL = 0x31
    ERR_RP_NO_MSG = 0x38
    ERR_RP_MSG_EXISTS = 0x39
    ERR_SYNTH_BAD_VERSION = 0x4A
    ERR_SYNTH_ID_NOT_SET = 0x4B
    ERR_SYNTH_TOO_MANY_TABLES = 0x4C
    ERR_SYNTH_BAD_SEN = 0x4D
    ERR_SYNTH_BAD_MSG = 0x4E
    ERR_CUSTOM_NOTA = 0x80
    ERR_CUSTOM_INVALID = 0x81
    ERR_SW_STACK_OVERFLOW = 0xC0
    ERR_INTERNAL_T2SI_BAD_SETUP = 0xCC


class GrammarFlag(IntEnum):
    GF_TRIGGER = 0x10


# Result records

@dataclass(frozen=True)
class GrammarInfo:
    """Metadata of a built-in or custom grammar.

    Attributes:
        flags: Grammar flags (see GrammarFlag)
        count: Number of words in the grammar
    """
    flags: int
    count: int

    @property
    def is_trigger(self) -> bool:
        return bool(self.flags & GrammarFlag.GF_TRIGGER)


@dataclass(frozen=True)
class CommandData:
    """Label and training count of a custom command."""
    name: str
    training: int


@dataclass(frozen=True)
class SoundTable:
    """Label of the sound table and the number of sounds it holds."""
    name: str
    count: int


@dataclass(frozen=True)
class MessageInfo:
    """Format and length in bytes of a recorded message slot."""
    type: int
    length: int

    @property
    def is_empty(self) -> bool:
        return self.type == MessageType.MSG_EMPTY


@dataclass(frozen=True)
class StatusSnapshot:
    """Immutable copy of the session state after the last status decode.

    Attributes:
        builtin_word_recognized: A built-in word (or similar) was reported
        custom_command_recognized: A custom command (or similar) was reported
        error_pending: The module reported an error, or communication failed
        timed_out: Recognition or listening timed out
        invalid_sequence: The module rejected the command or its arguments
        memory_full: No room for another custom command
        training_conflict: The dumped command conflicts with another one
        token_received: A SonicNet token was detected
        awakened: The module came back from sleep
        last_value: Payload of the last status (meaning depends on the flag)
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
