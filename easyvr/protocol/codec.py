"""Argument and label codec for the EasyVR protocol.

Every value exchanged after a command byte is an integer in [-1, 31] sent as
a single byte from a fixed alphabet. Labels travel as raw upper-case letters,
with digits escaped as '^' followed by the digit as an encoded argument.
Pure functions with no side effects.
"""
from __future__ import annotations

from typing import Dict

from ..errors import EncodingError, DecodingError
from .constants import LABEL_DIGIT_ESCAPE, LABEL_FILLER

ARGUMENT_MIN = -1
ARGUMENT_MAX = 31

# Explicit table: the alphabet skips the ranges reserved for command bytes.
ARGUMENT_TO_BYTE: Dict[int, int] = {
    -1: ord('@'),
    0: ord('A'),
    1: ord('B'),
    2: ord('C'),
    3: ord('D'),
    4: ord('E'),
    5: ord('F'),
    6: ord('G'),
    7: ord('H'),
    8: ord('I'),
    9: ord('J'),
    10: ord('K'),
    11: ord('L'),
    12: ord('M'),
    13: ord('N'),
    14: ord('O'),
    15: ord('P'),
    16: ord('Q'),
    17: ord('R'),
    18: ord('S'),
    19: ord('T'),
    20: ord('U'),
    21: ord('V'),
    22: ord('W'),
    23: ord('X'),
    24: ord('Y'),
    25: ord('Z'),
    26: ord('^'),
    27: ord('['),
    28: ord('\\'),
    29: ord(']'),
    30: ord('_'),
    31: ord('`'),
}

BYTE_TO_ARGUMENT: Dict[int, int] = {
    byte: value for value, byte in ARGUMENT_TO_BYTE.items()
}

MAX_LABEL_LENGTH = ARGUMENT_MAX


def encode_argument(value: int) -> int:
    """Encode an argument value as its protocol byte.

    Raises:
        EncodingError: If value is outside [-1, 31]
    """
    try:
        return ARGUMENT_TO_BYTE[value]
    except (KeyError, TypeError):
        raise EncodingError(
            f"Argument {value!r} out of range [{ARGUMENT_MIN}, {ARGUMENT_MAX}]"
        ) from None


def decode_argument(byte: int) -> int:
    """Decode a protocol byte back to its argument value.

    Raises:
        DecodingError: If byte is not part of the argument alphabet
    """
    try:
        return BYTE_TO_ARGUMENT[byte]
    except (KeyError, TypeError):
        raise DecodingError(f"Byte {byte!r} is not an argument", byte=byte) from None


def is_argument_byte(byte: int) -> bool:
    return byte in BYTE_TO_ARGUMENT


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def label_length(name: str) -> int:
    """Number of wire units needed for a label (one extra per escaped digit)."""
    return len(name) + sum(1 for char in name if _is_digit(char))


def encode_label(name: str) -> bytes:
    """Convert a label to its wire form.

    Examples:
        >>> encode_label("A1b")
        b'A^BB'
        >>> encode_label("on-off")
        b'ON_OFF'
    """
    out = bytearray()
    for char in name:
        if _is_digit(char):
            out.append(LABEL_DIGIT_ESCAPE)
            out.append(encode_argument(ord(char) - ord("0")))
        elif _is_letter(char):
            out.append(ord(char.upper()))
        else:
            out.append(LABEL_FILLER)
    return bytes(out)


def decode_label(data: bytes) -> str:
    """Convert a received label back to text, expanding escaped digits.

    Raises:
        DecodingError: If an escape is not followed by a digit argument
    """
    chars = []
    it = iter(data)
    for byte in it:
        if byte == LABEL_DIGIT_ESCAPE:
            escaped = next(it, None)
            if escaped is None:
                raise DecodingError("Label ends with a dangling digit escape")
            digit = decode_argument(escaped)
            if not 0 <= digit <= 9:
                raise DecodingError(f"Escaped label digit {digit} out of range", byte=escaped)
            chars.append(chr(ord("0") + digit))
        else:
            chars.append(chr(byte))
    return "".join(chars)
