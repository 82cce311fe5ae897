"""Unit tests for the argument and label codec."""
import unittest

from easyvr.errors import EncodingError, DecodingError, ValidationError
from easyvr.protocol.codec import (
    ARGUMENT_TO_BYTE,
    decode_argument,
    decode_label,
    encode_argument,
    encode_label,
    is_argument_byte,
    label_length,
)
from easyvr.protocol.constants import ARG_ACK, ARG_MIN, ARG_MAX


class TestArgumentCodec(unittest.TestCase):
    """Tests for the [-1, 31] argument alphabet."""

    def test_known_encodings(self):
        self.assertEqual(encode_argument(-1), ord('@'))
        self.assertEqual(encode_argument(0), ord('A'))
        self.assertEqual(encode_argument(25), ord('Z'))
        self.assertEqual(encode_argument(26), ord('^'))
        self.assertEqual(encode_argument(31), ord('`'))

    def test_round_trip_values(self):
        for value in range(-1, 32):
            self.assertEqual(decode_argument(encode_argument(value)), value)

    def test_round_trip_bytes(self):
        for byte in ARGUMENT_TO_BYTE.values():
            self.assertEqual(encode_argument(decode_argument(byte)), byte)

    def test_table_is_bijective(self):
        self.assertEqual(len(ARGUMENT_TO_BYTE), 33)
        self.assertEqual(len(set(ARGUMENT_TO_BYTE.values())), 33)

    def test_encode_out_of_range(self):
        for value in (-2, 32, 100):
            with self.assertRaises(EncodingError):
                encode_argument(value)

    def test_encoding_error_is_validation_error(self):
        with self.assertRaises(ValidationError):
            encode_argument(32)

    def test_decode_rejects_bytes_outside_alphabet(self):
        for byte in range(256):
            if ARG_MIN <= byte <= ARG_MAX:
                continue
            with self.assertRaises(DecodingError):
                decode_argument(byte)

    def test_ack_is_not_an_argument(self):
        self.assertFalse(is_argument_byte(ARG_ACK))
        self.assertTrue(is_argument_byte(ord('Q')))


class TestLabelCodec(unittest.TestCase):
    """Tests for label escaping."""

    def test_encode_letters_upper_cased(self):
        self.assertEqual(encode_label("lights"), b"LIGHTS")

    def test_encode_digit_escaped(self):
        self.assertEqual(encode_label("A1b"), b"A^BB")

    def test_encode_other_characters_replaced(self):
        self.assertEqual(encode_label("on-off now"), b"ON_OFF_NOW")

    def test_label_length_counts_escapes(self):
        self.assertEqual(label_length("A1b"), 4)
        self.assertEqual(label_length("room42"), 8)
        self.assertEqual(label_length(""), 0)

    def test_label_length_matches_wire_form(self):
        for name in ("A1b", "x", "2024", "a-b_c"):
            self.assertEqual(label_length(name), len(encode_label(name)))

    def test_round_trip(self):
        self.assertEqual(decode_label(encode_label("A1b")), "A1B")
        self.assertEqual(decode_label(encode_label("zone 9")), "ZONE_9")

    def test_decode_dangling_escape(self):
        with self.assertRaises(DecodingError):
            decode_label(b"AB^")

    def test_decode_escape_not_a_digit(self):
        with self.assertRaises(DecodingError):
            decode_label(b"^Z")


if __name__ == '__main__':
    unittest.main()
