"""Unit tests for enums and result records."""
import unittest
from dataclasses import FrozenInstanceError

from easyvr.models import (
    Baudrate,
    BitNumber,
    ErrorCode,
    GrammarInfo,
    MessageInfo,
    MessageType,
    PinConfig,
    TrailingSilence,
)


class TestEnums(unittest.TestCase):

    def test_baudrate_divisor(self):
        self.assertEqual(Baudrate.B9600.bits_per_second, 9600)
        self.assertEqual(Baudrate.B115200.bits_per_second, 115200)
        self.assertEqual(Baudrate.B38400.bits_per_second, 38400)

    def test_token_range(self):
        self.assertEqual(BitNumber.BITS_4.max_token, 15)
        self.assertEqual(BitNumber.BITS_8.max_token, 255)

    def test_pin_direction(self):
        self.assertTrue(PinConfig.INPUT_HIZ.is_input)
        self.assertTrue(PinConfig.INPUT_STRONG.is_input)
        self.assertFalse(PinConfig.OUTPUT_HIGH.is_input)

    def test_trailing_silence_aliases(self):
        self.assertIs(TrailingSilence.TRAILING_400MS, TrailingSilence.TRAILING_DEF)
        self.assertEqual(TrailingSilence.TRAILING_100MS, 0)

    def test_error_code_lookup(self):
        self.assertEqual(ErrorCode(0x12), ErrorCode.ERR_RECOG_LOW_CONF)


class TestRecords(unittest.TestCase):

    def test_grammar_trigger_flag(self):
        self.assertTrue(GrammarInfo(flags=0x10, count=1).is_trigger)
        self.assertFalse(GrammarInfo(flags=0, count=5).is_trigger)

    def test_message_empty(self):
        self.assertTrue(MessageInfo(type=MessageType.MSG_EMPTY, length=0).is_empty)
        self.assertFalse(MessageInfo(type=MessageType.MSG_8BIT, length=100).is_empty)

    def test_records_are_frozen(self):
        info = MessageInfo(type=8, length=10)
        with self.assertRaises(FrozenInstanceError):
            info.length = 20


if __name__ == '__main__':
    unittest.main()
