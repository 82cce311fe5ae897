"""Unit tests for the session state and the status decoder."""
import unittest
from dataclasses import FrozenInstanceError

from easyvr.models import StatusSnapshot
from easyvr.protocol.channel import CommandChannel
from easyvr.protocol.status import SessionState, StatusDecoder, DecoderState
from tests.fakes import ScriptedTransport


def make_decoder(replies=b""):
    transport = ScriptedTransport(replies)
    state = SessionState()
    return StatusDecoder(CommandChannel(transport), state), state, transport


class TestSessionState(unittest.TestCase):

    def test_defaults(self):
        state = SessionState()
        self.assertTrue(state.is_clear)
        self.assertEqual(state.last_value, 0)
        self.assertEqual(state.last_group, -1)
        self.assertEqual(state.last_module_id, -1)

    def test_reset_keeps_caches(self):
        state = SessionState(timed_out=True, last_value=7, last_group=3, last_module_id=8)
        state.reset()
        self.assertTrue(state.is_clear)
        self.assertEqual(state.last_value, 0)
        self.assertEqual(state.last_group, 3)
        self.assertEqual(state.last_module_id, 8)

    def test_snapshot_is_frozen(self):
        state = SessionState(awakened=True, last_value=4)
        snapshot = state.snapshot()

        self.assertIsInstance(snapshot, StatusSnapshot)
        self.assertTrue(snapshot.awakened)
        self.assertEqual(snapshot.last_value, 4)
        with self.assertRaises(FrozenInstanceError):
            snapshot.awakened = False


class TestStatusDecoder(unittest.TestCase):

    def test_success_clears_flags(self):
        decoder, state, _ = make_decoder()
        state.timed_out = True
        state.last_value = 9

        self.assertTrue(decoder.decode(ord('o')))
        self.assertTrue(state.is_clear)
        self.assertEqual(state.last_value, 0)

    def test_custom_command_result(self):
        decoder, state, transport = make_decoder(b"F")

        self.assertTrue(decoder.decode(ord('r')))
        self.assertTrue(state.custom_command_recognized)
        self.assertFalse(state.builtin_word_recognized)
        self.assertEqual(state.last_value, 5)
        self.assertEqual(bytes(transport.written), b" ")

    def test_builtin_word_result(self):
        decoder, state, _ = make_decoder(b"D")

        self.assertTrue(decoder.decode(ord('s')))
        self.assertTrue(state.builtin_word_recognized)
        self.assertFalse(state.custom_command_recognized)
        self.assertEqual(state.last_value, 3)

    def test_token_two_arguments(self):
        decoder, state, _ = make_decoder(b"HK")  # 7 << 5 | 10

        self.assertTrue(decoder.decode(ord('f')))
        self.assertTrue(state.token_received)
        self.assertEqual(state.last_value, 7 * 32 + 10)

    def test_error_code(self):
        decoder, state, _ = make_decoder(b"BC")  # 1 << 4 | 2

        self.assertTrue(decoder.decode(ord('e')))
        self.assertTrue(state.error_pending)
        self.assertEqual(state.last_value, 0x12)

    def test_flag_only_statuses(self):
        for status, flag in ((b"w", "awakened"), (b"t", "timed_out"), (b"v", "invalid_sequence")):
            decoder, state, transport = make_decoder()
            self.assertTrue(decoder.decode(status[0]))
            self.assertTrue(getattr(state, flag))
            self.assertEqual(len(transport.written), 0)

    def test_unknown_status_defensive_reset(self):
        decoder, state, _ = make_decoder()
        state.token_received = True
        state.awakened = True
        state.last_value = 12

        self.assertFalse(decoder.decode(ord('Q')))

        self.assertEqual(state.snapshot(), StatusSnapshot(error_pending=True, last_value=0))

    def test_truncated_payload_defensive_reset(self):
        decoder, state, _ = make_decoder(b"H")  # second token argument missing

        self.assertFalse(decoder.decode(ord('f')))
        self.assertEqual(state.snapshot(), StatusSnapshot(error_pending=True, last_value=0))

    def test_invalid_argument_defensive_reset(self):
        decoder, state, _ = make_decoder(b"o")

        self.assertFalse(decoder.decode(ord('r')))
        self.assertEqual(state.snapshot(), StatusSnapshot(error_pending=True, last_value=0))

    def test_poll_without_data_leaves_state(self):
        decoder, state, transport = make_decoder()
        state.awakened = True

        self.assertIsNone(decoder.poll(0))
        self.assertTrue(state.awakened)
        self.assertEqual(transport.read_timeouts, [0])
        self.assertEqual(decoder.phase, DecoderState.IDLE)

    def test_poll_decodes(self):
        decoder, state, _ = make_decoder(b"sB")

        self.assertEqual(decoder.poll(0), ord('s'))
        self.assertEqual(state.last_value, 1)
        self.assertEqual(decoder.phase, DecoderState.IDLE)


if __name__ == '__main__':
    unittest.main()
