"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, control-key token mapping and UTF-8.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from bookmark_cd import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[B", 2), ["UP", "DOWN"])

    def test_application_mode_arrows_are_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOA\x1bOB", 2), ["UP", "DOWN"])

    def test_shift_tab_is_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[Z", 1), ["SHIFT_TAB"])

    def test_modified_arrow_still_moves(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5B", 1), ["DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys_are_named(self) -> None:
        keys = self._read_all(b"\x03\x04\x0e\x10\x15\x17\t\x7f\r\n", 10)

        self.assertEqual(
            keys,
            ["CTRL_C", "CTRL_D", "CTRL_N", "CTRL_P", "CTRL_U", "CTRL_W", "TAB", "BACKSPACE", "ENTER", "ENTER"],
        )

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("éx".encode("utf-8"), 2), ["é", "x"])

    def test_stray_continuation_byte_is_unknown(self) -> None:
        self.assertEqual(self._read_all(b"\x80a", 2), ["UNKNOWN", "a"])

    def test_truncated_sequence_is_unknown(self) -> None:
        self.assertEqual(self._read_all(b"\xc3", 1), ["UNKNOWN"])

    def test_truncated_sequence_keeps_following_key(self) -> None:
        self.assertEqual(self._read_all(b"\xe2\x82x", 2), ["UNKNOWN", "x"])

    def test_timeout_returns_empty_string(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")


if __name__ == "__main__":
    unittest.main()
