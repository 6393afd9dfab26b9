"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and alternate-screen switching on the UI stream.
Frames are drawn on the UI descriptor (stderr) so stdout stays clean for the
selected path.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

DEFAULT_SIZE = (80, 24)


class TerminalController:
    def __init__(self, stdin_fd: int, ui_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.ui_fd = ui_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.ui_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.ui_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` of the UI terminal."""
        try:
            size = os.get_terminal_size(self.ui_fd)
        except OSError:
            return DEFAULT_SIZE
        return max(1, size.columns), max(1, size.lines)

    def draw(self, frame: str) -> None:
        """Replace the screen contents with ``frame``.

        Raw mode disables output post-processing, so rows are joined with
        explicit carriage returns.
        """
        body = "\x1b[K\r\n".join(frame.split("\n"))
        payload = f"\x1b[H{body}\x1b[K\x1b[J"
        os.write(self.ui_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
