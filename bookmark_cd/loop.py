"""Interactive event loop for the picker.

Renders the current state, blocks for one key, applies it, and repeats until
the state reaches a terminal (confirmed or cancelled) condition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .input import read_key
from .keys import handle_key
from .render import render_frame
from .state import SelectionState
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, PickerTheme

logger = logging.getLogger(__name__)


def run_picker(
    state: SelectionState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: PickerTheme = DEFAULT_THEME,
    *,
    key_reader: Callable[[int], str] = read_key,
    home: str | None = None,
) -> SelectionState:
    """Run the picker until the user accepts or cancels.

    End of input and ``KeyboardInterrupt`` both cancel. Terminal errors
    propagate to the caller after raw mode is restored.
    """
    with terminal.raw_mode():
        try:
            while state.browsing:
                columns, lines = terminal.size()
                terminal.draw(
                    render_frame(
                        state,
                        theme,
                        home=home,
                        width=columns,
                        max_rows=max(1, lines - 1),
                    )
                )
                key = key_reader(stdin_fd)
                if not key:
                    logger.debug("input closed, cancelling")
                    state.cancel()
                    break
                handle_key(key, state)
        except KeyboardInterrupt:
            state.cancel()
    return state
