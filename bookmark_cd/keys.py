"""Keyboard dispatch for the picker."""

from __future__ import annotations

from .state import SelectionState

QUERY_CHAR_LIMIT = 156

ACCEPT_KEYS = frozenset({"ENTER"})
CANCEL_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_D"})
DOWN_KEYS = frozenset({"DOWN", "CTRL_N", "TAB"})
UP_KEYS = frozenset({"UP", "CTRL_P", "SHIFT_TAB"})


def _delete_last_word(query: str) -> str:
    trimmed = query.rstrip()
    cut = max(trimmed.rfind(" "), trimmed.rfind("/"))
    return trimmed[: cut + 1]


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def handle_key(key: str, state: SelectionState) -> bool:
    """Apply one key token to ``state``.

    Returns ``True`` once the key ended the session (accept or cancel).
    Unknown tokens are ignored.
    """
    if key in ACCEPT_KEYS:
        state.accept()
        return True
    if key in CANCEL_KEYS:
        state.cancel()
        return True
    if key in DOWN_KEYS:
        state.move_down()
        return False
    if key in UP_KEYS:
        state.move_up()
        return False
    if key == "BACKSPACE":
        if state.query:
            state.set_query(state.query[:-1])
        return False
    if key == "CTRL_U":
        state.set_query("")
        return False
    if key == "CTRL_W":
        state.set_query(_delete_last_word(state.query))
        return False
    if _is_text_key(key):
        if len(state.query) < QUERY_CHAR_LIMIT:
            state.set_query(state.query + key)
        return False
    return False
