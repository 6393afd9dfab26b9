"""Frame rendering for the picker.

``render_frame`` turns a ``SelectionState`` into the text drawn on the UI
stream: a prompt row followed by the ranked candidate rows. It is pure and
never touches the state it reads.
"""

from __future__ import annotations

from pathlib import Path

from .ansi import clip_ansi_line
from .state import SelectionState
from .ui_theme import DEFAULT_THEME, PickerTheme

PROMPT = ": "
PLACEHOLDER = "Search"
CURSOR_PREFIX = "> "
BLANK_PREFIX = "  "
NO_MATCHES = "no matches"


def collapse_home(path: str, home: str) -> str:
    """Shorten ``path`` to ``~`` form when it lives under ``home``."""
    home = home.rstrip("/")
    if not home:
        return path
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path


def visible_window(cursor: int, count: int, max_rows: int | None) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of rows that keeps ``cursor`` on screen."""
    if max_rows is None or count <= max_rows:
        return 0, count
    rows = max(1, max_rows)
    start = max(0, min(cursor - rows + 1, count - rows))
    return start, start + rows


def _styled(style: str, text: str, theme: PickerTheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def _prompt_line(query: str, theme: PickerTheme) -> str:
    if query:
        return _styled(theme.query, f"{PROMPT}{query}", theme)
    return PROMPT + _styled(theme.placeholder, PLACEHOLDER, theme)


def render_frame(
    state: SelectionState,
    theme: PickerTheme = DEFAULT_THEME,
    *,
    home: str | None = None,
    width: int | None = None,
    max_rows: int | None = None,
) -> str:
    """Render the prompt and candidate list for ``state``.

    Returns an empty string once the session has exited. ``max_rows`` bounds
    the number of candidate rows and ``width`` clips every line.
    """
    if state.exited:
        return ""
    if home is None:
        home = str(Path.home())

    lines = [_prompt_line(state.query, theme)]
    ranked = state.ranked_candidates
    if not ranked:
        lines.append(BLANK_PREFIX + _styled(theme.empty_hint, NO_MATCHES, theme))
    else:
        start, end = visible_window(state.cursor, len(ranked), max_rows)
        for idx in range(start, end):
            candidate = ranked[idx].candidate
            display_path = _styled(theme.candidate_path, collapse_home(candidate.path, home), theme)
            if idx == state.cursor:
                prefix = _styled(theme.cursor_marker, CURSOR_PREFIX, theme)
                name = _styled(theme.selected_name, candidate.name, theme)
            else:
                prefix = BLANK_PREFIX
                name = _styled(theme.candidate_name, candidate.name, theme)
            lines.append(f"{prefix}{name} {display_path}")

    if width is not None:
        lines = [clip_ansi_line(line, width) for line in lines]
    return "\n".join(lines)
