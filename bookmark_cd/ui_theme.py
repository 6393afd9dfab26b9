"""UI theme definitions and selection helpers.

Themes are immutable ANSI palettes handed to the renderer; nothing here
holds global style state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PickerTheme:
    """Semantic ANSI palette used by ``render_frame``."""

    name: str
    reset: str
    query: str
    placeholder: str
    cursor_marker: str
    candidate_name: str
    candidate_path: str
    selected_name: str
    empty_hint: str


DEFAULT_THEME = PickerTheme(
    name="default",
    reset="\033[0m",
    query="\033[1m",
    placeholder="\033[2m",
    cursor_marker="\033[1m",
    candidate_name="\033[1m",
    candidate_path="\033[2m",
    selected_name="\033[1m",
    empty_hint="\033[2m",
)

OCEAN_THEME = PickerTheme(
    name="ocean",
    reset="\033[0m",
    query="\033[1;38;5;45m",
    placeholder="\033[2;38;5;110m",
    cursor_marker="\033[1;38;5;39m",
    candidate_name="\033[1;38;5;252m",
    candidate_path="\033[2;38;5;110m",
    selected_name="\033[1;38;5;45m",
    empty_hint="\033[2;38;5;110m",
)

PLAIN_THEME = PickerTheme(
    name="plain",
    reset="",
    query="",
    placeholder="",
    cursor_marker="",
    candidate_name="",
    candidate_path="",
    selected_name="",
    empty_hint="",
)

_THEMES: dict[str, PickerTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def color_disabled(stream_isatty: bool, environ: dict[str, str] | None = None) -> bool:
    """Return whether color should be off for the UI stream.

    Honors the ``NO_COLOR`` convention and non-tty output.
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return True
    if env.get("TERM") == "dumb":
        return True
    return not stream_isatty


def resolve_theme(name: str | None, *, no_color: bool = False) -> PickerTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
