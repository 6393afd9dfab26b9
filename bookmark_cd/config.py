"""Read-only JSON config helpers.

Supplies the bookmark file location, UI theme, color switch, and cursor wrap
mode. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .candidates import DEFAULT_BOOKMARKS_PATH
from .state import CURSOR_WRAP_MODES, CURSOR_WRAP_UNFILTERED

logger = logging.getLogger(__name__)

APP_NAME = "bookmark-cd"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
BOOKMARKS_ENV_VAR = "BOOKMARK_CD_FILE"


@dataclass(frozen=True)
class PickerConfig:
    bookmarks_file: Path | None = None
    theme: str | None = None
    no_color: bool = False
    cursor_wrap: str = CURSOR_WRAP_UNFILTERED


def load_config_data() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected a JSON object", CONFIG_PATH)
        return {}
    return data


def _string_value(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_config() -> PickerConfig:
    """Build a ``PickerConfig`` from the config file, one key at a time.

    Keys with the wrong type or an unknown value are dropped.
    """
    data = load_config_data()

    bookmarks = _string_value(data, "bookmarks_file")
    no_color = data.get("no_color")
    cursor_wrap = _string_value(data, "cursor_wrap")
    if cursor_wrap is not None and cursor_wrap not in CURSOR_WRAP_MODES:
        logger.warning("ignoring unknown cursor_wrap %r", cursor_wrap)
        cursor_wrap = None

    return PickerConfig(
        bookmarks_file=Path(bookmarks).expanduser() if bookmarks else None,
        theme=_string_value(data, "theme"),
        no_color=no_color if isinstance(no_color, bool) else False,
        cursor_wrap=cursor_wrap or CURSOR_WRAP_UNFILTERED,
    )


def resolve_bookmarks_path(
    cli_value: str | None,
    config: PickerConfig,
    environ: dict[str, str] | None = None,
) -> Path:
    """Pick the bookmark file: CLI flag, then environment, then config, then default."""
    env = os.environ if environ is None else environ
    if cli_value:
        return Path(cli_value).expanduser()
    env_value = env.get(BOOKMARKS_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    if config.bookmarks_file is not None:
        return config.bookmarks_file
    return DEFAULT_BOOKMARKS_PATH
