"""Command-line front door for bookmark-cd.

Parses CLI options and handles the shell-integration modes directly.
Otherwise loads bookmarks, applies the initial search, and runs the picker.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import termios
from pathlib import Path

from . import __version__
from .candidates import load_candidates
from .config import load_config, resolve_bookmarks_path
from .loop import run_picker
from .shell import DEFAULT_ALIAS, InstallError, install_shell_function, shell_function
from .state import SelectionState
from .terminal import TerminalController
from .ui_theme import PickerTheme, available_theme_names, color_disabled, resolve_theme

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "BOOKMARK_CD_LOG_LEVEL"
LOG_FORMAT = "bookmark-cd: %(levelname)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DESCRIPTION = """\
Interactively pick the bookmarked directory you want to cd into.

Type to filter the bookmarks, UP/DOWN to choose, ENTER to accept and ESC to
cancel. With search terms that match exactly one bookmark, its path is
printed right away."""


def configure_logging(level_name: str | None = None) -> None:
    """Route package logs to stderr at ``level_name`` (default WARNING)."""
    name = (level_name or os.environ.get(LOG_LEVEL_ENV_VAR) or "WARNING").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    package_logger = logging.getLogger("bookmark_cd")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookmark-cd",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "search",
        nargs="*",
        metavar="SEARCH_TERM",
        help="Initial search; joined with spaces.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--shell",
        nargs="?",
        const=DEFAULT_ALIAS,
        default=None,
        metavar="ALIAS",
        help=f"Print the shell function, named ALIAS (default: {DEFAULT_ALIAS}).",
    )
    mode.add_argument(
        "--install",
        nargs="+",
        default=None,
        metavar=("FILE", "ALIAS"),
        help="Add or update the shell function in a startup file like ~/.bashrc.",
    )
    parser.add_argument("--bookmarks", metavar="FILE", help="Bookmark file to read.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Diagnostics written to stderr (default: WARNING).",
    )
    parser.add_argument("-v", "--version", action="version", version=f"bookmark-cd {__version__}")
    return parser


def pick_path(state: SelectionState, theme: PickerTheme) -> str | None:
    """Run the interactive picker on the controlling terminal.

    Returns the confirmed path, or ``None`` when cancelled or nothing matched.
    """
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stderr.fileno())
    run_picker(state, terminal, stdin_fd, theme)
    return state.result_path()


def _install(parser: argparse.ArgumentParser, values: list[str]) -> None:
    if len(values) > 2:
        parser.error("--install takes FILE and an optional ALIAS")
    alias = values[1] if len(values) == 2 else DEFAULT_ALIAS
    try:
        install_shell_function(Path(values[0]), alias)
    except InstallError as exc:
        raise SystemExit(f"ERROR: {exc}") from exc


def _emit_path(path: str) -> None:
    # Paths read with surrogateescape go back out as the original bytes.
    sys.stdout.flush()
    sys.stdout.buffer.write(os.fsencode(path))
    sys.stdout.buffer.flush()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected mode.

    Only a chosen path is ever written to stdout; the UI and diagnostics use
    stderr so a shell function can capture the result.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if (args.shell is not None or args.install is not None) and args.search:
        parser.error("search terms cannot be combined with --shell or --install")

    if args.install is not None:
        _install(parser, args.install)
        return

    if args.shell is not None:
        sys.stdout.write(shell_function(args.shell) + "\n")
        return

    config = load_config()
    bookmarks_path = resolve_bookmarks_path(args.bookmarks, config)
    candidates = load_candidates(bookmarks_path)
    state = SelectionState.create(
        candidates,
        " ".join(args.search),
        cursor_wrap=config.cursor_wrap,
    )

    sole = state.sole_candidate()
    if sole is not None:
        _emit_path(sole.path)
        return

    no_color = args.no_color or config.no_color or color_disabled(sys.stderr.isatty())
    theme = resolve_theme(args.theme or config.theme, no_color=no_color)
    try:
        path = pick_path(state, theme)
    except (OSError, termios.error) as exc:
        logger.error("terminal error: %s", exc)
        raise SystemExit(1) from exc

    if path:
        _emit_path(path)


if __name__ == "__main__":
    main()
