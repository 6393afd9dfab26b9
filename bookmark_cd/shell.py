"""Shell integration: the ``bcd`` wrapper function and its installer.

The picker cannot change its parent shell's directory, so a small shell
function captures its stdout and runs ``cd``. ``install_shell_function``
keeps exactly one marked copy of that function in a startup file.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ALIAS = "bcd"
START_MARKER = "# start: bookmark-cd"
END_MARKER = "# end: bookmark-cd"
BACKUP_SUFFIX = "bcd-install-backup"

SHELL_FUNCTION_TEMPLATE = """# start: bookmark-cd
{alias}() {{
  TARGETPATH=$(bookmark-cd "$@")

  if [ ! -z "${{TARGETPATH}}" ] ; then
    cd "${{TARGETPATH}}"
  fi
}}
# end: bookmark-cd"""


class InstallError(RuntimeError):
    """Raised when the shell startup file cannot be updated."""


def shell_function(alias: str = DEFAULT_ALIAS) -> str:
    """Return the wrapper function source with ``alias`` as its name."""
    return SHELL_FUNCTION_TEMPLATE.format(alias=alias or DEFAULT_ALIAS)


def strip_shell_function(text: str) -> list[str]:
    """Return the lines of ``text`` without the first marked function block.

    Marker lines are matched after trimming whitespace. An unterminated block
    swallows the rest of the file, matching what a fresh install would replace.
    """
    kept: list[str] = []
    started = False
    ended = False
    for line in text.strip().split("\n"):
        marker = line.strip()
        if not started and marker == START_MARKER:
            started = True
            continue
        if started and not ended and marker == END_MARKER:
            ended = True
            continue
        if not started or ended:
            kept.append(line)
    return kept


def _backup_path(path: Path) -> Path:
    stamp = int(time.time() * 1000)
    return path.with_name(f"{path.name}.{stamp}.{BACKUP_SUFFIX}")


def install_shell_function(path: Path, alias: str = DEFAULT_ALIAS) -> None:
    """Add or replace the wrapper function in the startup file at ``path``.

    A timestamped backup is written next to the file first and removed once
    the new content is in place. On failure the backup is left behind.
    """
    path = path.expanduser().resolve()
    backup = _backup_path(path)
    try:
        shutil.copyfile(path, backup)
    except OSError as exc:
        raise InstallError(f"could not back up {path}: {exc}") from exc

    try:
        original = path.read_text(encoding="utf-8")
        lines = strip_shell_function(original)
        lines.extend(shell_function(alias).split("\n"))
        path.write_text("\n".join(lines).strip() + "\n", encoding="utf-8")
    except OSError as exc:
        raise InstallError(f"could not update {path} (backup kept at {backup}): {exc}") from exc

    try:
        backup.unlink()
    except OSError as exc:
        raise InstallError(f"installed, but could not remove backup {backup}: {exc}") from exc
    logger.info("installed shell function %s into %s", alias, path)
