"""Bookmark candidate loading.

Parses GTK-style bookmark files into immutable ``Candidate`` records.
Loading is fail-soft: a missing file or a bad line never aborts startup.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"
DEFAULT_BOOKMARKS_PATH = Path.home() / ".config" / "gtk-3.0" / "bookmarks"


@dataclass(frozen=True)
class Candidate:
    name: str
    path: str


def _decode(text: str) -> str:
    return unquote(text, errors="strict")


def parse_bookmark_line(line: str) -> Candidate | None:
    """Parse one ``<uri> [name]`` bookmark line.

    Returns ``None`` for blank lines and for lines whose URI cannot be
    percent-decoded.
    """
    stripped = line.rstrip("\r\n")
    if not stripped.strip():
        return None
    raw_uri, _sep, label = stripped.partition(" ")
    if not raw_uri:
        return None

    try:
        path = _decode(raw_uri).replace(FILE_SCHEME, "", 1)
        name = label if label else _decode(posixpath.basename(raw_uri.rstrip("/")))
    except UnicodeDecodeError:
        logger.debug("skipping undecodable bookmark line: %r", stripped)
        return None

    if not name:
        name = path
    return Candidate(name=name, path=path)


def load_candidates(path: Path = DEFAULT_BOOKMARKS_PATH) -> list[Candidate]:
    """Load bookmark candidates from ``path`` in file order.

    An unreadable file yields an empty list after logging a warning.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        logger.warning("could not open bookmark file %s: %s", path, exc.strerror or exc)
        return []

    candidates: list[Candidate] = []
    for line in text.splitlines():
        candidate = parse_bookmark_line(line)
        if candidate is not None:
            candidates.append(candidate)
    logger.debug("loaded %d bookmarks from %s", len(candidates), path)
    return candidates
