"""FileProbe — reads pseudo-files and never raises.

Every reader in sysres goes through a ``FileProbe``. A missing,
unreadable, undecodable or empty file is reported as ``None``
("unavailable"), which callers treat as "try the next strategy".

The optional-returning helpers at the bottom (``parse_int``,
``first_of``) are the building blocks of the fallback chains.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

from sysres.utils import get_logger

logger = get_logger("probe")

T = TypeVar("T")


class FileProbe:
    """Reads pseudo-files, optionally relative to a root directory.

    Args:
        root: Directory prepended to every absolute path. ``"/"`` reads the
              real filesystem; tests point it at a synthetic tree, sidecars
              at a mounted host root.

    ``reads`` and ``checks`` count calls so tests can assert that cached
    lookups do not touch the filesystem again.
    """

    def __init__(self, root: str = "/") -> None:
        self.root = root
        self.reads = 0
        self.checks = 0

    def resolve(self, path: str) -> str:
        """Map an absolute pseudo-file path onto this probe's root."""
        if self.root in ("", "/"):
            return path
        return os.path.join(self.root, path.lstrip("/"))

    def read(self, path: str) -> str | None:
        """Return the file's content with trailing whitespace removed, or None."""
        self.reads += 1
        try:
            with open(self.resolve(path), encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("probe_unavailable", path=path, error=type(exc).__name__)
            return None
        content = content.rstrip()
        return content or None

    def exists(self, path: str) -> bool:
        self.checks += 1
        return os.path.isfile(self.resolve(path))


# ── Optional-returning helpers ────────────────────────────────────────────────


def parse_int(text: str | None) -> int | None:
    """Parse a decimal integer, None for missing or malformed text."""
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def first_of(*steps: Callable[[], T | None], default: T) -> T:
    """Run each step in order and return the first non-None result.

    Steps are evaluated lazily, so later strategies never touch the
    filesystem when an earlier one succeeds.
    """
    for step in steps:
        result = step()
        if result is not None:
            return result
    return default
