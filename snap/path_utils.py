"""Path utilities.

This module centralizes the project's path rules:

- Use absolute paths when interacting with the filesystem/UI.
- Derive output paths deterministically from the input path and the mode.
- Wrap filesystem access for a path in an acquire/release scope.

Keep this module free of Qt dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .logger import get_logger

_logger = get_logger("path_utils")

APP_STORE_SUFFIX = "_appstore"
MOCKUP_SUFFIX = "_iphone_mockup"
OUTPUT_EXT = ".png"


def abs_path(path: str | Path) -> Path:
    """Return an absolute path without requiring that it exists."""
    p = Path(path).expanduser()
    try:
        # strict=False avoids exceptions for non-existent paths.
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def output_path_for(path: str | Path, suffix: str) -> Path:
    """Output file beside ``path``: ``<dir>/<stem><suffix>.png``.

    ``shot.jpeg`` with ``_appstore`` gives ``shot_appstore.png``.
    """
    src = abs_path(path)
    return src.with_name(f"{src.stem}{suffix}{OUTPUT_EXT}")


@contextmanager
def scoped_access(path: str | Path) -> Iterator[bool]:
    """Hold read/write capability for ``path`` and its directory for the scope.

    Yields whether access could be established. Not being able to establish it
    is logged and otherwise ignored: callers still attempt their I/O and report
    the real error from there. The release always runs.
    """
    target = abs_path(path)
    directory = target if target.is_dir() else target.parent
    granted = os.access(directory, os.W_OK) and (target.is_dir() or os.access(target, os.R_OK))
    if granted:
        _logger.debug("access acquired: %s", target)
    else:
        _logger.warning(
            "access not granted: %s (dir exists=%s, writable=%s)",
            target,
            directory.is_dir(),
            os.access(directory, os.W_OK),
        )
    try:
        yield granted
    finally:
        if granted:
            _logger.debug("access released: %s", target)
