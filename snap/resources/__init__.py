"""Bundled application resources.

Resources are looked up by name and type, the way a frozen build ships them
(``sys._MEIPASS/snap/resources``) or straight from the source tree.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

FRAME_NAME = "iphone15pro_frame"
FRAME_TYPE = "png"

_RESOURCE_DIR = Path(__file__).resolve().parent


def _candidate_dirs() -> list[Path]:
    dirs = []
    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        dirs.append(Path(meipass) / "snap" / "resources")
    dirs.append(_RESOURCE_DIR)
    return dirs


def resource_path(name: str, ext: str) -> Path | None:
    """Return the path of a bundled resource, or None when it is not shipped."""
    for d in _candidate_dirs():
        p = d / f"{name}.{ext}"
        if p.is_file():
            return p
    return None


def frame_path() -> Path | None:
    """Device frame asset; ``SNAP_FRAME_PATH`` overrides the bundled one."""
    override = (os.getenv("SNAP_FRAME_PATH") or "").strip()
    if override:
        return Path(override).expanduser()
    return resource_path(FRAME_NAME, FRAME_TYPE)
