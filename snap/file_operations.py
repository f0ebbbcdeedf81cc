"""Headless file operations: writing outputs, raw payloads and revealing files.

Nothing here shows dialogs; callers turn failures into status messages.
"""

from __future__ import annotations

import contextlib
import os
import stat
import subprocess
import sys
import tempfile
import threading
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

from snap.errors import WriteFailure
from snap.logger import get_logger
from snap.path_utils import abs_path

_logger = get_logger("file_operations")

TEMP_PAYLOAD_NAME = "temp_screenshot.png"

_umask_lock = threading.Lock()


def _current_umask() -> int:
    # The umask can only be read by setting it
    with _umask_lock:
        mask = os.umask(0o022)
        os.umask(mask)
    return mask


def _output_mode(target: Path) -> int:
    """Mode for a replaced file: keep the old file's, else what open() would give."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except OSError:
        return 0o666 & ~_current_umask()


def write_output(data: bytes, out_path: str | Path) -> Path:
    """Write already-encoded bytes to ``out_path``, replacing any existing file.

    Bytes go to a sibling temp file first and are moved over the target, so a
    failed write never leaves a truncated output behind.
    """
    target = abs_path(out_path)
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600 files
        os.chmod(tmp_name, _output_mode(target))
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as e:
        raise WriteFailure(f"cannot write output: {e}", str(target)) from e
    finally:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.remove(tmp_name)
    _logger.debug("wrote %d bytes: %s", len(data), target)
    return target


def write_temp_payload(data: bytes) -> Path:
    """Store a raw dropped image payload under a fixed temp path.

    The same path is reused for every payload. Raises WriteFailure.
    """
    target = Path(tempfile.gettempdir()) / TEMP_PAYLOAD_NAME
    return write_output(data, target)


def reveal_in_file_browser(path: str | Path) -> bool:
    """Select ``path`` in Finder/Explorer, or open its folder elsewhere.

    Must run on the UI thread. Returns False when the platform call failed.
    """
    p = str(abs_path(path))
    try:
        if sys.platform == "darwin":
            subprocess.Popen(["open", "-R", p])
        elif sys.platform == "win32":
            subprocess.Popen(["explorer", "/select,", p])
        elif not QDesktopServices.openUrl(QUrl.fromLocalFile(str(Path(p).parent))):
            _logger.warning("could not open folder for: %s", p)
            return False
    except OSError as e:
        _logger.warning("reveal failed for %s: %s", p, e)
        return False
    _logger.debug("revealed: %s", p)
    return True
