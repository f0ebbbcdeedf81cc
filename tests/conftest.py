"""Pytest configuration.

The window, drop zone and job tests use PySide6 widgets and signals. We create
a single `QApplication` for the entire session as early as possible (in
offscreen mode unless told otherwise) and cleanly shut it down at the end.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QApplication exists before collecting/running tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    global _APP

    app = QApplication.instance()
    # Keep a strong ref so it isn't GC'd mid-session.
    _APP = QApplication([]) if app is None else app


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    """Attempt a clean Qt shutdown to avoid lingering threads at interpreter exit."""
    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    app = QApplication.instance()
    if app is None:
        return

    app.quit()
    app.processEvents()


def write_solid_image(
    path: Path, width: int, height: int, color: tuple[int, ...] = (200, 30, 30)
) -> Path:
    """Write a single-color PNG (or any vips-supported suffix) with len(color) bands."""
    import pyvips

    img = (pyvips.Image.black(width, height, bands=len(color)) + list(color)).cast("uchar")
    img.write_to_file(str(path))
    return path


@pytest.fixture
def solid_image():
    return write_solid_image


@pytest.fixture
def screenshot(tmp_path: Path) -> Path:
    """A portrait iPhone-sized screenshot (1170x2532)."""
    return write_solid_image(tmp_path / "shot.png", 1170, 2532)
