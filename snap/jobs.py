"""Processing modes and the single-slot background job runner.

A job runs one transform on a worker QThread. Results come back through
queued signals, so everything connected to ``JobController.finished`` runs
on the UI thread.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from snap.file_operations import reveal_in_file_browser
from snap.imaging import AppStoreResizer, MockupComposer
from snap.logger import get_logger
from snap.path_utils import abs_path, scoped_access

_logger = get_logger("jobs")


class ProcessingMode(Enum):
    RESIZE_APP_STORE = "Resize image to App Store specs"
    GENERATE_MOCKUP = "Generate iPhone 15 Pro mockup"

    @property
    def label(self) -> str:
        return self.value

    @property
    def processing_message(self) -> str:
        return "Resizing image..." if self is ProcessingMode.RESIZE_APP_STORE else "Processing screenshot..."

    @property
    def success_message(self) -> str:
        if self is ProcessingMode.RESIZE_APP_STORE:
            return "✅ Image resized for App Store!"
        return "✅ iPhone mockup generated successfully!"

    @property
    def failure_message(self) -> str:
        if self is ProcessingMode.RESIZE_APP_STORE:
            return "❌ Failed to resize image. Please try again."
        return "❌ Failed to generate mockup. Please try again."


def run_transform(path: str | Path, mode: ProcessingMode) -> Path | None:
    """Run the transform for ``mode`` on ``path``. Blocking; returns the output path or None."""
    src = abs_path(path)
    with scoped_access(src) as granted:
        _logger.info("processing %s, mode=%s, access=%s", src, mode.name, granted)
        if mode is ProcessingMode.RESIZE_APP_STORE:
            return AppStoreResizer().resize_image(src)
        return MockupComposer().generate_mockup(src)


class TransformWorker(QObject):
    """Runs one transform; emits ``finished(success, output_path)``."""

    finished = Signal(bool, str)

    def __init__(self, path: str, mode: ProcessingMode, transform: Callable[..., Path | None] = run_transform):
        super().__init__()
        self.path = path
        self.mode = mode
        self._transform = transform

    @Slot()
    def run(self) -> None:
        out: Path | None = None
        try:
            out = self._transform(self.path, self.mode)
        except Exception:
            _logger.exception("unexpected error while processing %s", self.path)
            out = None
        finally:
            self.finished.emit(out is not None, str(out) if out is not None else "")


class JobController(QObject):
    """Owns at most one in-flight job. A submit while busy is rejected."""

    started = Signal(object)  # ProcessingMode
    finished = Signal(object, bool, str)  # mode, success, output path

    def __init__(
        self,
        parent: QObject | None = None,
        reveal_on_success: bool = True,
        transform: Callable[..., Path | None] = run_transform,
        revealer: Callable[[str], object] = reveal_in_file_browser,
    ):
        super().__init__(parent)
        self.reveal_on_success = reveal_on_success
        self._transform = transform
        self._revealer = revealer
        self._busy = False
        self._mode: ProcessingMode | None = None
        self._thread: QThread | None = None
        self._worker: TransformWorker | None = None

    @property
    def is_busy(self) -> bool:
        return self._busy

    def submit(self, path: str | Path, mode: ProcessingMode) -> bool:
        if self._busy:
            _logger.warning("job rejected, another one is running: %s", path)
            return False

        worker = TransformWorker(str(path), mode, self._transform)
        thread = QThread(self)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(self._on_worker_finished)
        # Direct: quit() must run even while the UI thread is blocked in shutdown()
        worker.finished.connect(thread.quit, Qt.ConnectionType.DirectConnection)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)

        self._busy = True
        self._mode = mode
        self._thread = thread
        self._worker = worker
        self.started.emit(mode)
        thread.start()
        return True

    @Slot(bool, str)
    def _on_worker_finished(self, success: bool, out_path: str) -> None:
        mode = self._mode
        self._busy = False
        self._mode = None
        self._worker = None
        if success and out_path and self.reveal_on_success:
            self._revealer(out_path)
        self.finished.emit(mode, success, out_path)

    def shutdown(self) -> None:
        """Block until the running job, if any, has finished.

        Transforms cannot be cancelled and always end, so there is no timeout.
        """
        thread = self._thread
        if thread is None:
            return
        # The last thread may already be gone through deleteLater
        with contextlib.suppress(RuntimeError):
            if thread.isRunning():
                _logger.debug("waiting for running job to finish")
                thread.wait()
