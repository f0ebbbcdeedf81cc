import sys
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QProgressBar, QVBoxLayout, QWidget

from snap.errors import WriteFailure
from snap.file_operations import write_temp_payload
from snap.jobs import JobController, ProcessingMode
from snap.logger import get_logger, setup_logger
from snap.settings_manager import SettingsManager
from snap.status_state import StatusState
from snap.styles import apply_theme
from snap.ui_drop_zone import DropZone
from snap.ui_mode_selector import ModeSelector

logger = get_logger("main")
_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))

PAYLOAD_FAILURE_MESSAGE = "❌ Failed to process image data."

# --- CLI logging options -----------------------------------------------------
# To prevent Qt from rejecting unknown options, we parse our own options first,
# reflect them in environment variables (SNAP_LOG_LEVEL, SNAP_LOG_CATS), and
# remove them from argv.


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Snap", add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv[1:])
    if args.log_level:
        os.environ["SNAP_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["SNAP_LOG_CATS"] = args.log_cats
    return [argv[0], *remaining]


class SnapWindow(QMainWindow):
    def __init__(self, settings_path: str | None = None, controller: JobController | None = None):
        super().__init__()
        self.setWindowTitle("Snap")

        self._settings_path = settings_path or (_BASE_DIR / "settings.json").as_posix()
        self._settings_manager = SettingsManager(self._settings_path)

        self.status = StatusState(self, reset_ms=self._settings_manager.status_reset_ms)
        self.controller = controller or JobController(self)
        self.controller.reveal_on_success = self._settings_manager.reveal_on_success
        self.controller.finished.connect(self._on_job_finished)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setSpacing(20)

        self.drop_zone = DropZone(central)
        self.drop_zone.file_dropped.connect(self.process_path)
        self.drop_zone.data_dropped.connect(self.process_data)
        layout.addWidget(self.drop_zone, 1)

        self.mode_selector = ModeSelector(central)
        layout.addWidget(self.mode_selector, 0, Qt.AlignmentFlag.AlignHCenter)

        status_box = QWidget(central)
        status_box.setFixedHeight(60)
        status_layout = QVBoxLayout(status_box)
        status_layout.setContentsMargins(0, 0, 0, 0)
        status_layout.setSpacing(12)
        self.status_label = QLabel(self.status.message, status_box)
        self.status_label.setObjectName("statusLabel")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_label.setWordWrap(True)
        self.progress = QProgressBar(status_box)
        self.progress.setRange(0, 0)  # indeterminate
        self.progress.setTextVisible(False)
        self.progress.setFixedWidth(160)
        self.progress.setVisible(False)
        status_layout.addWidget(self.status_label)
        status_layout.addWidget(self.progress, 0, Qt.AlignmentFlag.AlignHCenter)
        layout.addWidget(status_box)

        self.setCentralWidget(central)
        self.setFixedSize(500, 400)

        self.status.messageChanged.connect(self.status_label.setText)
        self.status.processingChanged.connect(self._on_processing_changed)

    @property
    def settings(self) -> SettingsManager:
        return self._settings_manager

    def process_path(self, path: str) -> bool:
        """Start processing ``path`` in the selected mode. False if a job is already running."""
        if self.controller.is_busy:
            logger.info("drop ignored while processing: %s", path)
            return False
        mode = self.mode_selector.mode
        self.status.update_status(mode.processing_message, is_processing=True)
        if not self.controller.submit(path, mode):
            self.status.update_status(mode.failure_message)
            return False
        return True

    def process_data(self, data: bytes) -> bool:
        """Store a raw image payload in the temp file, then process it like a path."""
        try:
            temp_path = write_temp_payload(data)
        except WriteFailure as e:
            logger.error("could not store dropped image data: %s", e)
            self.status.update_status(PAYLOAD_FAILURE_MESSAGE)
            return False
        return self.process_path(str(temp_path))

    def _on_job_finished(self, mode: ProcessingMode, success: bool, out_path: str) -> None:
        if success:
            logger.debug("job done: %s", out_path)
            self.status.update_status(mode.success_message)
        else:
            self.status.update_status(mode.failure_message)

    def _on_processing_changed(self, processing: bool) -> None:
        self.progress.setVisible(processing)
        self.drop_zone.setEnabled(not processing)
        self.mode_selector.setEnabled(not processing)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.controller.shutdown()
        super().closeEvent(event)


def _start_path(arguments: list[str]) -> Path | None:
    """Image given on the command line, if it names an existing file.

    ``arguments`` is the full argv (program first) after Qt removed its options.
    """
    import argparse

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("start_path", nargs="?", help="Image to process right after launch")
    args, _ = parser.parse_known_args(arguments[1:])
    if not args.start_path:
        return None
    path = Path(args.start_path)
    if not path.is_file():
        logger.warning("start path is not a file: %s", path)
        return None
    return path


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    if argv is None:
        argv = sys.argv
    argv = _apply_cli_logging_options(list(argv))
    # Pick up levels/categories set from the command line
    setup_logger()

    app = QApplication(argv)
    # Qt strips its own options (-platform, -style, ...) from arguments()
    start_path = _start_path(app.arguments())
    window = SnapWindow()
    apply_theme(app, window.settings.theme)
    window.show()

    if start_path is not None:
        QTimer.singleShot(0, lambda: window.process_path(str(start_path)))

    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
