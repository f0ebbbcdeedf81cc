from __future__ import annotations

from PySide6.QtCore import Property, QObject, QTimer, Signal

IDLE_MESSAGE = "Drop an image to process"
RESULT_MARKERS = ("✅", "❌")


class StatusState(QObject):
    """Status line text plus the processing flag.

    Result messages (checkmark/cross) fall back to the idle prompt after
    ``reset_ms``, unless a job is processing by then.
    """

    messageChanged = Signal(str)
    processingChanged = Signal(bool)

    def __init__(self, parent: QObject | None = None, reset_ms: int = 3000) -> None:
        super().__init__(parent)
        self._message = IDLE_MESSAGE
        self._processing = False
        self._reset_timer = QTimer(self)
        self._reset_timer.setSingleShot(True)
        self._reset_timer.setInterval(max(0, int(reset_ms)))
        self._reset_timer.timeout.connect(self._reset_if_idle)

    def _get_message(self) -> str:
        return self._message

    message = Property(str, _get_message, notify=messageChanged)  # type: ignore[arg-type]

    def _get_processing(self) -> bool:
        return bool(self._processing)

    isProcessing = Property(bool, _get_processing, notify=processingChanged)  # type: ignore[arg-type]

    @property
    def reset_pending(self) -> bool:
        return self._reset_timer.isActive()

    def update_status(self, message: str, is_processing: bool = False) -> None:
        self._set_message(message)
        self._set_processing(is_processing)
        if not is_processing and any(m in message for m in RESULT_MARKERS):
            # Restarting drops an earlier pending reset
            self._reset_timer.start()

    def _reset_if_idle(self) -> None:
        if not self._processing:
            self._set_message(IDLE_MESSAGE)

    def _set_message(self, message: str) -> None:
        if message == self._message:
            return
        self._message = message
        self.messageChanged.emit(message)

    def _set_processing(self, processing: bool) -> None:
        v = bool(processing)
        if v == self._processing:
            return
        self._processing = v
        self.processingChanged.emit(v)
