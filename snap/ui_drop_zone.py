"""Drop target for screenshots.

Accepts local image files and raw image payloads (e.g. dragged straight out of
another application). Drops are ignored while the widget is disabled.
"""

from __future__ import annotations

from PySide6.QtCore import QMimeData, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QImage, QImageReader, QPainter, QPainterPath, QPalette, QPen
from PySide6.QtWidgets import QWidget

from snap.errors import EncodeFailure
from snap.imaging.mockup import qimage_to_png_bytes
from snap.logger import get_logger

_logger = get_logger("drop_zone")

CORNER_RADIUS = 12
BORDER_WIDTH = 2
ICON_TEXT = "📱"
PROMPT_IDLE = "Drag iPhone screenshot here"
PROMPT_HOVER = "Drop iPhone screenshot here"


def _local_image(mime: QMimeData) -> str | None:
    """First dropped local file that Qt recognises as an image."""
    if not mime.hasUrls():
        return None
    for url in mime.urls():
        path = url.toLocalFile() if url.isLocalFile() else ""
        # Sniffs the header; empty for folders, text and unreadable files
        if path and not QImageReader.imageFormat(path).isEmpty():
            return path
    return None


def _image_payload(mime: QMimeData) -> bytes | None:
    """Encoded image bytes carried by the drag, if any."""
    for fmt in mime.formats():
        if fmt.startswith("image/"):
            data = bytes(mime.data(fmt).data())
            if data:
                return data
    if mime.hasImage():
        img = mime.imageData()
        if isinstance(img, QImage) and not img.isNull():
            try:
                return qimage_to_png_bytes(img)
            except EncodeFailure as e:
                _logger.warning("dropped image could not be encoded: %s", e)
    return None


class DropZone(QWidget):
    file_dropped = Signal(str)
    data_dropped = Signal(bytes)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setMinimumSize(400, 200)
        self._drag_over = False

    @property
    def is_drag_over(self) -> bool:
        return self._drag_over

    def _set_drag_over(self, value: bool) -> None:
        if value != self._drag_over:
            self._drag_over = value
            self.update()

    def _accepts(self, mime: QMimeData) -> bool:
        if not self.isEnabled():
            return False
        return _local_image(mime) is not None or mime.hasImage() or any(
            f.startswith("image/") for f in mime.formats()
        )

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if self._accepts(event.mimeData()):
            event.acceptProposedAction()
            self._set_drag_over(True)
        else:
            event.ignore()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._accepts(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event) -> None:  # type: ignore[override]
        self._set_drag_over(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event) -> None:  # type: ignore[override]
        self._set_drag_over(False)
        if not self.isEnabled():
            event.ignore()
            return
        if self.handle_mime(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def handle_mime(self, mime: QMimeData) -> bool:
        """Emit the drop signal matching ``mime``. Returns False if nothing usable."""
        path = _local_image(mime)
        if path:
            _logger.debug("file dropped: %s", path)
            self.file_dropped.emit(path)
            return True
        data = _image_payload(mime)
        if data:
            _logger.debug("image payload dropped: %d bytes", len(data))
            self.data_dropped.emit(data)
            return True
        return False

    def paintEvent(self, event) -> None:  # type: ignore[override]
        pal = self.palette()
        accent = pal.color(QPalette.ColorRole.Highlight)
        rect = QRectF(self.rect()).adjusted(BORDER_WIDTH, BORDER_WIDTH, -BORDER_WIDTH, -BORDER_WIDTH)

        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            path = QPainterPath()
            path.addRoundedRect(rect, CORNER_RADIUS, CORNER_RADIUS)

            if self._drag_over:
                fill = QColor(accent)
                fill.setAlphaF(0.1)
                border = QColor(accent)
            else:
                fill = pal.color(QPalette.ColorRole.Base)
                border = QColor(Qt.GlobalColor.gray)
                border.setAlphaF(0.5)
            painter.fillPath(path, fill)
            painter.setPen(QPen(border, BORDER_WIDTH))
            painter.drawPath(path)

            icon_font = QFont(self.font())
            icon_font.setPointSize(36)
            painter.setFont(icon_font)
            painter.setPen(pal.color(QPalette.ColorRole.WindowText))
            top = QRectF(rect.left(), rect.top(), rect.width(), rect.height() / 2)
            painter.drawText(top, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom, ICON_TEXT)

            text_font = QFont(self.font())
            text_font.setPointSize(max(12, self.font().pointSize() + 4))
            text_font.setWeight(QFont.Weight.Medium)
            painter.setFont(text_font)
            painter.setPen(accent if self._drag_over else pal.color(QPalette.ColorRole.PlaceholderText))
            bottom = QRectF(rect.left(), rect.center().y() + 16, rect.width(), rect.height() / 2 - 16)
            painter.drawText(
                bottom,
                Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop,
                PROMPT_HOVER if self._drag_over else PROMPT_IDLE,
            )
        finally:
            painter.end()
