"""iPhone 15 Pro mockup: screenshot composited under the bundled device frame.

The geometry constants are tuned to the bundled frame asset: the screenshot
is scaled to 84% of the frame height, nudged 12 px down, clipped with a
rounded rect of radius ``85 * scale`` and the composite is cropped to an
800x1500 window starting at x=150.

QImage/QPainter are safe to use from worker threads; no QPixmap here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRect, QRectF, Qt
from PySide6.QtGui import QImage, QImageWriter, QPainter, QPainterPath

from snap.errors import DecodeFailure, EncodeFailure, RenderFailure, SnapError
from snap.file_operations import write_output
from snap.imaging.decoder import RGBA_CHANNELS, decode_rgba
from snap.imaging.metrics import metrics
from snap.logger import get_logger
from snap.path_utils import MOCKUP_SUFFIX, output_path_for, scoped_access
from snap.resources import frame_path as bundled_frame_path

_logger = get_logger("mockup")

SCREEN_HEIGHT_RATIO = 0.84
Y_NUDGE = 12
CORNER_RADIUS = 85
CROP_RECT = (150, 0, 800, 1500)  # x, y, width, height


@dataclass(frozen=True)
class MockupGeometry:
    scale: float
    new_width: float
    new_height: float
    x_offset: float
    y_offset: float
    corner_radius: float

    @property
    def screen_rect(self) -> QRectF:
        return QRectF(self.x_offset, self.y_offset, self.new_width, self.new_height)


def compute_geometry(frame_size: tuple[int, int], shot_size: tuple[int, int]) -> MockupGeometry:
    """Place a ``shot_size`` screenshot inside a ``frame_size`` frame (both w, h)."""
    frame_w, frame_h = frame_size
    shot_w, shot_h = shot_size
    if shot_w <= 0 or shot_h <= 0:
        raise ValueError(f"invalid screenshot size: {shot_w}x{shot_h}")
    scale = (frame_h / shot_h) * SCREEN_HEIGHT_RATIO
    new_w = shot_w * scale
    new_h = shot_h * scale
    return MockupGeometry(
        scale=scale,
        new_width=new_w,
        new_height=new_h,
        x_offset=(frame_w - new_w) / 2,
        y_offset=(frame_h - new_h) / 2 + Y_NUDGE,
        corner_radius=CORNER_RADIUS * scale,
    )


def _array_to_qimage(arr: "np.ndarray") -> QImage:
    h, w, c = arr.shape
    if c != RGBA_CHANNELS:
        raise RenderFailure(f"expected RGBA pixels, got {c} channels")
    arr = np.ascontiguousarray(arr)
    # copy() detaches the QImage from the numpy buffer
    qimg = QImage(arr.data, w, h, w * RGBA_CHANNELS, QImage.Format.Format_RGBA8888).copy()
    if qimg.isNull():
        raise RenderFailure(f"cannot allocate {w}x{h} image")
    return qimg


def qimage_to_png_bytes(qimg: QImage) -> bytes:
    if qimg.isNull():
        raise EncodeFailure("nothing to encode")
    arr = QByteArray()
    buf = QBuffer(arr)
    buf.open(QIODevice.OpenModeFlag.WriteOnly)
    writer = QImageWriter(buf, b"png")
    ok = writer.write(qimg)
    buf.close()
    if not ok:
        raise EncodeFailure(f"png write failed: {writer.errorString()}")
    return bytes(arr.data())


class MockupComposer:
    """Composite screenshots into the device frame."""

    def __init__(self, frame_path: str | Path | None = None):
        self._frame_path = Path(frame_path) if frame_path is not None else None

    @property
    def frame_path(self) -> Path | None:
        return self._frame_path if self._frame_path is not None else bundled_frame_path()

    def load_frame(self) -> QImage:
        path = self.frame_path
        if path is None or not path.is_file():
            raise DecodeFailure("device frame asset not found", str(path) if path else "iphone15pro_frame.png")
        return _array_to_qimage(decode_rgba(path))

    def compose(self, screenshot: QImage, frame: QImage) -> QImage:
        """Layer screenshot and frame, then crop. Pure; no I/O."""
        geo = compute_geometry((frame.width(), frame.height()), (screenshot.width(), screenshot.height()))
        _logger.debug(
            "geometry: scale=%.4f size=%.1fx%.1f offset=(%.1f, %.1f) radius=%.1f",
            geo.scale,
            geo.new_width,
            geo.new_height,
            geo.x_offset,
            geo.y_offset,
            geo.corner_radius,
        )

        composite = QImage(frame.width(), frame.height(), QImage.Format.Format_ARGB32_Premultiplied)
        if composite.isNull():
            raise RenderFailure(f"cannot allocate {frame.width()}x{frame.height()} canvas")
        composite.fill(Qt.GlobalColor.transparent)

        painter = QPainter()
        if not painter.begin(composite):
            raise RenderFailure("cannot start painting on canvas")
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)

            painter.save()
            clip = QPainterPath()
            clip.addRoundedRect(geo.screen_rect, geo.corner_radius, geo.corner_radius)
            painter.setClipPath(clip)
            painter.drawImage(geo.screen_rect, screenshot)
            painter.restore()

            painter.drawImage(0, 0, frame)
        finally:
            painter.end()

        # Parts of the crop outside the canvas come back transparent
        x, y, w, h = CROP_RECT
        return composite.copy(QRect(x, y, w, h))

    def render(self, screenshot_path: str | Path) -> bytes:
        """Decode, compose, crop and PNG-encode. Raises SnapError."""
        screenshot = _array_to_qimage(decode_rgba(screenshot_path))
        _logger.debug("screenshot %dx%d: %s", screenshot.width(), screenshot.height(), screenshot_path)
        frame = self.load_frame()
        return qimage_to_png_bytes(self.compose(screenshot, frame))

    def generate_mockup(self, screenshot_path: str | Path) -> Path | None:
        """Write ``<stem>_iphone_mockup.png`` next to ``screenshot_path``.

        Returns the output path, or None when any step failed.
        """
        out_path = output_path_for(screenshot_path, MOCKUP_SUFFIX)
        with metrics.transform("mockup") as outcome:
            try:
                data = self.render(screenshot_path)
                _logger.debug("saving mockup to %s", out_path)
                with scoped_access(out_path.parent):
                    write_output(data, out_path)
            except SnapError as e:
                _logger.error("mockup failed [%s]: %s", e.kind, e)
                return None
            outcome.ok = True
        _logger.info("iPhone mockup saved as: %s", out_path)
        return out_path
