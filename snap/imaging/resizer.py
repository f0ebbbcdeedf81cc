"""App Store resize: stretch any screenshot onto a fixed 1260x2736 canvas."""

from __future__ import annotations

from pathlib import Path

from snap.errors import RenderFailure, SnapError
from snap.file_operations import write_output
from snap.imaging.decoder import encode_png, get_pyvips, load_image, to_8bit
from snap.imaging.metrics import metrics
from snap.logger import get_logger
from snap.path_utils import APP_STORE_SUFFIX, output_path_for, scoped_access

_logger = get_logger("resizer")

TARGET_WIDTH = 1260
TARGET_HEIGHT = 2736


class AppStoreResizer:
    """Resize to the App Store 6.9" portrait size, ignoring aspect ratio."""

    target_width = TARGET_WIDTH
    target_height = TARGET_HEIGHT

    def render(self, image_path: str | Path) -> bytes:
        """Decode, resize and PNG-encode ``image_path``. Raises SnapError."""
        pyvips = get_pyvips()
        image = load_image(image_path)
        _logger.debug("source %dx%d: %s", image.width, image.height, image_path)
        try:
            image = to_8bit(image)
            # Independent scales break the aspect ratio on purpose
            resized = image.resize(
                self.target_width / image.width, kernel="lanczos3", vscale=self.target_height / image.height
            )
            if (resized.width, resized.height) != (self.target_width, self.target_height):
                # Rounding can leave one pixel too many or too few
                resized = resized.gravity("centre", self.target_width, self.target_height, extend="copy")
            resized = resized.copy_memory()
        except pyvips.Error as e:
            raise RenderFailure(f"resize failed: {e}", str(image_path)) from e
        if (resized.width, resized.height) != (self.target_width, self.target_height):
            raise RenderFailure(
                f"unexpected canvas size {resized.width}x{resized.height}", str(image_path)
            )
        return encode_png(resized)

    def resize_image(self, image_path: str | Path) -> Path | None:
        """Write ``<stem>_appstore.png`` next to ``image_path``.

        Returns the output path, or None when any step failed.
        """
        out_path = output_path_for(image_path, APP_STORE_SUFFIX)
        with metrics.transform("resize") as outcome:
            try:
                data = self.render(image_path)
                with scoped_access(out_path.parent):
                    write_output(data, out_path)
            except SnapError as e:
                _logger.error("resize failed [%s]: %s", e.kind, e)
                return None
            outcome.ok = True
        _logger.info("App Store image saved as: %s", out_path)
        return out_path
