"""Image decoding and PNG encoding using pyvips.

Every loader here forces the pixels into memory so that a corrupt or
truncated file fails at load time (as ``DecodeFailure``) instead of later
in the pipeline.
"""

from __future__ import annotations

import contextlib
import os
import sys
from pathlib import Path
from typing import Any

import numpy as np

from snap.errors import DecodeFailure, EncodeFailure
from snap.logger import get_logger

_logger = get_logger("decoder")

RGBA_CHANNELS = 4

# Locate bundled libvips (for frozen exe/_MEIPASS and source tree)
_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent.parent.parent))
_LIBVIPS_DIR = _BASE_DIR / "libvips"
if os.name == "nt" and _LIBVIPS_DIR.exists():
    os.add_dll_directory(str(_LIBVIPS_DIR))


_pyvips: Any | None = None


def get_pyvips() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        # Every image is loaded once; the operation cache only holds memory
        pyvips.cache_set_max(0)
        _pyvips = pyvips
    return _pyvips


def vips_error_type() -> type[Exception]:
    return get_pyvips().Error


def load_image(path: str | Path) -> Any:
    """Load ``path`` into a memory-backed pyvips image.

    Raises DecodeFailure for missing, empty, undecodable or zero-sized images.
    """
    pyvips = get_pyvips()
    try:
        image = pyvips.Image.new_from_file(str(path), access="sequential")
        image = image.copy_memory()
    except pyvips.Error as e:
        _logger.debug("decode failed: %s", e)
        lines = str(e).strip().splitlines()
        raise DecodeFailure(lines[0] if lines else "cannot decode", str(path)) from e
    if image.width <= 0 or image.height <= 0:
        raise DecodeFailure("image has no pixels", str(path))
    return image


def to_8bit(image: Any) -> Any:
    """Bring 16-bit/float images down to 8 bits per band."""
    if image.format == "uchar":
        return image
    if image.interpretation in ("rgb16", "grey16"):
        return image.colourspace("srgb")
    return image.cast("uchar")


def to_rgba_array(image: Any) -> "np.ndarray":
    """Convert a pyvips image into an (H, W, 4) uint8 RGBA array."""
    pyvips = get_pyvips()
    with contextlib.suppress(pyvips.Error):
        image = image.colourspace("srgb")
    image = to_8bit(image)
    if not image.hasalpha():
        image = image.bandjoin(255)
    if image.bands > RGBA_CHANNELS:
        image = image.extract_band(0, n=RGBA_CHANNELS)
    mem = image.write_to_memory()
    array = np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)
    if array.shape[2] != RGBA_CHANNELS:
        raise DecodeFailure(f"unsupported band count after conversion: {array.shape[2]}")
    return array.copy()


def decode_rgba(path: str | Path) -> "np.ndarray":
    """Decode ``path`` straight to an RGBA array."""
    image = load_image(path)
    try:
        return to_rgba_array(image)
    except vips_error_type() as e:
        raise DecodeFailure(f"cannot convert to RGBA: {e}", str(path)) from e


def encode_png(image: Any) -> bytes:
    """Serialize a pyvips image as PNG bytes."""
    pyvips = get_pyvips()
    try:
        data = image.write_to_buffer(".png")
    except pyvips.Error as e:
        raise EncodeFailure(f"png save failed: {e}") from e
    if not data:
        raise EncodeFailure("png save produced no data")
    return bytes(data)

