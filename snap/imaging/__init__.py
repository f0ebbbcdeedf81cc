"""Image transforms: App Store resize and device mockup.

Usage:
    from snap.imaging import AppStoreResizer, MockupComposer

    out = AppStoreResizer().resize_image("/path/shot.png")
    out = MockupComposer().generate_mockup("/path/shot.png")

Both return the written path, or None on failure.
"""

from snap.errors import DecodeFailure, EncodeFailure, RenderFailure, SnapError, WriteFailure
from snap.imaging.mockup import MockupComposer, MockupGeometry, compute_geometry
from snap.imaging.resizer import AppStoreResizer

__all__ = [
    "AppStoreResizer",
    "DecodeFailure",
    "EncodeFailure",
    "MockupComposer",
    "MockupGeometry",
    "RenderFailure",
    "SnapError",
    "WriteFailure",
    "compute_geometry",
]
