"""Failure kinds raised inside the image transforms.

The public transform entry points turn every one of these into a ``None``
result; the kind only shows up in the log.
"""

from __future__ import annotations


class SnapError(Exception):
    """Base class for transform failures."""

    kind = "error"

    def __init__(self, msg: str, path: str | None = None):
        super().__init__(msg)
        self.msg = msg
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.kind}: {self.msg} ({self.path})"
        return f"{self.kind}: {self.msg}"


class DecodeFailure(SnapError):
    """Unreadable or corrupt input, or a missing device frame."""

    kind = "decode"


class RenderFailure(SnapError):
    """Canvas allocation, scaling or drawing failed."""

    kind = "render"


class EncodeFailure(SnapError):
    """PNG serialization failed."""

    kind = "encode"


class WriteFailure(SnapError):
    """The encoded output could not be written."""

    kind = "write"
