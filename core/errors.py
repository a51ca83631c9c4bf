"""Error kinds reported while indexing and rendering photos.

None of these abort a render pass. They are raised at the point of failure,
caught by the owning component, and handed to an error reporter.
"""

from __future__ import annotations

from pathlib import Path


class PhotoOverlayError(Exception):
    """Base class for non-fatal photo overlay errors.

    Attributes:
        source: File or directory the error concerns.
        reason: Short human readable cause.
    """

    kind = "error"

    def __init__(self, source: str | Path | None, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        message = f"{self.kind}: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DirectoryNotFound(PhotoOverlayError):
    """The configured photo directory does not exist or is not a directory."""

    kind = "directory not found"


class TimestampUnresolved(PhotoOverlayError):
    """No capture time could be read from a photo's metadata."""

    kind = "timestamp unresolved"


class ImageDecodeFailure(PhotoOverlayError):
    """A photo could not be decoded into a pixel buffer."""

    kind = "image decode failure"


class SinkWriteFailure(PhotoOverlayError):
    """The frame sink refused or failed to store a frame."""

    kind = "sink write failure"
