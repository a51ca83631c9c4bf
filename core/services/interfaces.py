"""Collaborator interfaces used by the rendering core.

The core only depends on these base classes; `infrastructure` provides the
default implementations backed by Pillow and loguru.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from core.errors import PhotoOverlayError


class ITimestampResolver:
    """Interface for reading a photo's capture time."""

    def resolve(self, path: Path) -> int | None:
        """Return epoch milliseconds for `path`, or None when unresolvable.

        Implementations must not raise on unreadable or incomplete metadata.
        """
        raise NotImplementedError


class IImageLoader:
    """Interface for decoding image files."""

    def load(self, path: Path) -> Image.Image:
        """Decode `path` into an RGB image; raise `ImageDecodeFailure` on error."""
        raise NotImplementedError


class IFrameSink:
    """Interface for the consumer of rendered video frames."""

    def add_frame(self, frame: Image.Image) -> None:
        """Accept the next frame; raise `SinkWriteFailure` if it cannot be stored.

        Frames must be treated as read-only, the same frame may be passed
        several times in a row.
        """
        raise NotImplementedError


class IProgressSink:
    """Interface for advisory progress reporting."""

    def set_progress(self, percent: int, message: str) -> None:
        """Report `percent` complete with a status `message`."""
        raise NotImplementedError


class IErrorReporter:
    """Interface for the side channel receiving non-fatal errors."""

    def report(self, error: PhotoOverlayError) -> None:
        """Record `error`. Must not raise."""
        raise NotImplementedError
