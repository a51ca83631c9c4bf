"""Frame and progress sinks writing to disk and to the log."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image

from core.errors import SinkWriteFailure
from core.services.interfaces import IFrameSink, IProgressSink


class PngDirectoryFrameSink(IFrameSink):
    """Writes each frame as a numbered PNG file (`frame_000000.png`, ...)."""

    def __init__(self, output_dir: str | Path, prefix: str = "frame") -> None:
        self._dir = Path(output_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._prefix = prefix
        self.frame_count = 0

    @property
    def output_dir(self) -> Path:
        """Directory receiving the frames."""
        return self._dir

    def add_frame(self, frame: Image.Image) -> None:
        target = self._dir / f"{self._prefix}_{self.frame_count:06d}.png"
        try:
            frame.save(target, "PNG")
        except (OSError, ValueError) as ex:
            raise SinkWriteFailure(target, str(ex)) from ex
        self.frame_count += 1


class LoguruProgressSink(IProgressSink):
    """Logs progress updates, skipping repeats of the same message."""

    def __init__(self) -> None:
        self._last: tuple[int, str] | None = None

    def set_progress(self, percent: int, message: str) -> None:
        if self._last == (percent, message):
            return
        self._last = (percent, message)
        logger.info("[{:3d}%] {}", percent, message)
