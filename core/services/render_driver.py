"""Render driver: consumes due photos and writes their animation frames."""

from __future__ import annotations

from loguru import logger
from PIL import Image

from core.errors import ImageDecodeFailure, SinkWriteFailure
from core.models import Photo, RenderConfig, bucket_of
from core.services.compositor import PhotoCompositor
from core.services.fade_sequencer import FadeSequencer
from core.services.interfaces import IErrorReporter, IFrameSink, IProgressSink
from core.services.photo_index import PhotoIndex


class RenderDriver:
    """Renders photos into the video as the timeline reaches their capture time."""

    def __init__(
        self,
        index: PhotoIndex,
        compositor: PhotoCompositor,
        reporter: IErrorReporter,
        sequencer: FadeSequencer | None = None,
    ) -> None:
        self._index = index
        self._compositor = compositor
        self._reporter = reporter
        self._sequencer = sequencer or FadeSequencer()

    @property
    def index(self) -> PhotoIndex:
        """The photo index consumed by this driver."""
        return self._index

    def render(
        self,
        as_of_millis: int,
        config: RenderConfig,
        base_frame: Image.Image,
        sink: IFrameSink,
        progress: IProgressSink,
        percent: int,
    ) -> int:
        """Render every photo captured at or before `as_of_millis`.

        Due buckets are removed from the index before any rendering starts, so
        a photo that fails is not retried on a later call.

        Returns:
            Number of frames written to `sink`.
        """
        due = self._index.due_buckets(bucket_of(as_of_millis))
        if not due:
            return 0

        photos: list[Photo] = []
        for bucket in sorted(due):
            photos.extend(self._index.take(bucket))

        written = 0
        for photo in photos:
            progress.set_progress(percent, f"Rendering photo '{photo.source_file.name}'")
            written += self._render_photo(photo, config, base_frame, sink)
        return written

    def _render_photo(
        self, photo: Photo, config: RenderConfig, base_frame: Image.Image, sink: IFrameSink
    ) -> int:
        try:
            overlay = self._compositor.compose_file(
                photo.source_file, base_frame.width, base_frame.height
            )
        except ImageDecodeFailure as ex:
            self._reporter.report(ex)
            return 0

        written = 0
        for frame in self._sequencer.sequence(base_frame, overlay, config):
            try:
                sink.add_frame(frame)
            except SinkWriteFailure as ex:
                self._reporter.report(ex)
                break
            except OSError as ex:
                self._reporter.report(SinkWriteFailure(photo.source_file, str(ex)))
                break
            written += 1
        logger.debug("Wrote {} frames for {}", written, photo.source_file)
        return written
