from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from loguru import logger
from PIL import Image

from core.errors import ImageDecodeFailure, SinkWriteFailure
from core.models import RenderConfig
from core.services.compositor import PhotoCompositor
from core.services.photo_index import PhotoIndex
from core.services.render_driver import RenderDriver
from infrastructure.frame_sink import LoguruProgressSink, PngDirectoryFrameSink
from infrastructure.image_service import ImageService
from infrastructure.logging import LoguruErrorReporter, find_latest_log_file, init_logging
from infrastructure.settings import JsonSettings
from infrastructure.utils import ExifTimestampResolver, list_photo_files, system_zone_offset

BASE_DIR = Path(__file__).parent


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render photo overlays onto a frame sequence as their capture time passes."
    )
    parser.add_argument("photos_dir", help="Directory with .jpg/.jpeg/.png photos")
    parser.add_argument("base_frame", help="Image used as the background of every video frame")
    parser.add_argument("output_dir", help="Directory receiving numbered PNG frames")
    parser.add_argument("--start", required=True, help="Timeline start, ISO 8601")
    parser.add_argument("--duration", type=float, required=True, help="Timeline length in seconds")
    parser.add_argument("--settings", default=None, help="JSON settings file")
    parser.add_argument("--fps", type=float, default=None, help="Override frames per second")
    parser.add_argument(
        "--photo-time", type=int, default=None, help="Override photo display time in ms"
    )
    parser.add_argument("--log-dir", default=None, help="Directory for log files")
    return parser.parse_args(argv)


def _build_config(settings: JsonSettings, args: argparse.Namespace) -> RenderConfig:
    settings.set("render.photo_display_millis", args.photo_time)
    settings.set("render.frames_per_second", args.fps)
    return RenderConfig.from_settings(settings)


def _start_millis(value: str) -> int:
    start = datetime.fromisoformat(value)
    if start.tzinfo is None:
        start = start.astimezone()
    return int(start.timestamp() * 1000)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        default_settings = BASE_DIR / "settings.json"
        settings_path = args.settings or (default_settings if default_settings.exists() else None)
        settings = JsonSettings(settings_path)
        log_dir = args.log_dir or settings.get("logging.dir")
        init_logging(log_dir, settings.get("logging.level", "INFO"))
        config = _build_config(settings, args)
        start = _start_millis(args.start)
    except (FileNotFoundError, ValueError) as ex:
        logger.error("Configuration error: {}", ex)
        return 2

    reporter = LoguruErrorReporter()
    resolver = ExifTimestampResolver(system_zone_offset(), reporter)
    index = PhotoIndex(args.photos_dir, resolver, list_photo_files, reporter)
    logger.info("Indexed {} photos from {}", len(index), args.photos_dir)

    try:
        base_frame = ImageService().load(Path(args.base_frame))
    except ImageDecodeFailure as ex:
        logger.error("Cannot read base frame: {}", ex)
        return 2

    driver = RenderDriver(index, PhotoCompositor(ImageService()), reporter)
    sink = PngDirectoryFrameSink(args.output_dir)
    progress = LoguruProgressSink()

    frame_count = int(args.duration * config.frames_per_second)
    for frame in range(frame_count):
        timestamp = start + int(frame * 1000 / config.frames_per_second)
        try:
            sink.add_frame(base_frame)
        except SinkWriteFailure as ex:
            logger.error("Cannot write video frame: {}", ex)
            return 1
        percent = frame * 100 // max(1, frame_count)
        progress.set_progress(percent, "Rendering video frames")
        driver.render(timestamp, config, base_frame, sink, progress, percent)

    progress.set_progress(100, "Done")
    logger.info(
        "Wrote {} frames to {} ({} photos left unrendered, {} errors)",
        sink.frame_count,
        sink.output_dir,
        len(index),
        reporter.total,
    )
    log_file = find_latest_log_file(log_dir)
    if log_file:
        logger.info("Log file: {}", log_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
