"""Photo discovery and EXIF capture-time extraction.

Metadata reading is best-effort: unreadable files or missing fields resolve to
None and are reported as `TimestampUnresolved`, never raised.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger
from PIL import Image

from core.errors import TimestampUnresolved
from core.services.interfaces import IErrorReporter, ITimestampResolver

PHOTO_EXTENSIONS = (".jpg", ".jpeg", ".png")

EXIF_IFD_POINTER = 0x8769
TAG_DATETIME = 306
TAG_DATETIME_ORIGINAL = 36867
TAG_OFFSET_TIME_ORIGINAL = 36881

EXIF_DT_FMT = "%Y:%m:%d %H:%M:%S"


def list_photo_files(directory: Path) -> list[Path]:
    """Return image files directly inside `directory`, sorted by name."""
    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in PHOTO_EXTENSIONS
        )
    except OSError as ex:
        logger.warning("Listing {} failed: {}", directory, ex)
        return []


def system_zone_offset(now: datetime | None = None) -> str:
    """Local UTC offset formatted like `+0200`."""
    return (now or datetime.now()).astimezone().strftime("%z")


def normalize_zone_offset(value: str) -> str:
    """Convert EXIF offsets such as `+02:00` to the `+0200` form."""
    return value.strip().replace(":", "")


def _exif_tag(exif: Any, tag: int) -> str | None:
    """Look up `tag` in the Exif sub-IFD first, then in IFD0."""
    try:
        sub_ifd = exif.get_ifd(EXIF_IFD_POINTER)
    except (KeyError, ValueError, TypeError):
        sub_ifd = {}
    value = sub_ifd.get(tag) or exif.get(tag)
    if not value:
        return None
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    return str(value).strip("\x00 ") or None


def parse_exif_datetime(value: str, zone_offset: str) -> datetime:
    """Parse an EXIF `YYYY:MM:DD HH:MM:SS` value in the given zone."""
    return datetime.strptime(
        f"{value[:19]} {normalize_zone_offset(zone_offset)}", f"{EXIF_DT_FMT} %z"
    )


class ExifTimestampResolver(ITimestampResolver):
    """Reads capture times from EXIF `DateTimeOriginal` via Pillow."""

    def __init__(self, zone_offset: str, reporter: IErrorReporter) -> None:
        """Create a resolver.

        Args:
            zone_offset: Offset used when a photo has no `OffsetTimeOriginal`,
                for example the value of `system_zone_offset()`.
            reporter: Receives `TimestampUnresolved` for each failing photo.
        """
        self._zone_offset = zone_offset
        self._reporter = reporter

    def resolve(self, path: Path) -> int | None:
        try:
            with Image.open(path) as im:
                exif = im.getexif()
                taken = _exif_tag(exif, TAG_DATETIME_ORIGINAL) or _exif_tag(exif, TAG_DATETIME)
                offset = _exif_tag(exif, TAG_OFFSET_TIME_ORIGINAL) or self._zone_offset
        except (OSError, ValueError, TypeError, Image.DecompressionBombError) as ex:
            logger.debug("EXIF read failed for {}: {}", path, ex)
            self._reporter.report(TimestampUnresolved(path, str(ex)))
            return None

        if not taken:
            self._reporter.report(TimestampUnresolved(path, "no DateTimeOriginal"))
            return None
        try:
            dt = parse_exif_datetime(taken, offset)
        except ValueError as ex:
            self._reporter.report(TimestampUnresolved(path, f"invalid date '{taken}'"))
            logger.debug("EXIF date parse failed for {}: {}", path, ex)
            return None
        millis = int(dt.timestamp()) * 1000
        if millis <= 0:
            self._reporter.report(TimestampUnresolved(path, f"date before epoch '{taken}'"))
            return None
        return millis
