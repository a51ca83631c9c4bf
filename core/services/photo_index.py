"""Time-bucketed photo index with destructive, at-most-once consumption."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from core.errors import DirectoryNotFound, TimestampUnresolved
from core.models import Photo
from core.services.interfaces import IErrorReporter, ITimestampResolver


class PhotoIndex:
    """Photos grouped by whole-second capture bucket.

    Buckets are only ever removed after construction. `take` hands the photos
    of a bucket to the caller and forgets them, so each photo is rendered at
    most once. Not thread-safe; callers must serialise access.
    """

    def __init__(
        self,
        directory: str | Path | None,
        resolver: ITimestampResolver,
        list_files: Callable[[Path], list[Path]],
        reporter: IErrorReporter,
    ) -> None:
        """Index the photos found in `directory`.

        Args:
            directory: Photo directory; None or blank means no photos.
            resolver: Reads capture times; unresolved photos are skipped.
            list_files: Returns the candidate image files of a directory.
            reporter: Receives `DirectoryNotFound` when `directory` is invalid
                and `TimestampUnresolved` for non-positive capture times.
        """
        self._photos: dict[int, list[Photo]] = {}
        if directory is None or not str(directory).strip():
            return

        path = Path(directory)
        if not path.is_dir():
            reporter.report(DirectoryNotFound(path, "not a directory"))
            return

        grouped: dict[int, list[Photo]] = defaultdict(list)
        seen: set[Path] = set()
        for file in list_files(path):
            key = file.resolve()
            if key in seen:
                continue
            seen.add(key)
            millis = resolver.resolve(file)
            if millis is None:
                # the resolver reports its own failures
                continue
            photo = Photo(millis, file)
            if not photo.is_resolved:
                reporter.report(TimestampUnresolved(file, f"non-positive timestamp {millis}"))
                continue
            grouped[photo.bucket].append(photo)
        self._photos = dict(grouped)
        logger.debug("Indexed {} photos in {} buckets from {}", len(self), len(self._photos), path)

    def __len__(self) -> int:
        return sum(len(v) for v in self._photos.values())

    def __contains__(self, bucket: object) -> bool:
        return bucket in self._photos

    @property
    def is_empty(self) -> bool:
        """True when every bucket has been taken (or none was indexed)."""
        return not self._photos

    def buckets(self) -> list[int]:
        """Remaining bucket keys in ascending order."""
        return sorted(self._photos)

    def due_buckets(self, as_of: int) -> set[int]:
        """Return all bucket keys at or before `as_of` without removing them."""
        return {bucket for bucket in self._photos if bucket <= as_of}

    def take(self, bucket: int) -> list[Photo]:
        """Remove and return the photos of `bucket`; empty if absent."""
        return self._photos.pop(bucket, [])
