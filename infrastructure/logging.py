"""Logging initialization and error reporting using loguru."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
import sys

from loguru import logger

from core.errors import PhotoOverlayError
from core.services.interfaces import IErrorReporter


def get_log_directory() -> str:
    """Get the default log directory path."""
    return str(Path.home() / ".photo-overlay" / "logs")


def init_logging(log_dir: str | None = None, level: str = "INFO") -> None:
    """Log to stderr and to a rotating file under the given directory."""
    if log_dir is None:
        log_dir = get_log_directory()
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        str(log_path / "render_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level,
    )


def find_latest_log_file(log_dir: str | None = None) -> Path | None:
    """Find the latest log file in the specified directory."""
    if log_dir is None:
        log_dir = get_log_directory()

    try:
        log_path = Path(log_dir)
        if not log_path.exists():
            return None
        log_files = list(log_path.glob("render_*.log"))
        if not log_files:
            return None
        return max(log_files, key=lambda p: p.stat().st_mtime)
    except (OSError, ValueError):
        return None


class LoguruErrorReporter(IErrorReporter):
    """Logs non-fatal errors and counts them per kind."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def report(self, error: PhotoOverlayError) -> None:
        self.counts[error.kind] += 1
        detail = f": {error.reason}" if error.reason else ""
        logger.error("{} '{}'{}", error.kind, error.source, detail)

    @property
    def total(self) -> int:
        """Number of errors reported so far."""
        return sum(self.counts.values())
