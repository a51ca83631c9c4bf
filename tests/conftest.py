"""Shared pytest configuration and fixtures for the photo overlay tests."""

from pathlib import Path
import sys

from PIL import Image
import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.errors import SinkWriteFailure  # noqa: E402
from core.services.interfaces import (  # noqa: E402
    IErrorReporter,
    IFrameSink,
    IProgressSink,
    ITimestampResolver,
)


class RecordingSink(IFrameSink):
    """Keeps every frame; raises for the frame numbers in `fail_on`."""

    def __init__(self, fail_on=(), error=None):
        self.frames = []
        self.attempts = 0
        self._fail_on = set(fail_on)
        self._error = error

    def add_frame(self, frame):
        attempt = self.attempts
        self.attempts += 1
        if attempt in self._fail_on:
            raise self._error or SinkWriteFailure("sink", f"frame {attempt}")
        self.frames.append(frame)


class RecordingProgress(IProgressSink):
    def __init__(self):
        self.updates = []

    def set_progress(self, percent, message):
        self.updates.append((percent, message))


class RecordingReporter(IErrorReporter):
    def __init__(self):
        self.errors = []

    def report(self, error):
        self.errors.append(error)


class MappingResolver(ITimestampResolver):
    """Resolves capture times from a file-name -> millis mapping."""

    def __init__(self, times):
        self._times = dict(times)

    def resolve(self, path):
        return self._times.get(Path(path).name)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def make_photo(tmp_path):
    """Write a solid-colour PNG into `tmp_path/photos` and return its path."""
    photo_dir = tmp_path / "photos"
    photo_dir.mkdir(exist_ok=True)

    def _make(name, size=(40, 30), color=(255, 0, 0)):
        path = photo_dir / name
        Image.new("RGB", size, color).save(path)
        return path

    return _make


@pytest.fixture
def base_frame():
    return Image.new("RGB", (100, 100), (0, 0, 0))
