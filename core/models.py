"""Core domain models for photos, render timing, and animation plans."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

MIN_DISPLAY_MILLIS = 3000


def bucket_of(timestamp_millis: int) -> int:
    """Return the whole-second bucket for an epoch-millisecond timestamp."""
    return timestamp_millis // 1000


@dataclass(frozen=True)
class Photo:
    """A photo file together with its capture time in epoch milliseconds."""

    timestamp_millis: int
    source_file: Path

    @property
    def is_resolved(self) -> bool:
        """True when the capture time could be determined."""
        return self.timestamp_millis > 0

    @property
    def bucket(self) -> int:
        """Whole-second bucket the photo belongs to."""
        return bucket_of(self.timestamp_millis)


@dataclass(frozen=True)
class RenderConfig:
    """Timing configuration for one render pass.

    Attributes:
        photo_display_millis: Total on-screen time per photo.
        frames_per_second: Frame rate of the generated video.
    """

    photo_display_millis: int
    frames_per_second: float

    def __post_init__(self) -> None:
        if self.photo_display_millis < 0:
            raise ValueError(f"photo_display_millis must be >= 0: {self.photo_display_millis}")
        if not self.frames_per_second > 0:
            raise ValueError(f"frames_per_second must be > 0: {self.frames_per_second}")

    @property
    def total_frames(self) -> int:
        """Frames a photo should occupy, rounded half up."""
        return int(self.photo_display_millis * self.frames_per_second / 1000 + 0.5)

    @property
    def whole_fps(self) -> int:
        """Frame rate truncated to whole frames."""
        return int(self.frames_per_second)

    @property
    def fades(self) -> bool:
        """True when the display time is long enough for a fade animation."""
        return self.photo_display_millis >= MIN_DISPLAY_MILLIS

    @classmethod
    def from_settings(cls, settings: Any) -> RenderConfig:
        """Build a config from a settings object exposing dotted-key `get`."""
        return cls(
            photo_display_millis=int(settings.get("render.photo_display_millis", 7000)),
            frames_per_second=float(settings.get("render.frames_per_second", 30)),
        )


@dataclass(frozen=True)
class AnimationPlan:
    """Frame counts for the fade-in/hold/fade-out animation of one photo."""

    ramp_frame_count: int
    hold_frame_count: int

    @property
    def emitted_hold_frames(self) -> int:
        """Hold frames actually emitted; a negative hold emits nothing."""
        return max(0, self.hold_frame_count)

    @property
    def emitted_frame_count(self) -> int:
        """Total frames the fade path emits."""
        return 2 * self.ramp_frame_count + self.emitted_hold_frames

    @classmethod
    def for_config(cls, config: RenderConfig) -> AnimationPlan:
        """Derive the plan from timing configuration."""
        return cls(
            ramp_frame_count=config.whole_fps // 2,
            hold_frame_count=config.total_frames - config.whole_fps,
        )
