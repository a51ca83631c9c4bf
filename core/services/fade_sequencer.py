"""Frame sequencing for the photo fade-in, hold and fade-out animation.

A photo shown for less than `MIN_DISPLAY_MILLIS` is simply pasted onto the
frame and repeated. Longer display times grow the overlay from 10x10 pixels to
full size over half a second (`fps // 2` frames), hold it, then replay the same
ramp frames backwards.

The fade path emits ``2 * ramp + max(0, total_frames - fps)`` frames, which
need not equal ``total_frames``.
"""

from __future__ import annotations

from loguru import logger
from PIL import Image

from core.models import AnimationPlan, RenderConfig

RAMP_START_SIZE = 10


def centered_position(frame: Image.Image, overlay: Image.Image) -> tuple[int, int]:
    """Top-left position that centres `overlay` on `frame`."""
    return (frame.width - overlay.width) // 2, (frame.height - overlay.height) // 2


def ramp_sizes(width: int, height: int, frame_count: int) -> list[tuple[int, int]]:
    """Overlay sizes drawn during the fade-in, smallest first.

    Each step adds a fixed integer increment to the previous size, starting at
    `RAMP_START_SIZE`. The increments truncate toward zero, so the last size
    is usually slightly below `width`x`height`.
    """
    if frame_count <= 0:
        return []
    step_x = int((width - RAMP_START_SIZE) / frame_count)
    step_y = int((height - RAMP_START_SIZE) / frame_count)
    sizes: list[tuple[int, int]] = []
    acc_x = acc_y = RAMP_START_SIZE
    for _ in range(frame_count):
        sizes.append((acc_x, acc_y))
        acc_x += step_x
        acc_y += step_y
    return sizes


class FadeSequencer:
    """Builds the frames showing one overlay on a base frame."""

    @staticmethod
    def plan(config: RenderConfig) -> AnimationPlan | None:
        """Animation plan for `config`, or None when the photo is not faded."""
        if not config.fades:
            return None
        return AnimationPlan.for_config(config)

    def sequence(
        self, base_frame: Image.Image, overlay: Image.Image, config: RenderConfig
    ) -> list[Image.Image]:
        """Return every frame to emit for `overlay`, in order.

        Frames are snapshots that are never modified afterwards. Repeated
        frames are the same object.
        """
        position = centered_position(base_frame, overlay)
        still = base_frame.copy()
        still.paste(overlay, position)

        plan = self.plan(config)
        if plan is None:
            return [still] * config.total_frames

        ramp = self.ramp_frames(base_frame, overlay, position, plan.ramp_frame_count)
        logger.debug(
            "Fade plan: ramp={} hold={} (total_frames={})",
            plan.ramp_frame_count,
            plan.hold_frame_count,
            config.total_frames,
        )
        return ramp + [still] * plan.emitted_hold_frames + ramp[::-1]

    @staticmethod
    def ramp_frames(
        base_frame: Image.Image,
        overlay: Image.Image,
        position: tuple[int, int],
        frame_count: int,
    ) -> list[Image.Image]:
        """Frames with the overlay growing from 10x10 toward full size.

        The overlay is drawn with its top-left corner at `position` on a
        working copy of `base_frame`; each frame is a copy taken right after
        drawing.
        """
        working = base_frame.copy()
        frames: list[Image.Image] = []
        for width, height in ramp_sizes(overlay.width, overlay.height, frame_count):
            size = (max(1, width), max(1, height))
            working.paste(overlay.resize(size, Image.Resampling.BILINEAR), position)
            frames.append(working.copy())
        return frames
