"""Scaling and bordering of photos into overlays for video frames."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image, ImageDraw

from core.services.interfaces import IImageLoader

FRAME_FILL_RATIO = 0.7
BORDER_DIVISOR = 15
OUTER_BORDER_DIVISOR = 5
BORDER_COLOR = (64, 64, 64)
MAT_COLOR = (255, 255, 255)


def fit_size(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Largest size with the aspect ratio of `width`x`height` fitting the bounds."""
    scale = min(max_width / width, max_height / height)
    return max(1, round(width * scale)), max(1, round(height * scale))


class PhotoCompositor:
    """Turns decoded photos into bordered overlays sized for a frame."""

    def __init__(self, loader: IImageLoader | None = None) -> None:
        self._loader = loader

    def compose(self, source: Image.Image, frame_width: int, frame_height: int) -> Image.Image:
        """Scale `source` to 70% of the frame and add a dark outline and white mat."""
        max_w = round(frame_width * FRAME_FILL_RATIO)
        max_h = round(frame_height * FRAME_FILL_RATIO)
        size = fit_size(source.width, source.height, max_w, max_h)
        scaled = source.convert("RGB").resize(size, Image.Resampling.LANCZOS)
        return self.add_border(scaled)

    def compose_file(self, path: Path, frame_width: int, frame_height: int) -> Image.Image:
        """Decode `path` and compose it; raises `ImageDecodeFailure` if unreadable."""
        if self._loader is None:
            raise RuntimeError("PhotoCompositor has no image loader")
        source = self._loader.load(path)
        overlay = self.compose(source, frame_width, frame_height)
        logger.debug("Composed overlay {}x{} for {}", overlay.width, overlay.height, path)
        return overlay

    @staticmethod
    def add_border(image: Image.Image) -> Image.Image:
        """Return `image` framed by a white mat with a thin dark outer edge."""
        border = min(image.width // BORDER_DIVISOR, image.height // BORDER_DIVISOR)
        outer = border // OUTER_BORDER_DIVISOR
        width = image.width + 2 * border
        height = image.height + 2 * border

        framed = Image.new("RGB", (width, height), BORDER_COLOR)
        draw = ImageDraw.Draw(framed)
        # rectangle bounds are inclusive
        draw.rectangle((outer, outer, width - outer - 1, height - outer - 1), fill=MAT_COLOR)
        framed.paste(image, (border, border))
        return framed
