"""Image decoding with Pillow."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image, ImageOps

from core.errors import ImageDecodeFailure
from core.services.interfaces import IImageLoader


class ImageService(IImageLoader):
    """Decodes photos into RGB images with EXIF orientation applied."""

    def load(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                rgb = im.convert("RGB")
        except (OSError, ValueError, Image.DecompressionBombError) as ex:
            raise ImageDecodeFailure(path, str(ex)) from ex
        logger.debug("Decoded {} ({}x{})", path, rgb.width, rgb.height)
        return rgb
