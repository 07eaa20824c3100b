from __future__ import annotations

import logging

from PIL import Image

from creative_generation.imaging.codec import encode_png

from .base import ImageProvider

logger = logging.getLogger(__name__)

GRADIENT_START = (240, 240, 245)
GRADIENT_END = (200, 210, 220)


def _diagonal_gradient(size: tuple[int, int]) -> Image.Image:
    width, height = size
    # 256x256 blend mask, 0 at the top-left corner and 255 at the bottom-right.
    vertical = Image.linear_gradient("L")
    horizontal = vertical.transpose(Image.Transpose.ROTATE_90)
    diagonal = Image.blend(vertical, horizontal, 0.5)
    diagonal = diagonal.resize((width, height), Image.Resampling.BILINEAR)

    start = Image.new("RGB", (width, height), GRADIENT_START)
    end = Image.new("RGB", (width, height), GRADIENT_END)
    return Image.composite(end, start, diagonal)


class PlaceholderImageProvider(ImageProvider):
    """Synthesizes a flat gradient image locally; never touches the network."""

    def generate(self, prompt: str, size: tuple[int, int]) -> bytes:
        if size[0] <= 0 or size[1] <= 0:
            raise ValueError("Image dimensions must be positive")
        logger.info("Generating placeholder image %dx%d", size[0], size[1])
        return encode_png(_diagonal_gradient(size))
