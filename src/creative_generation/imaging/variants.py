from __future__ import annotations

from PIL import Image

from .codec import decode_image, encode_png

PAD_COLOR = (255, 255, 255)


def fit_within(source_size: tuple[int, int], target_size: tuple[int, int]) -> tuple[int, int]:
    """Largest size with the source's aspect ratio that fits inside *target_size*."""
    src_width, src_height = source_size
    target_width, target_height = target_size
    scale = min(target_width / src_width, target_height / src_height)
    return max(1, int(src_width * scale)), max(1, int(src_height * scale))


def resize_to_ratio(data: bytes, target_width: int, target_height: int) -> bytes:
    """Letterbox *data* onto a white canvas of exactly ``target_width x target_height``.

    The source is scaled to fit without cropping or distortion and centered.
    """
    source = decode_image(data).convert("RGBA")
    scaled_size = fit_within(source.size, (target_width, target_height))
    scaled = source.resize(scaled_size, Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", (target_width, target_height), (*PAD_COLOR, 255))
    offset_x = (target_width - scaled_size[0]) // 2
    offset_y = (target_height - scaled_size[1]) // 2
    canvas.alpha_composite(scaled, dest=(offset_x, offset_y))
    return encode_png(canvas.convert("RGB"))
