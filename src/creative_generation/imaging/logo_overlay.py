from __future__ import annotations

from PIL import Image

from .codec import decode_image, encode_png
from .variants import fit_within

LOGO_PADDING_PX = 20
LOGO_MAX_FRACTION = 5


def logo_position(
    base_size: tuple[int, int],
    logo_size: tuple[int, int],
    corner: str = "top-right",
) -> tuple[int, int]:
    width, height = base_size
    logo_width, logo_height = logo_size
    left = LOGO_PADDING_PX
    right = width - logo_width - LOGO_PADDING_PX
    top = LOGO_PADDING_PX
    bottom = height - logo_height - LOGO_PADDING_PX

    positions = {
        "top-left": (left, top),
        "top-right": (right, top),
        "bottom-left": (left, bottom),
        "bottom-right": (right, bottom),
    }
    x, y = positions.get(corner.lower(), (right, top))
    # Images narrower than the padding still get the logo, pinned to the edge.
    return max(0, x), max(0, y)


def overlay_logo(data: bytes, logo: bytes, corner: str = "top-right") -> bytes:
    base = decode_image(data).convert("RGBA")
    logo_image = decode_image(logo).convert("RGBA")
    width, height = base.size

    max_box = (max(1, width // LOGO_MAX_FRACTION), max(1, height // LOGO_MAX_FRACTION))
    logo_image = logo_image.resize(fit_within(logo_image.size, max_box), Image.Resampling.LANCZOS)

    base.alpha_composite(logo_image, dest=logo_position(base.size, logo_image.size, corner))
    return encode_png(base.convert("RGB"))
