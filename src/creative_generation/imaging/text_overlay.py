from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .codec import decode_image, encode_png

# Bundled font files shipped in assets/fonts/, resolved relative to this module file
_BUNDLED_FONTS_DIR = Path(__file__).resolve().parents[3] / "assets" / "fonts"

MIN_FONT_SIZE_PX = 20
FONT_SIZE_DIVISOR = 25
BAND_PADDING_PX = 40
BAND_COLOR = (0, 0, 0, 180)
TEXT_COLOR = (255, 255, 255, 255)
_DEFAULT_FONTS = ["arialbd.ttf", "Arial Bold.ttf", "DejaVuSans-Bold.ttf", "arial.ttf"]


def _font_candidates(font_family: str | None) -> list[str]:
    if not font_family:
        return list(_DEFAULT_FONTS)

    family = font_family.strip()
    preferred = [family] if family.lower().endswith((".ttf", ".otf")) else [f"{family}.ttf", f"{family} Bold.ttf"]
    return [*preferred, *[name for name in _DEFAULT_FONTS if name not in preferred]]


def _pick_font(font_size: int, font_family: str | None = None) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Resolve the best available font for *font_size*.

    Search order:
    1. Bundled fonts in ``assets/fonts/`` (ships with the repo, no system install required).
    2. System font lookup via Pillow.
    3. Pillow built-in default, scaled to *font_size*.
    """
    for font_name in _font_candidates(font_family):
        bundled_path = _BUNDLED_FONTS_DIR / font_name
        if bundled_path.exists():
            try:
                return ImageFont.truetype(str(bundled_path), font_size)
            except OSError:
                pass
        try:
            return ImageFont.truetype(font_name, font_size)
        except OSError:
            continue
    return ImageFont.load_default(size=font_size)


def _text_height(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, bbox: tuple[int, int, int, int]) -> int:
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        return ascent + descent
    return bbox[3] - bbox[1]


def band_top(image_height: int, box_height: int, position: str = "bottom") -> int:
    position = position.lower()
    if position == "top":
        return BAND_PADDING_PX
    if position == "center":
        return (image_height - box_height) // 2
    return image_height - box_height - BAND_PADDING_PX


def overlay_text(
    data: bytes,
    text: str,
    position: str = "bottom",
    font_family: str | None = None,
) -> bytes:
    """Draw *text* in white on a translucent black band spanning the full width."""
    composed = decode_image(data).convert("RGBA")
    width, height = composed.size

    font = _pick_font(max(width // FONT_SIZE_DIVISOR, MIN_FONT_SIZE_PX), font_family)
    measure = ImageDraw.Draw(composed)
    bbox = measure.textbbox((0, 0), text, font=font)
    text_width = bbox[2] - bbox[0]
    box_height = _text_height(font, bbox) + BAND_PADDING_PX
    y = band_top(height, box_height, position)

    overlay = Image.new("RGBA", composed.size, (0, 0, 0, 0))
    overlay_draw = ImageDraw.Draw(overlay)
    overlay_draw.rectangle([(0, y), (width, y + box_height - 1)], fill=BAND_COLOR)
    composed = Image.alpha_composite(composed, overlay)

    draw = ImageDraw.Draw(composed)
    text_x = (width - text_width) // 2 - bbox[0]
    text_y = y + (box_height - (bbox[3] - bbox[1])) // 2 - bbox[1]
    draw.text((text_x, text_y), text, fill=TEXT_COLOR, font=font)

    return encode_png(composed.convert("RGB"))
