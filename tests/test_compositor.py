import io

from PIL import Image, ImageChops

from creative_generation.imaging.logo_overlay import logo_position, overlay_logo
from creative_generation.imaging.text_overlay import band_top, overlay_text
from creative_generation.imaging.variants import fit_within, resize_to_ratio
from creative_generation.providers.placeholder import PlaceholderImageProvider

RED = (200, 30, 30)


def _png(size: tuple[int, int], color=RED, mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _open(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data)).convert("RGB")


def test_fit_within_preserves_aspect() -> None:
    assert fit_within((500, 300), (1080, 1080)) == (1080, 648)
    assert fit_within((4000, 1000), (1080, 1920)) == (1080, 270)


def test_resize_letterboxes_onto_exact_canvas() -> None:
    resized = _open(resize_to_ratio(_png((500, 300)), 1080, 1080))

    assert resized.size == (1080, 1080)
    assert resized.getpixel((540, 540)) == RED
    assert resized.getpixel((540, 10)) == (255, 255, 255)

    white = Image.new("RGB", resized.size, (255, 255, 255))
    left, top, right, bottom = ImageChops.difference(resized, white).getbbox()
    assert (left, right) == (0, 1080)
    assert abs((bottom - top) - 648) <= 1


def test_resize_downscales_large_source() -> None:
    resized = _open(resize_to_ratio(_png((4000, 1000)), 1080, 1920))

    assert resized.size == (1080, 1920)
    white = Image.new("RGB", resized.size, (255, 255, 255))
    left, top, right, bottom = ImageChops.difference(resized, white).getbbox()
    assert (left, right) == (0, 1080)
    assert abs((bottom - top) - 270) <= 1
    assert resized.getpixel((540, 960)) == RED


def test_logo_is_scaled_into_top_right_corner() -> None:
    composed = _open(overlay_logo(_png((1080, 1080)), _png((400, 200), (0, 0, 255))))

    # 400x200 fits into 216x216 as 216x108, padded 20px from the top-right corner.
    assert logo_position((1080, 1080), (216, 108)) == (844, 20)
    assert composed.getpixel((844 + 108, 20 + 54)) == (0, 0, 255)
    assert composed.getpixel((10, 10)) == RED
    assert composed.getpixel((1070, 200)) == RED


def test_logo_transparency_is_preserved() -> None:
    logo = Image.new("RGBA", (200, 200), (0, 0, 0, 0))
    logo.paste((0, 255, 0, 255), (100, 0, 200, 200))
    buffer = io.BytesIO()
    logo.save(buffer, format="PNG")

    composed = _open(overlay_logo(_png((1000, 1000)), buffer.getvalue(), corner="top-left"))

    assert composed.getpixel((40, 100)) == RED
    assert composed.getpixel((20 + 170, 100)) == (0, 255, 0)


def test_logo_position_clamps_on_tiny_images() -> None:
    assert logo_position((30, 30), (6, 6), "bottom-right") == (4, 4)
    assert logo_position((10, 10), (2, 2), "top-right") == (0, 20)


def test_text_band_at_bottom() -> None:
    composed = _open(overlay_text(_png((1080, 1080)), "Hi"))

    assert composed.size == (1080, 1080)
    assert composed.getpixel((5, 5)) == RED
    darkened = composed.getpixel((5, 1080 - 41))
    assert darkened[0] < 100

    band = composed.crop((0, 1080 - 140, 1080, 1080 - 40)).convert("L")
    assert band.getextrema()[1] >= 200


def test_text_band_at_top() -> None:
    composed = _open(overlay_text(_png((1080, 1080)), "Hi", position="top"))

    assert composed.getpixel((5, 39)) == RED
    assert composed.getpixel((5, 41))[0] < 100
    assert composed.getpixel((5, 1075)) == RED


def test_band_top_positions() -> None:
    assert band_top(1000, 100, "top") == 40
    assert band_top(1000, 100, "center") == 450
    assert band_top(1000, 100, "bottom") == 860


def test_placeholder_gradient() -> None:
    image = _open(PlaceholderImageProvider().generate("ignored", (320, 180)))

    assert image.size == (320, 180)
    assert image.getpixel((0, 0)) != image.getpixel((319, 179))
