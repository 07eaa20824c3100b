import io
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from creative_generation.assets.resolver import (
    SOURCE_GENERATED,
    SOURCE_PLACEHOLDER,
    SOURCE_REUSED,
    ImageSourceResolver,
    linear_backoff,
    resolve_asset_path,
)
from creative_generation.exceptions import GenerationBackendError, GenerationCancelledError
from creative_generation.models.aspect_ratio import STANDARD_RATIOS
from creative_generation.models.brief import CampaignBrief

SQUARE, STORY, LANDSCAPE = STANDARD_RATIOS


def _png(size: tuple[int, int], color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _brief(assets: dict | None = None) -> CampaignBrief:
    product = {"productId": "p1", "name": "One", "description": "A thing"}
    if assets is not None:
        product["assets"] = assets
    return CampaignBrief.model_validate(
        {
            "campaignId": "c1",
            "campaignMessage": "Shop now",
            "targetRegion": "US",
            "targetMarket": "United States",
            "targetAudience": "Pros",
            "products": [product],
        }
    )


def _no_wait(attempt: int) -> float:
    return 0.0


def test_linear_backoff() -> None:
    assert linear_backoff(1) == 2.0
    assert linear_backoff(3) == 6.0


def test_existing_image_is_reused_without_calling_provider(tmp_path: Path) -> None:
    data = _png((300, 200))
    (tmp_path / "hero.png").write_bytes(data)
    provider = MagicMock()
    brief = _brief({"image": "hero.png"})
    resolver = ImageSourceResolver(provider, asset_root=tmp_path, backoff=_no_wait)

    resolved = resolver.resolve(brief.products[0], SQUARE, brief)

    assert resolved.source == SOURCE_REUSED
    assert resolved.data == data
    assert resolved.missing_declared_path is None
    provider.generate.assert_not_called()


def test_placeholder_after_exactly_max_retries() -> None:
    provider = MagicMock()
    provider.generate.side_effect = GenerationBackendError("boom", status_code=503)
    waits: list[int] = []

    def backoff(attempt: int) -> float:
        waits.append(attempt)
        return 0.0

    brief = _brief()
    resolver = ImageSourceResolver(provider, max_retries=3, backoff=backoff)

    resolved = resolver.resolve(brief.products[0], STORY, brief)

    assert provider.generate.call_count == 3
    assert waits == [1, 2]
    assert resolved.source == SOURCE_PLACEHOLDER
    assert Image.open(io.BytesIO(resolved.data)).size == (1080, 1920)


def test_success_on_second_attempt() -> None:
    provider = MagicMock()
    provider.generate.side_effect = [GenerationBackendError("flaky"), b"image-bytes"]
    brief = _brief()
    resolver = ImageSourceResolver(provider, max_retries=3, backoff=_no_wait)

    resolved = resolver.resolve(brief.products[0], LANDSCAPE, brief)

    assert resolved.source == SOURCE_GENERATED
    assert resolved.data == b"image-bytes"
    assert provider.generate.call_count == 2


def test_without_provider_uses_placeholder_of_exact_size() -> None:
    brief = _brief()
    resolver = ImageSourceResolver(None)

    resolved = resolver.resolve(brief.products[0], LANDSCAPE, brief)

    assert resolved.source == SOURCE_PLACEHOLDER
    assert Image.open(io.BytesIO(resolved.data)).size == (1920, 1080)


def test_missing_declared_image_is_reported(tmp_path: Path) -> None:
    brief = _brief({"image": "missing.png"})
    resolver = ImageSourceResolver(None, asset_root=tmp_path)

    resolved = resolver.resolve(brief.products[0], SQUARE, brief)

    assert resolved.source == SOURCE_PLACEHOLDER
    assert resolved.missing_declared_path == "missing.png"


def test_prompt_carries_localization_and_ratio() -> None:
    brief = CampaignBrief.model_validate(
        {
            "campaignId": "c1",
            "campaignMessage": "Shop now",
            "targetRegion": "DACH",
            "targetMarket": "Germany",
            "targetAudience": "Families",
            "products": [
                {"productId": "p1", "name": "Shake", "localizations": {"de-DE": {"name": "Schüttelgetränk"}}}
            ],
        }
    )
    provider = MagicMock()
    provider.generate.return_value = b"ok"
    resolver = ImageSourceResolver(provider, backoff=_no_wait)

    resolver.resolve(brief.products[0], STORY, brief, locale="de-DE", cultural_notes="Formal tone")

    prompt, size = provider.generate.call_args.args
    assert "Schüttelgetränk" in prompt
    assert "Cultural context: Formal tone." in prompt
    assert "(1080 x 1920 pixels)" in prompt
    assert size == (1080, 1920)


def test_cancel_before_generation_raises() -> None:
    event = threading.Event()
    event.set()
    provider = MagicMock()
    resolver = ImageSourceResolver(provider, cancel_event=event)

    with pytest.raises(GenerationCancelledError):
        resolver.generate("prompt", (100, 100))
    provider.generate.assert_not_called()


def test_cancel_during_backoff_stops_retrying() -> None:
    event = threading.Event()
    provider = MagicMock()
    provider.generate.side_effect = GenerationBackendError("down")

    def backoff(attempt: int) -> float:
        event.set()
        return 0.0

    resolver = ImageSourceResolver(provider, max_retries=5, backoff=backoff, cancel_event=event)

    with pytest.raises(GenerationCancelledError):
        resolver.generate("prompt", (100, 100))
    assert provider.generate.call_count == 1


def test_max_retries_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ImageSourceResolver(None, max_retries=0)


def test_resolve_asset_path_and_logo(tmp_path: Path) -> None:
    logo = _png((50, 50), (0, 0, 255))
    (tmp_path / "logo.png").write_bytes(logo)
    brief = _brief({"logo": "logo.png"})
    resolver = ImageSourceResolver(None, asset_root=tmp_path)

    assert resolve_asset_path("logo.png", tmp_path) == tmp_path / "logo.png"
    assert resolve_asset_path(str(tmp_path / "logo.png")) == tmp_path / "logo.png"
    assert resolve_asset_path(None, tmp_path) is None
    assert resolve_asset_path("nope.png", tmp_path) is None
    assert resolver.load_logo(brief.products[0]) == logo
    assert resolver.load_logo(_brief().products[0]) is None
