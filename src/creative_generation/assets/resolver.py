"""Source image resolution for one (product, aspect ratio) unit.

Resolution order:

1. a product image declared in the brief that exists on disk, returned verbatim;
2. the generation backend, retried up to ``max_retries`` times with a
   caller-supplied backoff between attempts;
3. a locally synthesized placeholder, used when every attempt failed or no
   backend is configured.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from creative_generation.exceptions import (
    CreativeGenerationError,
    GenerationCancelledError,
    ImageSourceError,
)
from creative_generation.models.aspect_ratio import AspectRatio
from creative_generation.models.brief import CampaignBrief, Product
from creative_generation.prompts.builder import build_generation_prompt, build_ratio_prompt
from creative_generation.providers.base import ImageProvider
from creative_generation.providers.placeholder import PlaceholderImageProvider

logger = logging.getLogger(__name__)

BackoffPolicy = Callable[[int], float]

SOURCE_REUSED = "reused"
SOURCE_GENERATED = "generated"
SOURCE_PLACEHOLDER = "placeholder"


def linear_backoff(attempt: int) -> float:
    """Seconds to wait after failed attempt number *attempt* (1-based)."""
    return 2.0 * attempt


@dataclass(frozen=True, slots=True)
class ResolvedImage:
    data: bytes
    source: str
    missing_declared_path: str | None = None


def resolve_asset_path(asset_path: str | None, asset_root: Path | None = None) -> Path | None:
    if not asset_path:
        return None

    path = Path(asset_path)
    if path.is_absolute():
        return path if path.is_file() else None

    candidates = [asset_root / path] if asset_root is not None else []
    candidates.append(path)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


class ImageSourceResolver:
    def __init__(
        self,
        provider: ImageProvider | None,
        max_retries: int = 3,
        backoff: BackoffPolicy = linear_backoff,
        asset_root: Path | None = None,
        cancel_event: threading.Event | None = None,
        placeholder: ImageProvider | None = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.provider = provider
        self.max_retries = max_retries
        self.backoff = backoff
        self.asset_root = asset_root
        self.cancel_event = cancel_event or threading.Event()
        self.placeholder = placeholder or PlaceholderImageProvider()

    def load_logo(self, product: Product) -> bytes | None:
        logo = product.assets.logo if product.assets else None
        logo_path = resolve_asset_path(logo, self.asset_root)
        if logo_path is None:
            if logo:
                logger.debug("Logo not found for product %s: %s", product.product_id, logo)
            return None

        logger.info("Using existing logo for product %s: %s", product.product_id, logo_path)
        return logo_path.read_bytes()

    def resolve(
        self,
        product: Product,
        aspect_ratio: AspectRatio,
        brief: CampaignBrief,
        locale: str | None = None,
        cultural_notes: str | None = None,
    ) -> ResolvedImage:
        declared = product.assets.source_image_path if product.assets else None
        source_path = resolve_asset_path(declared, self.asset_root)
        if source_path is not None:
            logger.info("Using existing product image for %s: %s", product.product_id, source_path)
            try:
                return ResolvedImage(data=source_path.read_bytes(), source=SOURCE_REUSED)
            except OSError as exc:
                raise ImageSourceError(f"Unable to read product image {source_path}: {exc}") from exc

        if declared:
            logger.warning(
                "Declared image %s for product %s does not exist; falling back to generation",
                declared,
                product.product_id,
            )

        prompt = build_ratio_prompt(
            build_generation_prompt(
                product.localized_name(locale),
                product.localized_description(locale),
                brief.target_audience,
                brief.target_region,
                cultural_notes,
            ),
            aspect_ratio,
        )
        data, source = self.generate(prompt, aspect_ratio.size)
        return ResolvedImage(data=data, source=source, missing_declared_path=declared)

    def generate(self, prompt: str, size: tuple[int, int]) -> tuple[bytes, str]:
        """Generate an image for *prompt*, falling back to a placeholder.

        Returns the encoded bytes and the source tag (``generated`` or
        ``placeholder``).  Backend failures never escape this method.
        """
        logger.info("Generating image with prompt: \"%s...\"", prompt[:50])

        if self.provider is None:
            return self.placeholder.generate(prompt, size), SOURCE_PLACEHOLDER

        for attempt in range(1, self.max_retries + 1):
            self._raise_if_cancelled()
            logger.debug("Generation attempt %d/%d", attempt, self.max_retries)
            try:
                return self.provider.generate(prompt, size), SOURCE_GENERATED
            except (CreativeGenerationError, OSError, ValueError) as exc:
                logger.error("Generation attempt %d failed: %s", attempt, exc)

            if attempt < self.max_retries and self.cancel_event.wait(self.backoff(attempt)):
                self._raise_if_cancelled()

        logger.error("Max retries reached. Using placeholder image.")
        return self.placeholder.generate(prompt, size), SOURCE_PLACEHOLDER

    def _raise_if_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise GenerationCancelledError("Image generation cancelled")
