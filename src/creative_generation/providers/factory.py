from __future__ import annotations

import logging

from creative_generation.settings import Settings

from .base import ImageProvider
from .fal import FalImageProvider

logger = logging.getLogger(__name__)


def create_provider(settings: Settings) -> ImageProvider | None:
    """Return the configured generation backend, or ``None`` when no credential is set."""
    if not settings.has_credential:
        logger.warning("FAL_KEY not set. Image generation will use placeholder images.")
        return None

    logger.info("Image generation configured with fal.ai model %s", settings.image_model)
    return FalImageProvider(
        api_key=settings.fal_key,
        model=settings.image_model,
        endpoint=settings.endpoint,
        timeout=settings.request_timeout_seconds,
    )
