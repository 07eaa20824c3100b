from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

from PIL import Image, UnidentifiedImageError

from creative_generation.models.brief import BrandGuidelines

logger = logging.getLogger(__name__)

MIN_DIMENSION_PX = 1080


@dataclass(slots=True)
class BrandCheckResult:
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues


def evaluate_brand_compliance(
    image_bytes: bytes,
    has_logo: bool,
    guidelines: BrandGuidelines,
) -> BrandCheckResult:
    result = BrandCheckResult()

    if guidelines.logo_required and not has_logo:
        result.issues.append("Brand logo is required but not present")

    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError) as exc:
        logger.error("Error validating image metadata: %s", exc)
        result.warnings.append("Could not validate image metadata")
        return result

    if width < MIN_DIMENSION_PX or height < MIN_DIMENSION_PX:
        result.warnings.append(
            f"Image dimensions ({width}x{height}) below recommended minimum ({MIN_DIMENSION_PX}px)"
        )
    return result
