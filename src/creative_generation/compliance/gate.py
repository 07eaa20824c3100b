from __future__ import annotations

import logging

from creative_generation.models.brief import BrandGuidelines
from creative_generation.models.results import ComplianceResult
from creative_generation.settings import Settings

from .brand import evaluate_brand_compliance
from .guidelines import default_brand_guidelines
from .legal import evaluate_legal_text

logger = logging.getLogger(__name__)


class ComplianceGate:
    """Runs the brand and legal checks for a finished asset.

    ``default_guidelines`` applies whenever no guidelines are passed to
    :meth:`evaluate`; its prohibited-word list also backs guidelines that leave
    ``prohibited_words`` unset.
    """

    def __init__(self, default_guidelines: BrandGuidelines) -> None:
        self.default_guidelines = default_guidelines

    @classmethod
    def from_settings(cls, settings: Settings) -> ComplianceGate:
        return cls(default_brand_guidelines(settings))

    def _prohibited_words(self, guidelines: BrandGuidelines) -> list[str]:
        if guidelines.prohibited_words is not None:
            return guidelines.prohibited_words
        return self.default_guidelines.prohibited_words or []

    def evaluate(
        self,
        image_bytes: bytes,
        message: str,
        has_logo: bool,
        guidelines: BrandGuidelines | None = None,
    ) -> ComplianceResult:
        active = guidelines or self.default_guidelines

        brand = evaluate_brand_compliance(image_bytes, has_logo, active)
        legal = evaluate_legal_text(message, self._prohibited_words(active))

        result = ComplianceResult(
            brand_issues=tuple(brand.issues),
            legal_issues=tuple(legal.issues),
            warnings=tuple(brand.warnings + legal.warnings),
        )
        logger.info(
            "Compliance check: brand=%s legal=%s issues=%d warnings=%d",
            result.brand_compliant,
            result.legal_compliant,
            len(result.issues),
            len(result.warnings),
        )
        return result
