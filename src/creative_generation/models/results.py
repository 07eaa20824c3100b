from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from .aspect_ratio import AspectRatio


@dataclass(frozen=True, slots=True)
class ComplianceResult:
    """Outcome of the compliance gate for one composited asset.

    Issues are hard rule violations split by the check that raised them;
    warnings are advisory and never affect the compliant flags.
    """

    brand_issues: tuple[str, ...] = ()
    legal_issues: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def issues(self) -> tuple[str, ...]:
        return self.brand_issues + self.legal_issues

    @property
    def brand_compliant(self) -> bool:
        return not self.brand_issues

    @property
    def legal_compliant(self) -> bool:
        return not self.legal_issues

    @property
    def passed(self) -> bool:
        return self.brand_compliant and self.legal_compliant

    def to_dict(self) -> dict:
        return {
            "brand_compliant": self.brand_compliant,
            "legal_compliant": self.legal_compliant,
            "issues": list(self.issues),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class AssetMetadata:
    campaign_id: str
    product: str
    region: str
    aspect_ratio: str
    message: str
    image_source: str
    compliance: ComplianceResult
    generation_method: str = "native"

    def to_dict(self) -> dict:
        return {
            "campaign_id": self.campaign_id,
            "product": self.product,
            "region": self.region,
            "aspect_ratio": self.aspect_ratio,
            "message": self.message,
            "generation_method": self.generation_method,
            "image_source": self.image_source,
            "compliance": self.compliance.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class GeneratedAsset:
    product_id: str
    aspect_ratio: AspectRatio
    output_path: str
    generated_at: datetime
    metadata: AssetMetadata
    locale: str | None = None

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "aspect_ratio": self.aspect_ratio.name,
            "platforms": list(self.aspect_ratio.platforms),
            "output_path": self.output_path,
            "generated_at": self.generated_at.isoformat(),
            "locale": self.locale,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class GenerationSummary:
    total_assets: int = 0
    assets_generated: int = 0
    assets_reused: int = 0
    assets_resized: int = 0
    compliance_issues: int = 0
    missing_source_assets: int = 0
    duration_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "total_assets": self.total_assets,
            "assets_generated": self.assets_generated,
            "assets_reused": self.assets_reused,
            "assets_resized": self.assets_resized,
            "compliance_issues": self.compliance_issues,
            "missing_source_assets": self.missing_source_assets,
            "duration_ms": self.duration_ms,
        }


@dataclass(frozen=True, slots=True)
class GenerationResult:
    summary: GenerationSummary
    assets: tuple[GeneratedAsset, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "summary": self.summary.to_dict(),
            "assets": [asset.to_dict() for asset in self.assets],
            "errors": list(self.errors),
        }


def merge_results(results: Iterable[GenerationResult]) -> GenerationResult:
    """Combine per-locale results: assets and errors concatenated in order, counters summed."""
    assets: list[GeneratedAsset] = []
    errors: list[str] = []
    generated = reused = resized = compliance_issues = missing = duration_ms = 0

    for result in results:
        assets.extend(result.assets)
        errors.extend(result.errors)
        generated += result.summary.assets_generated
        reused += result.summary.assets_reused
        resized += result.summary.assets_resized
        compliance_issues += result.summary.compliance_issues
        missing += result.summary.missing_source_assets
        duration_ms += result.summary.duration_ms

    summary = GenerationSummary(
        total_assets=len(assets),
        assets_generated=generated,
        assets_reused=reused,
        assets_resized=resized,
        compliance_issues=compliance_issues,
        missing_source_assets=missing,
        duration_ms=duration_ms,
    )
    return GenerationResult(summary=summary, assets=tuple(assets), errors=tuple(errors))
