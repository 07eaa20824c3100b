from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from creative_generation.assets.resolver import SOURCE_REUSED, ImageSourceResolver
from creative_generation.brief_loader import load_and_validate_brief
from creative_generation.compliance.gate import ComplianceGate
from creative_generation.compliance.guidelines import default_brand_guidelines, load_brand_guidelines
from creative_generation.exceptions import GenerationCancelledError
from creative_generation.imaging.codec import image_size
from creative_generation.imaging.logo_overlay import overlay_logo
from creative_generation.imaging.text_overlay import overlay_text
from creative_generation.imaging.variants import resize_to_ratio
from creative_generation.localization import LocaleContext, resolve_locale_context
from creative_generation.models.aspect_ratio import STANDARD_RATIOS, AspectRatio
from creative_generation.models.brief import CampaignBrief, Product
from creative_generation.models.results import (
    AssetMetadata,
    GeneratedAsset,
    GenerationResult,
    GenerationSummary,
    merge_results,
)
from creative_generation.output.metrics import Timer
from creative_generation.output.report import render_report
from creative_generation.output.writer import save_bytes, write_json, write_text
from creative_generation.providers.factory import create_provider
from creative_generation.settings import Settings, load_settings

logger = logging.getLogger(__name__)

REPORT_FILENAME = "generation-report.txt"
RESULT_FILENAME = "generation-result.json"


@dataclass(frozen=True, slots=True)
class _UnitOutcome:
    """Everything one (product, aspect ratio) unit contributes to the run."""

    asset: GeneratedAsset | None = None
    error: str | None = None
    generated: int = 0
    reused: int = 0
    resized: int = 0
    compliance_issue: int = 0
    missing_source: int = 0


@dataclass(slots=True)
class RunConfig:
    brief_path: Path
    output_root: Path | None = None
    locale: str | None = None
    settings_path: Path | None = None
    brand_guidelines_path: Path | None = None
    asset_root: Path | None = None


def asset_output_path(output_root: Path, campaign_id: str, product_id: str, aspect_ratio: AspectRatio) -> Path:
    return output_root / campaign_id / product_id / f"{product_id}_{aspect_ratio.file_key}.png"


class CampaignOrchestrator:
    """Drives generation over locales, products and aspect ratios.

    Every (product, aspect ratio) unit is isolated: a failure is recorded as an
    error string and the remaining units still run.
    """

    def __init__(
        self,
        resolver: ImageSourceResolver,
        gate: ComplianceGate,
        output_root: Path,
        cancel_event: threading.Event | None = None,
        logo_corner: str = "top-right",
        text_position: str = "bottom",
    ) -> None:
        self.resolver = resolver
        self.gate = gate
        self.output_root = output_root
        self.cancel_event = cancel_event or resolver.cancel_event
        self.logo_corner = logo_corner
        self.text_position = text_position

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        output_root: Path | None = None,
        asset_root: Path | None = None,
        gate: ComplianceGate | None = None,
        cancel_event: threading.Event | None = None,
    ) -> CampaignOrchestrator:
        resolver = ImageSourceResolver(
            provider=create_provider(settings),
            max_retries=settings.max_retries,
            asset_root=asset_root,
            cancel_event=cancel_event,
        )
        return cls(
            resolver=resolver,
            gate=gate or ComplianceGate.from_settings(settings),
            output_root=output_root or settings.output_base_path,
            cancel_event=cancel_event,
        )

    def run(self, brief: CampaignBrief, locale: str | None = None) -> GenerationResult:
        if locale is not None:
            return self.run_locale(brief, locale)

        if not brief.localizations:
            return self.run_locale(brief, None)

        logger.info("Generating assets for all localizations: %s", ", ".join(brief.localizations))
        return merge_results(self.run_locale(brief, code) for code in brief.localizations)

    def run_locale(self, brief: CampaignBrief, locale: str | None) -> GenerationResult:
        timer = Timer()
        context = resolve_locale_context(brief, locale, self.gate.default_guidelines)

        logger.info(
            "Starting asset generation for campaign: %s (locale: %s)",
            context.campaign_id,
            locale or "default",
        )
        logger.info(
            "Generating assets for %d products across %d aspect ratios",
            len(brief.products),
            len(STANDARD_RATIOS),
        )

        assets: list[GeneratedAsset] = []
        errors: list[str] = []
        generated = reused = resized = compliance_issues = missing = 0

        for product in brief.products:
            logo = self._load_logo(product)
            for aspect_ratio in STANDARD_RATIOS:
                self._raise_if_cancelled()
                outcome = self._process_unit(brief, context, product, aspect_ratio, logo)
                if outcome.asset is not None:
                    assets.append(outcome.asset)
                if outcome.error is not None:
                    errors.append(outcome.error)
                generated += outcome.generated
                reused += outcome.reused
                resized += outcome.resized
                compliance_issues += outcome.compliance_issue
                missing += outcome.missing_source

        summary = GenerationSummary(
            total_assets=len(assets),
            assets_generated=generated,
            assets_reused=reused,
            assets_resized=resized,
            compliance_issues=compliance_issues,
            missing_source_assets=missing,
            duration_ms=timer.elapsed_ms(),
        )
        logger.info("Asset generation complete in %.2fs", summary.duration_ms / 1000)
        logger.info("Total assets: %d, Generated: %d, Reused: %d", summary.total_assets, generated, reused)
        return GenerationResult(summary=summary, assets=tuple(assets), errors=tuple(errors))

    def _load_logo(self, product: Product) -> bytes | None:
        try:
            return self.resolver.load_logo(product)
        except OSError as exc:
            logger.warning("Failed to load logo for %s: %s", product.product_id, exc)
            return None

    def _process_unit(
        self,
        brief: CampaignBrief,
        context: LocaleContext,
        product: Product,
        aspect_ratio: AspectRatio,
        logo: bytes | None,
    ) -> _UnitOutcome:
        product_name = product.localized_name(context.locale)
        logger.info(
            "Generating native %s (%dx%d) for %s",
            aspect_ratio.name,
            aspect_ratio.width,
            aspect_ratio.height,
            product_name,
        )

        try:
            resolved = self.resolver.resolve(
                product,
                aspect_ratio,
                brief,
                locale=context.locale,
                cultural_notes=context.cultural_notes,
            )

            image = resolved.data
            was_resized = resolved.source == SOURCE_REUSED or image_size(image) != aspect_ratio.size
            if was_resized:
                image = resize_to_ratio(image, aspect_ratio.width, aspect_ratio.height)

            if logo is not None:
                image = overlay_logo(image, logo, self.logo_corner)
            font_family = context.guidelines.font_family if context.guidelines else None
            image = overlay_text(image, context.message, self.text_position, font_family=font_family)

            compliance = self.gate.evaluate(image, context.message, logo is not None, context.guidelines)
            if not compliance.passed:
                logger.warning(
                    "Compliance issues for %s %s: %s",
                    product.product_id,
                    aspect_ratio.name,
                    ", ".join(compliance.issues),
                )

            output_path = asset_output_path(self.output_root, context.campaign_id, product.product_id, aspect_ratio)
            save_bytes(image, output_path)
            logger.info("Saved asset: %s", output_path)
        except GenerationCancelledError:
            raise
        except Exception as exc:
            error = f"Failed to generate {aspect_ratio.name} for {product.product_id}: {exc}"
            logger.error(error)
            return _UnitOutcome(error=error)

        metadata = AssetMetadata(
            campaign_id=context.campaign_id,
            product=product_name,
            region=brief.target_region,
            aspect_ratio=aspect_ratio.name,
            message=context.message,
            image_source=resolved.source,
            compliance=compliance,
        )
        asset = GeneratedAsset(
            product_id=product.product_id,
            aspect_ratio=aspect_ratio,
            output_path=str(output_path),
            generated_at=datetime.now(UTC),
            metadata=metadata,
            locale=context.locale,
        )
        is_reused = resolved.source == SOURCE_REUSED
        return _UnitOutcome(
            asset=asset,
            generated=0 if is_reused else 1,
            reused=1 if is_reused else 0,
            resized=1 if was_resized else 0,
            compliance_issue=0 if compliance.passed else 1,
            missing_source=1 if resolved.missing_declared_path else 0,
        )

    def _raise_if_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise GenerationCancelledError("Asset generation cancelled")


def run_campaign(config: RunConfig) -> tuple[CampaignBrief, GenerationResult, str]:
    """Load the brief and settings, generate every asset, and write the report files."""
    settings = load_settings(config.settings_path)
    brief = load_and_validate_brief(config.brief_path)

    if config.brand_guidelines_path is not None:
        gate = ComplianceGate(load_brand_guidelines(config.brand_guidelines_path))
    else:
        gate = ComplianceGate(default_brand_guidelines(settings))

    output_root = config.output_root or settings.output_base_path
    orchestrator = CampaignOrchestrator.from_settings(
        settings,
        output_root=output_root,
        asset_root=config.asset_root or config.brief_path.parent,
        gate=gate,
    )
    result = orchestrator.run(brief, config.locale)
    report = render_report(result)

    report_path = output_root / brief.campaign_id / REPORT_FILENAME
    write_text(report, report_path)
    write_json(result.to_dict(), output_root / brief.campaign_id / RESULT_FILENAME)
    logger.info("Report saved to: %s", report_path)
    return brief, result, report
