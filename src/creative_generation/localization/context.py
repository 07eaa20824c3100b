from __future__ import annotations

from dataclasses import dataclass

from creative_generation.models.brief import BrandGuidelines, CampaignBrief, with_prohibited_words


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Campaign-level values in effect for one generation pass."""

    locale: str | None
    campaign_id: str
    message: str
    guidelines: BrandGuidelines | None
    cultural_notes: str | None = None


def resolve_locale_context(
    brief: CampaignBrief,
    locale: str | None,
    default_guidelines: BrandGuidelines | None = None,
) -> LocaleContext:
    config = brief.localizations.get(locale) if locale else None

    campaign_id = brief.campaign_id
    if config is not None:
        campaign_id = f"{brief.campaign_id}-{locale.lower()}"

    message = (config.message if config is not None else None) or brief.campaign_message or ""

    guidelines = brief.brand_guidelines
    if config is not None and config.prohibited_words is not None:
        base = guidelines or default_guidelines or BrandGuidelines()
        guidelines = with_prohibited_words(base, config.prohibited_words)

    return LocaleContext(
        locale=locale,
        campaign_id=campaign_id,
        message=message,
        guidelines=guidelines,
        cultural_notes=config.cultural_notes if config is not None else None,
    )
