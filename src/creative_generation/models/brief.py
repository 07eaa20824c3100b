from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _BriefModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BrandGuidelines(_BriefModel):
    primary_colors: list[str] = Field(default_factory=list, alias="primaryColors")
    secondary_colors: list[str] = Field(default_factory=list, alias="secondaryColors")
    font_family: str | None = Field(default=None, alias="fontFamily")
    logo_required: bool = Field(default=True, alias="logoRequired")
    prohibited_words: list[str] | None = Field(default=None, alias="prohibitedWords")


def with_prohibited_words(guidelines: BrandGuidelines, words: list[str]) -> BrandGuidelines:
    """Return a copy of *guidelines* whose prohibited-word list is replaced by *words*."""
    return guidelines.model_copy(update={"prohibited_words": list(words)})


class ProductAssets(_BriefModel):
    image: str | None = None
    hero_image: str | None = Field(default=None, alias="heroImage")
    logo: str | None = None

    @property
    def source_image_path(self) -> str | None:
        return self.image or self.hero_image


class ProductLocalization(_BriefModel):
    name: str | None = None
    description: str | None = None


class Product(_BriefModel):
    product_id: str = Field(min_length=1, alias="productId")
    name: str = Field(min_length=1)
    description: str | None = None
    category: str | None = None
    assets: ProductAssets | None = None
    localizations: dict[str, ProductLocalization] = Field(default_factory=dict)

    def localized_name(self, locale: str | None) -> str:
        override = self.localizations.get(locale) if locale else None
        if override is not None and override.name is not None:
            return override.name
        return self.name

    def localized_description(self, locale: str | None) -> str | None:
        override = self.localizations.get(locale) if locale else None
        if override is not None and override.description is not None:
            return override.description
        return self.description


class LocalizationConfig(_BriefModel):
    language: str | None = None
    message: str | None = None
    cultural_notes: str | None = Field(default=None, alias="culturalNotes")
    prohibited_words: list[str] | None = Field(default=None, alias="prohibitedWords")


class CampaignBrief(_BriefModel):
    campaign_id: str = Field(min_length=1, alias="campaignId")
    products: list[Product] = Field(min_length=1)
    target_region: str = Field(min_length=1, alias="targetRegion")
    target_market: str = Field(min_length=1, alias="targetMarket")
    target_audience: str = Field(min_length=1, alias="targetAudience")
    campaign_message: str = Field(min_length=1, alias="campaignMessage")
    brand_guidelines: BrandGuidelines | None = Field(default=None, alias="brandGuidelines")
    localizations: dict[str, LocalizationConfig] = Field(default_factory=dict)
