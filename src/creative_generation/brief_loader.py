from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import BriefValidationError
from .models.brief import CampaignBrief

logger = logging.getLogger(__name__)

MIN_VALID_EXAMPLE_YAML = """campaignId: demo-campaign
campaignMessage: "Discover the new collection"
targetRegion: "Europe"
targetMarket: "Germany"
targetAudience: "Young professionals"
products:
  - productId: product-1
    name: "Product One"
    assets:
      image: assets/input/product-1.png
      logo: assets/input/logo.png
"""


def _parse_brief_file(brief_path: Path) -> dict[str, Any]:
    suffix = brief_path.suffix.lower()
    content = brief_path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        parsed = yaml.safe_load(content)
    elif suffix == ".json":
        parsed = json.loads(content)
    else:
        raise BriefValidationError(
            "Unsupported brief format. Use .yaml, .yml, or .json files.\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        )

    if not isinstance(parsed, dict):
        raise BriefValidationError(
            "Brief root must be an object/map.\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        )
    return parsed


def _duplicate_product_ids(brief: CampaignBrief) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for product in brief.products:
        if product.product_id in seen and product.product_id not in duplicates:
            duplicates.append(product.product_id)
        seen.add(product.product_id)
    return duplicates


def load_and_validate_brief(brief_path: Path) -> CampaignBrief:
    if not brief_path.exists():
        raise BriefValidationError(f"Brief file not found: {brief_path}")

    logger.info("Parsing campaign brief from: %s", brief_path)
    try:
        parsed = _parse_brief_file(brief_path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BriefValidationError(
            f"Unable to parse brief file: {exc}\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        ) from exc

    try:
        brief = CampaignBrief.model_validate(parsed)
    except ValidationError as exc:
        errors = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item["loc"])
            errors.append(f"- {location}: {item['msg']}")
        raise BriefValidationError(
            "Brief validation failed:\n"
            + "\n".join(errors)
            + "\n\nMinimal valid YAML example:\n"
            + MIN_VALID_EXAMPLE_YAML
        ) from exc

    duplicates = _duplicate_product_ids(brief)
    if duplicates:
        raise BriefValidationError("Duplicate productId values: " + ", ".join(duplicates))

    logger.info("Successfully parsed brief for campaign: %s", brief.campaign_id)
    return brief
