from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError as JsonSchemaValidationError
from jsonschema import validate
from pydantic import ValidationError

from creative_generation.exceptions import ConfigurationError
from creative_generation.models.brief import BrandGuidelines
from creative_generation.settings import Settings


def default_brand_guidelines(settings: Settings) -> BrandGuidelines:
    """Guideline set applied when a brief carries no brand guidelines of its own."""
    return BrandGuidelines(
        primary_colors=list(settings.brand_colors),
        logo_required=settings.brand_logo_required,
        prohibited_words=list(settings.prohibited_words),
    )


def _load_json_or_yaml(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        parsed = yaml.safe_load(content)
    elif suffix == ".json":
        parsed = json.loads(content)
    else:
        raise ConfigurationError(f"Unsupported brand guidelines format: {path}")

    if not isinstance(parsed, dict):
        raise ConfigurationError("Brand guidelines must be a top-level object/map")
    return parsed


def _default_schema_path() -> Path:
    return Path(__file__).resolve().parents[3] / "schemas" / "brand_guidelines.schema.json"


def load_brand_guidelines(path: Path) -> BrandGuidelines:
    if not path.exists():
        raise ConfigurationError(f"Brand guidelines file not found: {path}")

    try:
        data = _load_json_or_yaml(path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to parse brand guidelines file: {exc}") from exc

    schema_path = _default_schema_path()
    if schema_path.exists():
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            validate(instance=data, schema=schema)
        except JsonSchemaValidationError as exc:
            raise ConfigurationError(f"Brand guidelines schema validation failed: {exc.message}") from exc

    try:
        return BrandGuidelines.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid brand guidelines: {exc}") from exc
