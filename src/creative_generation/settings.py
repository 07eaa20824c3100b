"""Runtime settings for the generation pipeline.

Each key is looked up in the environment first, then in the YAML settings
file (``config/settings.yaml`` by default), then falls back to the built-in
default.  The resulting :class:`Settings` value is passed explicitly to the
components that need it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from creative_generation.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PROHIBITED_WORDS = ["guaranteed", "free", "miracle", "cure", "instant"]
DEFAULT_BRAND_COLORS = ["#000000", "#FFFFFF"]

# settings field -> environment variable
_ENV_KEYS: dict[str, str] = {
    "fal_key": "FAL_KEY",
    "image_model": "DEFAULT_IMAGE_MODEL",
    "endpoint": "FAL_ENDPOINT",
    "request_timeout_ms": "IMAGE_GENERATION_TIMEOUT",
    "max_retries": "MAX_RETRIES",
    "output_base_path": "OUTPUT_BASE_PATH",
    "brand_colors": "BRAND_COLORS",
    "brand_logo_required": "BRAND_LOGO_REQUIRED",
    "prohibited_words": "PROHIBITED_WORDS",
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    fal_key: str = ""
    image_model: str = "fal-ai/imagen4/preview"
    endpoint: str = "https://fal.run"
    request_timeout_ms: int = Field(default=60000, gt=0)
    max_retries: int = Field(default=3, ge=1)
    output_base_path: Path = Path("assets/output")
    brand_colors: list[str] = Field(default_factory=lambda: list(DEFAULT_BRAND_COLORS))
    brand_logo_required: bool = True
    prohibited_words: list[str] = Field(default_factory=lambda: list(DEFAULT_PROHIBITED_WORDS))

    @property
    def has_credential(self) -> bool:
        return bool(self.fal_key)

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0


def _default_settings_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "settings.yaml"


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Unable to parse settings file {path}: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigurationError("Settings file must be a top-level object/map")
    return parsed


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _parse_int(key: str, value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid integer value for %s: %r, using default: %s", key, value, default)
        return default


def load_settings(path: Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
    environ = os.environ if env is None else env
    settings_path = path or _default_settings_path()

    file_values: dict[str, Any] = {}
    if path is not None and not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")
    if settings_path.exists():
        file_values = _read_settings_file(settings_path)
        logger.info("Loaded settings from %s", settings_path)

    defaults = Settings()
    raw: dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        env_value = environ.get(env_key)
        if env_value:
            raw[field_name] = env_value
        elif field_name in file_values and file_values[field_name] is not None:
            raw[field_name] = file_values[field_name]

    values: dict[str, Any] = {}
    for field_name, value in raw.items():
        if field_name in {"request_timeout_ms", "max_retries"}:
            default = getattr(defaults, field_name)
            parsed = _parse_int(_ENV_KEYS[field_name], value, default)
            values[field_name] = parsed if parsed > 0 else default
        elif field_name in {"brand_colors", "prohibited_words"}:
            values[field_name] = _split_csv(value) if isinstance(value, str) else [str(item) for item in value]
        elif field_name == "brand_logo_required":
            values[field_name] = _parse_bool(value)
        elif field_name == "output_base_path":
            values[field_name] = Path(value)
        else:
            values[field_name] = str(value)

    return Settings(**values)
