from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from creative_generation.exceptions import BriefValidationError, ConfigurationError
from creative_generation.pipeline import RunConfig, run_campaign

DEFAULT_BRIEF_PATHS = (
    Path("examples/campaign-brief.json"),
    Path("examples/campaign-brief.yaml"),
    Path("campaign-brief.json"),
)


def _strip_optional_quotes(value: str) -> str:
    trimmed = value.strip()
    if len(trimmed) >= 2 and ((trimmed[0] == '"' and trimmed[-1] == '"') or (trimmed[0] == "'" and trimmed[-1] == "'")):
        return trimmed[1:-1]
    return trimmed


def _load_env_file(env_path: Path) -> None:
    if not env_path.exists() or not env_path.is_file():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, raw_value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(raw_value)
        os.environ.setdefault(key, value)


def _load_default_env_files() -> None:
    cwd_env = Path.cwd() / ".env"
    project_root_env = Path(__file__).resolve().parents[2] / ".env"

    _load_env_file(project_root_env)
    if cwd_env != project_root_env:
        _load_env_file(cwd_env)


def _find_default_brief() -> Path | None:
    for candidate in DEFAULT_BRIEF_PATHS:
        if candidate.exists():
            return candidate
    return None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="creative-generation",
        description="Generate localized social ad creatives from a campaign brief",
    )
    parser.add_argument("-b", "--brief", default=None, help="Path to campaign brief (.json/.yaml/.yml)")
    parser.add_argument("-o", "--output", default=None, help="Output root folder (defaults to OUTPUT_BASE_PATH)")
    parser.add_argument(
        "-l",
        "--locale",
        default=None,
        help="Generate assets for a single locale (e.g. de-DE). If omitted, every localization is generated.",
    )
    parser.add_argument("--config", default=None, help="Settings file (.yaml). Defaults to config/settings.yaml when present.")
    parser.add_argument(
        "--brand-guidelines",
        default=None,
        help="Brand guidelines file (.yaml/.yml/.json) used when a brief has no brandGuidelines.",
    )
    parser.add_argument("--assets", default=None, help="Root folder for relative asset paths (defaults to the brief folder)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    _load_default_env_files()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    logger = logging.getLogger("creative_generation")

    brief_path = Path(args.brief) if args.brief else _find_default_brief()
    if brief_path is None:
        logger.error("No campaign brief file specified. Use --brief or provide a default file.")
        return 1
    if not args.brief:
        logger.info("Using default brief file: %s", brief_path)

    config = RunConfig(
        brief_path=brief_path,
        output_root=Path(args.output) if args.output else None,
        locale=args.locale,
        settings_path=Path(args.config) if args.config else None,
        brand_guidelines_path=Path(args.brand_guidelines) if args.brand_guidelines else None,
        asset_root=Path(args.assets) if args.assets else None,
    )

    try:
        brief, result, report = run_campaign(config)
    except BriefValidationError as exc:
        logger.error("Validation error:\n%s", exc)
        return 1
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=True)
        return 1

    print(f"Campaign ID:      {brief.campaign_id}")
    print(f"Products:         {len(brief.products)}")
    print(f"Target Region:    {brief.target_region}")
    print(f"Target Market:    {brief.target_market}")
    print(f"Target Audience:  {brief.target_audience}")
    if brief.localizations:
        print(f"Localizations:    {', '.join(brief.localizations)}")
    if args.locale:
        print(f"Selected Locale:  {args.locale}")
    print()
    print(report)

    if result.success:
        logger.info("Asset generation completed successfully!")
        return 0
    logger.warning("Asset generation completed with errors. Check the report for details.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
