from __future__ import annotations

from creative_generation.models.results import ComplianceResult, GenerationResult

RULE = "=" * 80


def compliance_status(compliance: ComplianceResult) -> str:
    if compliance.passed:
        return "PASSED"
    return "FAILED" if compliance.issues else "WARNING"


def render_report(result: GenerationResult) -> str:
    """Render the plain-text generation report.

    Output depends only on *result*, so rendering the same result twice yields
    identical text.
    """
    summary = result.summary
    lines = [
        RULE,
        "CREATIVE GENERATION PIPELINE - GENERATION REPORT",
        RULE,
        "",
        "SUMMARY:",
        f"  Total Assets Generated: {summary.total_assets}",
        f"  New Images Generated:   {summary.assets_generated}",
        f"  Existing Images Reused: {summary.assets_reused}",
        f"  Images Resized:         {summary.assets_resized}",
        f"  Compliance Issues:      {summary.compliance_issues}",
        f"  Missing Source Assets:  {summary.missing_source_assets}",
        f"  Duration:               {summary.duration_ms / 1000:.2f}s",
        f"  Status:                 {'SUCCESS' if result.success else 'PARTIAL SUCCESS'}",
        "",
    ]

    if result.assets:
        lines.append("GENERATED ASSETS:")
        for asset in result.assets:
            metadata = asset.metadata
            lines.append(f"  {asset.output_path}")
            lines.append(f"    Product: {metadata.product}")
            lines.append(f"    Aspect Ratio: {metadata.aspect_ratio} ({', '.join(asset.aspect_ratio.platforms)})")
            lines.append(f"    Method: {metadata.generation_method} ({metadata.image_source})")
            lines.append(f"    Compliance: {compliance_status(metadata.compliance)}")
            if metadata.compliance.issues:
                lines.append(f"    Issues: {'; '.join(metadata.compliance.issues)}")
            if metadata.compliance.warnings:
                lines.append(f"    Warnings: {'; '.join(metadata.compliance.warnings)}")
            lines.append("")

    if result.errors:
        lines.append("ERRORS:")
        lines.extend(f"  - {error}" for error in result.errors)
        lines.append("")

    lines.append(RULE)
    return "\n".join(lines) + "\n"
