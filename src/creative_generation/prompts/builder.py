from __future__ import annotations

from creative_generation.models.aspect_ratio import AspectRatio

FALLBACK_DESCRIPTION = "High-quality product"


def build_generation_prompt(
    product_name: str,
    product_description: str | None,
    target_audience: str,
    target_region: str,
    cultural_notes: str | None = None,
) -> str:
    description = product_description.strip().rstrip(".") if product_description else ""
    description = description or FALLBACK_DESCRIPTION

    parts = [
        f"Professional product photography for {product_name}.",
        f"{description}.",
        f"Target audience: {target_audience} in {target_region}.",
    ]
    if cultural_notes and cultural_notes.strip():
        parts.append(f"Cultural context: {cultural_notes.strip().rstrip('.')}.")

    parts.append("High quality, commercial advertising style.")
    parts.append("Clean background, excellent lighting, sharp focus.")
    parts.append("Photorealistic, 8K resolution.")
    return " ".join(parts)


def build_aspect_ratio_hint(aspect_ratio: AspectRatio) -> str:
    return (
        f"Optimized composition for {aspect_ratio.name} aspect ratio "
        f"({aspect_ratio.width} x {aspect_ratio.height} pixels)."
    )


def build_ratio_prompt(base_prompt: str, aspect_ratio: AspectRatio) -> str:
    return f"{base_prompt} {build_aspect_ratio_hint(aspect_ratio)}"
