from pathlib import Path

import pytest

from creative_generation.brief_loader import BriefValidationError, load_and_validate_brief


def test_load_valid_yaml_brief(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text(
        """
campaignId: abc
campaignMessage: Shop now
targetRegion: US
targetMarket: United States
targetAudience: gamers
products:
  - productId: p1
    name: One
  - productId: p2
    name: Two
    assets:
      heroImage: input/two.png
localizations:
  de-DE:
    message: Jetzt kaufen
    prohibitedWords: [gratis]
""".strip(),
        encoding="utf-8",
    )
    brief = load_and_validate_brief(brief_file)
    assert brief.campaign_id == "abc"
    assert len(brief.products) == 2
    assert brief.products[1].assets.source_image_path == "input/two.png"
    assert brief.localizations["de-DE"].prohibited_words == ["gratis"]
    assert brief.brand_guidelines is None


def test_load_valid_json_brief(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.json"
    brief_file.write_text(
        '{"campaignId": "j1", "campaignMessage": "Buy", "targetRegion": "EU", "targetMarket": "DE",'
        ' "targetAudience": "All", "products": [{"productId": "p1", "name": "One"}],'
        ' "brandGuidelines": {"primaryColors": ["#FF0000"], "logoRequired": false}}',
        encoding="utf-8",
    )
    brief = load_and_validate_brief(brief_file)
    assert brief.brand_guidelines is not None
    assert brief.brand_guidelines.logo_required is False
    assert brief.brand_guidelines.prohibited_words is None


def test_invalid_brief_includes_example(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text("campaignId: only", encoding="utf-8")
    with pytest.raises(BriefValidationError) as exc:
        load_and_validate_brief(brief_file)
    assert "Minimal valid YAML example" in str(exc.value)
    assert "products" in str(exc.value)


def test_empty_product_list_is_rejected(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text(
        "campaignId: c\ncampaignMessage: m\ntargetRegion: r\ntargetMarket: k\ntargetAudience: a\nproducts: []\n",
        encoding="utf-8",
    )
    with pytest.raises(BriefValidationError):
        load_and_validate_brief(brief_file)


def test_duplicate_product_ids_are_rejected(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text(
        """
campaignId: c
campaignMessage: m
targetRegion: r
targetMarket: k
targetAudience: a
products:
  - productId: same
    name: One
  - productId: same
    name: Two
""".strip(),
        encoding="utf-8",
    )
    with pytest.raises(BriefValidationError, match="Duplicate productId values: same"):
        load_and_validate_brief(brief_file)


def test_missing_and_unsupported_files(tmp_path: Path) -> None:
    with pytest.raises(BriefValidationError, match="not found"):
        load_and_validate_brief(tmp_path / "missing.yaml")

    text_file = tmp_path / "brief.txt"
    text_file.write_text("campaignId: c", encoding="utf-8")
    with pytest.raises(BriefValidationError, match="Unsupported brief format"):
        load_and_validate_brief(text_file)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(BriefValidationError, match="Brief root must be an object/map"):
        load_and_validate_brief(brief_file)


def test_bundled_example_brief_is_valid() -> None:
    example = Path(__file__).resolve().parents[1] / "examples" / "campaign-brief.yaml"
    brief = load_and_validate_brief(example)
    assert brief.campaign_id == "summer-menu-2025"
    assert set(brief.localizations) == {"en-US", "de-DE"}
