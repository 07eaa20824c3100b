from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AspectRatio:
    name: str
    width: int
    height: int
    platforms: tuple[str, ...]

    @property
    def file_key(self) -> str:
        return self.name.replace(":", "x")

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


# Closed, ordered catalog: every product is rendered in all three layouts.
STANDARD_RATIOS: tuple[AspectRatio, ...] = (
    AspectRatio("1:1", 1080, 1080, ("Instagram Post", "Facebook Post")),
    AspectRatio("9:16", 1080, 1920, ("Instagram Story", "TikTok", "Reels")),
    AspectRatio("16:9", 1920, 1080, ("YouTube", "Facebook Video", "LinkedIn")),
)
