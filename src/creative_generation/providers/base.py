from __future__ import annotations

from abc import ABC, abstractmethod


class ImageProvider(ABC):
    @abstractmethod
    def generate(self, prompt: str, size: tuple[int, int]) -> bytes:
        """Return encoded image bytes for *prompt* at *size* (width, height)."""
        raise NotImplementedError
