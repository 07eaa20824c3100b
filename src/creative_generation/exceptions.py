"""
Domain-specific exceptions for the creative generation pipeline.

Catching these at the CLI entry point allows clean exit codes and targeted error
messages.  All exceptions inherit from ``CreativeGenerationError`` so callers can
also use a single broad catch when needed.
"""

from __future__ import annotations


class CreativeGenerationError(Exception):
    """Base exception for all pipeline errors."""


class BriefValidationError(CreativeGenerationError, ValueError):
    """Raised when a campaign brief is missing or structurally invalid."""


class ConfigurationError(CreativeGenerationError):
    """Raised when required configuration (settings files, guideline files) is invalid."""


class GenerationBackendError(CreativeGenerationError):
    """Raised when a single call to the image generation backend fails.

    Attributes
    ----------
    status_code:
        HTTP status returned by the backend, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ImageSourceError(CreativeGenerationError):
    """Raised when no source image could be produced for an asset."""


class GenerationCancelledError(CreativeGenerationError):
    """Raised when a caller-supplied cancel signal is observed mid-run."""
