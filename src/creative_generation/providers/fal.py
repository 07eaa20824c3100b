from __future__ import annotations

import logging
from typing import Any

import requests
from jsonschema import ValidationError as JsonSchemaValidationError
from jsonschema import validate

from creative_generation.exceptions import GenerationBackendError

from .base import ImageProvider

logger = logging.getLogger(__name__)

# Only the field the pipeline depends on is required; the backend returns more.
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["images"],
    "properties": {
        "images": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["url"],
                "properties": {"url": {"type": "string", "minLength": 1}},
            },
        }
    },
}


def build_request_payload(prompt: str, size: tuple[int, int]) -> dict[str, Any]:
    width, height = size
    return {
        "prompt": prompt,
        "image_size": {"width": width, "height": height},
        "num_inference_steps": 28,
        "guidance_scale": 3.5,
        "num_images": 1,
        "enable_safety_checker": True,
    }


class FalImageProvider(ImageProvider):
    """Text-to-image over the fal.ai synchronous HTTP endpoint.

    One call to :meth:`generate` is one attempt; retrying is left to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        endpoint: str = "https://fal.run",
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("fal.ai provider requires an API key")
        self.model = model
        self.url = f"{endpoint.rstrip('/')}/{model}"
        self.timeout = timeout
        self._api_key = api_key
        self._session = session or requests.Session()

    def _image_url(self, body: Any) -> str:
        try:
            validate(instance=body, schema=RESPONSE_SCHEMA)
        except JsonSchemaValidationError as exc:
            raise GenerationBackendError(f"No image URL in response: {exc.message}") from exc
        return body["images"][0]["url"]

    def _download(self, image_url: str) -> bytes:
        try:
            response = self._session.get(image_url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GenerationBackendError(f"Failed to download image: {exc}") from exc
        if not response.ok:
            raise GenerationBackendError(
                f"Failed to download image: {response.status_code}", status_code=response.status_code
            )
        return response.content

    def generate(self, prompt: str, size: tuple[int, int]) -> bytes:
        headers = {"Authorization": f"Key {self._api_key}", "Content-Type": "application/json"}
        try:
            response = self._session.post(
                self.url,
                json=build_request_payload(prompt, size),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GenerationBackendError(f"API call to '{self.model}' failed: {exc}") from exc

        if not response.ok:
            raise GenerationBackendError(
                f"API call failed: {response.status_code}", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise GenerationBackendError(f"Backend returned invalid JSON: {exc}") from exc

        image_url = self._image_url(body)
        logger.info("Image generated successfully: %s", image_url)
        return self._download(image_url)
