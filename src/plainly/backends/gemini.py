"""Hosted-model backend backed by the Google GenAI SDK.

Builds `contents` for each payload shape, awaits the async
client, and maps SDK failures onto the explanation error taxonomy. The
upstream message is carried verbatim so the user sees what the service said.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types

from plainly.core.exceptions import (
    ExplainError,
    GenerationFailedError,
    TransportError,
)

if TYPE_CHECKING:
    from plainly.config import FrozenConfig

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_CAUSE = "The model returned an empty response."


class GeminiCloudBackend:
    """Cloud capability over `client.aio.models.generate_content`.

    The client is injected so tests can pass any object exposing the same
    async surface.
    """

    def __init__(
        self,
        client: Any,
        *,
        model: str,
        youtube_text_fallback: bool = True,
    ) -> None:
        self._client = client
        self._model = model
        self._youtube_text_fallback = youtube_text_fallback

    @classmethod
    def from_config(cls, config: FrozenConfig) -> GeminiCloudBackend:
        """Create a backend with a real SDK client from frozen configuration."""
        if not config.api_key:
            raise TransportError("No API key configured for the cloud model.")
        return cls(
            genai.Client(api_key=config.api_key),
            model=config.cloud_model,
            youtube_text_fallback=config.youtube_text_fallback,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate_text(self, prompt: str) -> str:
        return await self._generate([prompt], capability="text")

    async def generate_with_bytes(
        self, prompt: str, data: bytes, mime_type: str
    ) -> str:
        part = types.Part.from_bytes(data=bytes(data), mime_type=mime_type)
        return await self._generate([prompt, part], capability="bytes")

    async def generate_with_reference(
        self, prompt: str, uri: str, mime_type: str
    ) -> str:
        """Send `uri` as a file reference part.

        When the service rejects the reference and the text fallback is
        enabled, the URL is retried once inside a plain text prompt.
        """
        part = types.Part(file_data=types.FileData(file_uri=uri, mime_type=mime_type))
        try:
            return await self._generate([prompt, part], capability="reference")
        except TransportError as e:
            if not self._youtube_text_fallback:
                raise
            logger.warning(
                "Reference request rejected (%s); retrying as a text prompt", e.cause
            )
        return await self.generate_text(f"{prompt}\n\nVideo URL: {uri}")

    async def _generate(self, contents: list[Any], *, capability: str) -> str:
        logger.debug(
            "Calling %s (%s capability, %d content parts)",
            self._model,
            capability,
            len(contents),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=contents,
            )
        except ExplainError:
            raise
        except Exception as e:
            raise TransportError(str(e) or type(e).__name__) from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise GenerationFailedError(EMPTY_RESPONSE_CAUSE)
        return str(text)
