"""Explanation backend gateway.

Routes one `(kind, mode)` pair to exactly one backend capability and returns
the outcome as data. Routing, in priority order:

1. A YouTube reference always goes to the cloud reference capability.
2. Text on device goes to the local capability; any local failure degrades
   to a deterministic, clearly labeled placeholder instead of an error.
3. Everything else goes to the cloud capability matching its payload shape.

The gateway never retries, never caches and never persists. Every failure
is returned as `Failure(ExplainError)`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import magic

from plainly.constants import (
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_REQUEST_TIMEOUT,
    PLACEHOLDER_EXCERPT_CHARS,
    VIDEO_MIME_TYPE,
    YOUTUBE_MIME_TYPE,
)
from plainly.core.exceptions import (
    EmptyInputError,
    ExplainError,
    ExplainTimeoutError,
    TransportError,
)
from plainly.core.types import (
    Code,
    ContentKind,
    Document,
    Failure,
    ImageBytes,
    Link,
    ProcessingMode,
    Result,
    Success,
    Text,
    VideoBytes,
    YouTubeVideo,
)
from plainly.prompts import (
    code_prompt,
    document_prompt,
    image_prompt,
    link_prompt,
    text_prompt,
    video_prompt,
)
from plainly.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from plainly.backends.base import CloudCapability, LocalCapability
    from plainly.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)

# --- Telemetry scopes ---
T_DISPATCH = "gateway.dispatch"
T_LOCAL = "gateway.local"
T_LOCAL_FALLBACK = "gateway.local_fallback"


def sniff_image_mime_type(data: bytes) -> str:
    """Content-based image media type, defaulting to JPEG for anything else."""
    try:
        mime_type = magic.from_buffer(bytes(data), mime=True)
    except magic.MagicException as e:
        logger.debug("MIME detection failed: %s", e)
        return DEFAULT_IMAGE_MIME_TYPE
    if mime_type and mime_type.startswith("image/"):
        return mime_type
    return DEFAULT_IMAGE_MIME_TYPE


def offline_placeholder(text: str) -> str:
    """Stand-in markdown returned when the on-device model cannot answer."""
    excerpt = text[:PLACEHOLDER_EXCERPT_CHARS]
    return (
        "# TL;DR\n"
        "Here is a simple summary of the text you provided.\n"
        "\n"
        "# Plain English\n"
        f'- The text says: "{excerpt}..."\n'
        "- A full explanation needs the on-device model, which is not ready yet.\n"
        "- This is a *mock* response generated because the on-device model "
        "was unavailable.\n"
        "\n"
        "# What This Means for You\n"
        "- Switch to Cloud for a complete explanation.\n"
        "- Restart Plainly once the local model is running to use On-Device.\n"
    )


class ExplanationGateway:
    """Single entry point from the orchestrator to the backends."""

    def __init__(
        self,
        *,
        local: LocalCapability,
        cloud: CloudCapability,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._local = local
        self._cloud = cloud
        self._timeout = timeout
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    async def dispatch(
        self, kind: ContentKind, mode: ProcessingMode
    ) -> Result[str, ExplainError]:
        """Produce markdown for `kind` in `mode`, or a `Failure` with the cause."""
        with self._telemetry(T_DISPATCH, kind=kind.tag.value, mode=mode.value):
            try:
                if isinstance(kind, YouTubeVideo):
                    return Success(await self._cloud_call("reference", kind))
                if isinstance(kind, Text) and not kind.body.strip():
                    raise EmptyInputError()
                if mode is ProcessingMode.ON_DEVICE and isinstance(kind, Text):
                    return Success(await self._local_call(kind))
                return Success(await self._cloud_call(kind.tag.value, kind))
            except ExplainError as e:
                logger.info("Dispatch failed (%s): %s", e.kind, e.cause)
                return Failure(e)
            except Exception as e:  # noqa: BLE001
                logger.error("Unexpected backend error", exc_info=True)
                return Failure(TransportError(str(e) or type(e).__name__))

    # --- Routes ---

    async def _local_call(self, kind: Text) -> str:
        prompt = text_prompt(kind.body)
        logger.info("Dispatching text to the on-device model")
        logger.debug("Local prompt is %d characters", len(prompt))
        try:
            with self._telemetry(T_LOCAL):
                return await self._bounded(self._local.generate(prompt))
        except Exception as e:
            cause = e.cause if isinstance(e, ExplainError) else str(e)
            logger.warning("On-device model unusable (%s); using placeholder", cause)
            self._telemetry.count(T_LOCAL_FALLBACK)
            return offline_placeholder(kind.body)

    async def _cloud_call(self, capability: str, kind: ContentKind) -> str:
        logger.info("Dispatching %s to the cloud model", capability)
        with self._telemetry(f"gateway.cloud.{capability}"):
            return await self._bounded(self._cloud_request(kind))

    def _cloud_request(self, kind: ContentKind) -> Awaitable[str]:
        cloud = self._cloud
        match kind:
            case YouTubeVideo(url=url):
                return cloud.generate_with_reference(
                    video_prompt(), url, YOUTUBE_MIME_TYPE
                )
            case Text(body=body):
                return cloud.generate_text(text_prompt(body))
            case Link(url=url):
                return cloud.generate_text(link_prompt(url))
            case ImageBytes(data=data):
                return cloud.generate_with_bytes(
                    image_prompt(), data, sniff_image_mime_type(data)
                )
            case VideoBytes(data=data):
                return cloud.generate_with_bytes(video_prompt(), data, VIDEO_MIME_TYPE)
            case Document(data=data, media_type=media_type, file_name=file_name):
                return cloud.generate_with_bytes(
                    document_prompt(file_name), data, media_type
                )
            case Code(source=source, file_name=file_name, language=language):
                return cloud.generate_text(code_prompt(file_name, language, source))
        raise TypeError(f"Unsupported content kind: {type(kind).__name__}")

    async def _bounded(self, call: Awaitable[str]) -> str:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except TimeoutError as e:
            raise ExplainTimeoutError(
                f"The request timed out after {self._timeout:g} seconds."
            ) from e
