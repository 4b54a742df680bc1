"""On-device backend talking to a local model server over HTTP.

The server is expected to expose an Ollama-compatible API: `GET /api/tags`
answers when the server is up, and `POST /api/generate` with `stream: false`
returns a single JSON object whose `response` field holds the text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from plainly.constants import (
    DEFAULT_LOCAL_BASE_URL,
    DEFAULT_LOCAL_MODEL,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    LOCAL_GENERATE_ENDPOINT,
    LOCAL_PROBE_ENDPOINT,
)
from plainly.core.exceptions import (
    BackendUnavailableError,
    GenerationFailedError,
    TransportError,
)

if TYPE_CHECKING:
    from plainly.config import FrozenConfig

logger = logging.getLogger(__name__)


class HttpLocalBackend:
    """Local capability with a one-time availability probe.

    The probe result is cached on the instance; the process-wide instance is
    built once by the front door, so the probe runs at most once per process.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_LOCAL_BASE_URL,
        model: str = DEFAULT_LOCAL_MODEL,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._request_timeout = request_timeout
        self._probe_timeout = probe_timeout
        self._transport = transport
        self._available: bool | None = None

    @classmethod
    def from_config(cls, config: FrozenConfig) -> HttpLocalBackend:
        return cls(
            base_url=config.local_base_url,
            model=config.local_model,
            request_timeout=config.request_timeout_seconds,
            probe_timeout=config.probe_timeout_seconds,
        )

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, transport=self._transport
        )

    async def is_available(self) -> bool:
        """Probe the server once and remember the outcome."""
        if self._available is None:
            self._available = await self._probe()
            logger.debug(
                "Local model server at %s available: %s",
                self._base_url,
                self._available,
            )
        return self._available

    async def _probe(self) -> bool:
        try:
            async with self._client(self._probe_timeout) as client:
                response = await client.get(LOCAL_PROBE_ENDPOINT)
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def generate(self, prompt: str) -> str:
        if not await self.is_available():
            raise BackendUnavailableError(
                f"No on-device model server at {self._base_url}."
            )

        payload: dict[str, Any] = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
        }
        try:
            async with self._client(self._request_timeout) as client:
                response = await client.post(LOCAL_GENERATE_ENDPOINT, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Local model server returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise GenerationFailedError("Local model returned malformed JSON.") from e

        text = body.get("response") if isinstance(body, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise GenerationFailedError("Local model returned no text.")
        return text
