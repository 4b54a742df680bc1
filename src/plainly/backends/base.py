"""Capability protocols for explanation backends.

Backends are narrow, provider-neutral surfaces. The gateway selects one by
explicit `ProcessingMode`, never by inspecting concrete types, and converts
whatever they raise into `Failure` values.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LocalCapability(Protocol):
    """On-device model: a single text-in, markdown-out entry point.

    Implementations raise `BackendUnavailableError` when the model is not
    ready and `GenerationFailedError` when it answers with nothing usable.
    """

    async def generate(self, prompt: str) -> str:
        """Return the model's markdown for `prompt`."""
        ...


@runtime_checkable
class CloudCapability(Protocol):
    """Hosted model with one entry point per payload shape.

    Implementations raise `TransportError` carrying the upstream message, or
    `GenerationFailedError` when the response holds no text.
    """

    async def generate_text(self, prompt: str) -> str:
        """Text-only prompt."""
        ...

    async def generate_with_bytes(
        self, prompt: str, data: bytes, mime_type: str
    ) -> str:
        """Prompt plus inline bytes of the declared media type."""
        ...

    async def generate_with_reference(
        self, prompt: str, uri: str, mime_type: str
    ) -> str:
        """Prompt plus a remote reference URI."""
        ...
