"""Deterministic backends used when real APIs are disabled (no network)."""

from __future__ import annotations

import hashlib


def _fingerprint(*chunks: bytes | str) -> str:
    digest = hashlib.sha256()
    for chunk in chunks:
        digest.update(chunk.encode() if isinstance(chunk, str) else chunk)
    return digest.hexdigest()[:12]


def _first_line(prompt: str) -> str:
    return prompt.strip().splitlines()[0] if prompt.strip() else ""


class MockLocalBackend:
    """Echoes the prompt's first line; always available."""

    async def generate(self, prompt: str) -> str:
        return (
            "### TL;DR\n"
            f"echo (on-device): {_first_line(prompt)}\n\n"
            f"_mock {_fingerprint(prompt)}_"
        )


class MockCloudBackend:
    """Echoes each payload shape with a stable fingerprint."""

    async def generate_text(self, prompt: str) -> str:
        return (
            "### TL;DR\n"
            f"echo (cloud): {_first_line(prompt)}\n\n"
            f"_mock {_fingerprint(prompt)}_"
        )

    async def generate_with_bytes(
        self, prompt: str, data: bytes, mime_type: str
    ) -> str:
        return (
            "### TL;DR\n"
            f"echo (cloud, {mime_type}, {len(data)} bytes): {_first_line(prompt)}\n\n"
            f"_mock {_fingerprint(prompt, bytes(data))}_"
        )

    async def generate_with_reference(
        self, prompt: str, uri: str, mime_type: str
    ) -> str:
        return (
            "### TL;DR\n"
            f"echo (cloud, {mime_type}): {uri}\n\n"
            f"_mock {_fingerprint(prompt, uri)}_"
        )
