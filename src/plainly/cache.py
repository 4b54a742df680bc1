"""Per-request session cache of results keyed by processing mode.

Owned by exactly one orchestrator; never shared, never persisted.
"""

from __future__ import annotations

from plainly.core.types import ProcessingMode


class SessionCache:
    """Maps a processing mode to the markdown produced in that mode."""

    def __init__(self) -> None:
        self._by_mode: dict[ProcessingMode, str] = {}

    def get(self, mode: ProcessingMode) -> str | None:
        """Return the cached markdown for `mode`, if present."""
        return self._by_mode.get(mode)

    def set(self, mode: ProcessingMode, markdown: str) -> None:
        self._by_mode[mode] = markdown

    def clear(self) -> None:
        """Drop every entry."""
        self._by_mode.clear()

    def __contains__(self, mode: object) -> bool:
        return mode in self._by_mode

    def __len__(self) -> int:
        return len(self._by_mode)
