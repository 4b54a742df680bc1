"""Processing-mode policy and per-kind presentation labels.

Only plain text without a YouTube reference may run on device; every other
kind is fixed to the cloud and never shows a mode picker.
"""

from __future__ import annotations

from plainly.core.types import (
    Code,
    ContentKind,
    Document,
    ImageBytes,
    Link,
    ProcessingMode,
    Text,
    VideoBytes,
    YouTubeVideo,
)

RESTORED_LABEL = "Restored from History"


def default_mode(
    kind: ContentKind, youtube_override: bool = False
) -> ProcessingMode:
    """Return the mode a freshly classified input starts in.

    Args:
        kind: The classified content kind.
        youtube_override: Treat the input as a YouTube reference even if `kind`
            was not reclassified (callers that classify separately).
    """
    if youtube_override or isinstance(kind, YouTubeVideo):
        return ProcessingMode.CLOUD
    if isinstance(kind, Text):
        return ProcessingMode.ON_DEVICE
    return ProcessingMode.CLOUD


def is_mode_flexible(kind: ContentKind) -> bool:
    """True only for inputs that can run in either mode."""
    return isinstance(kind, Text)


def shows_mode_picker(kind: ContentKind | None) -> bool:
    return kind is not None and is_mode_flexible(kind)


def effective_mode(kind: ContentKind, requested: ProcessingMode) -> ProcessingMode:
    """Honor `requested` for flexible kinds; fixed kinds keep their default."""
    if is_mode_flexible(kind):
        return requested
    return default_mode(kind)


def loading_label(kind: ContentKind, mode: ProcessingMode) -> str:
    """Label shown while a request for `kind` is in flight in `mode`."""
    if isinstance(kind, YouTubeVideo):
        return "Watching Video..."
    if isinstance(kind, Link):
        return "Reading Link..."
    if isinstance(kind, VideoBytes):
        return "Analyzing Video..."
    if isinstance(kind, ImageBytes):
        return "Analyzing Image..."
    if isinstance(kind, Document):
        return "Reading Document..."
    if isinstance(kind, Code):
        return "Reviewing Code..."
    if mode is ProcessingMode.ON_DEVICE:
        return "Processing on device..."
    return "Processing..."
