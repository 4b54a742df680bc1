"""Construction of history records from a completed explanation."""

from __future__ import annotations

from plainly.constants import TITLE_MAX_CHARS
from plainly.core.types import (
    Code,
    ContentKind,
    Document,
    HistoryRecord,
    ImageBytes,
    Link,
    ProcessingMode,
    Text,
    VideoBytes,
    YouTubeVideo,
)


def input_summary(kind: ContentKind) -> str:
    """Short, human-readable description of what the user submitted."""
    match kind:
        case Text(body=body):
            return body
        case Link(url=url):
            return url
        case YouTubeVideo(found_in=found_in):
            return input_summary(found_in)
        case ImageBytes():
            return "Uploaded Image"
        case VideoBytes():
            return "Uploaded Video"
        case Document(file_name=file_name) | Code(file_name=file_name):
            return file_name
    raise TypeError(f"Unsupported content kind: {type(kind).__name__}")


def record_title(kind: ContentKind) -> str:
    match kind:
        case Text(body=body):
            return body[:TITLE_MAX_CHARS]
        case Link(url=url) | YouTubeVideo(url=url):
            return url
        case ImageBytes():
            return "Image"
        case VideoBytes():
            return "Video Clip"
        case Document(file_name=file_name) | Code(file_name=file_name):
            return file_name
    raise TypeError(f"Unsupported content kind: {type(kind).__name__}")


def build_history_record(
    kind: ContentKind, markdown: str, mode: ProcessingMode
) -> HistoryRecord:
    """Create the durable record for the first success of a request.

    Image requests keep their bytes as the thumbnail; a YouTube reference
    keeps the tag of the payload it was found in.
    """
    return HistoryRecord(
        title=record_title(kind),
        original_input_summary=input_summary(kind),
        result_markdown=markdown,
        used_cloud=mode is ProcessingMode.CLOUD,
        kind=kind.tag,
        thumbnail=bytes(kind.data) if isinstance(kind, ImageBytes) else None,
    )
