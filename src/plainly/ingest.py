"""Input capture: turn what the user typed or shared into one content kind.

A single share action can advertise several compatible representations at
once (a PDF is also a file URL, a code file is also plain text). The first
usable representation in `REPRESENTATION_PRECEDENCE` wins.
"""

from __future__ import annotations

from collections.abc import Iterable
import dataclasses
from enum import Enum
import logging
import mimetypes
from pathlib import Path
from urllib.parse import urlsplit

from plainly.core.types import (
    Code,
    ContentKind,
    Document,
    ImageBytes,
    Link,
    Text,
    VideoBytes,
)

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
PLAIN_TEXT_MEDIA_TYPE = "text/plain"

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".c": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".css": "css",
    ".go": "go",
    ".h": "c",
    ".hpp": "cpp",
    ".html": "html",
    ".java": "java",
    ".js": "javascript",
    ".jsx": "javascript",
    ".kt": "kotlin",
    ".m": "objective-c",
    ".php": "php",
    ".py": "python",
    ".rb": "ruby",
    ".rs": "rust",
    ".scala": "scala",
    ".sh": "shell",
    ".sql": "sql",
    ".swift": "swift",
    ".ts": "typescript",
    ".tsx": "typescript",
}

PLAIN_TEXT_EXTENSIONS = frozenset({".txt", ".md", ".markdown", ".rst", ".log"})


class RepresentationType(str, Enum):
    """Forms a shared item can be offered in."""

    PDF = "pdf"
    SOURCE_CODE = "source_code"
    MOVIE = "movie"
    IMAGE = "image"
    URL = "url"
    PLAIN_TEXT_FILE = "plain_text_file"
    TEXT = "text"


REPRESENTATION_PRECEDENCE: tuple[RepresentationType, ...] = (
    RepresentationType.PDF,
    RepresentationType.SOURCE_CODE,
    RepresentationType.MOVIE,
    RepresentationType.IMAGE,
    RepresentationType.URL,
    RepresentationType.PLAIN_TEXT_FILE,
    RepresentationType.TEXT,
)


@dataclasses.dataclass(frozen=True, slots=True)
class SharedRepresentation:
    """One representation advertised by a share action."""

    type: RepresentationType
    payload: bytes | str
    file_name: str | None = None
    language: str | None = None


def language_for(file_name: str) -> str:
    """Language name derived from a file extension, or "text" when unknown."""
    return LANGUAGE_BY_EXTENSION.get(Path(file_name).suffix.lower(), "text")


def is_web_url(text: str) -> bool:
    """True for an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)


def from_user_text(text: str) -> ContentKind | None:
    """Content kind for typed input; None when nothing but whitespace."""
    trimmed = text.strip()
    if not trimmed:
        return None
    if is_web_url(trimmed):
        return Link(url=trimmed)
    return Text(body=trimmed)


def _as_bytes(payload: bytes | str) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)


def _as_text(payload: bytes | str) -> str:
    if isinstance(payload, str):
        return payload
    return bytes(payload).decode("utf-8", errors="replace")


def _convert(rep: SharedRepresentation) -> ContentKind | None:
    match rep.type:
        case RepresentationType.PDF:
            return Document(
                data=_as_bytes(rep.payload),
                media_type=PDF_MEDIA_TYPE,
                file_name=rep.file_name or "Document.pdf",
            )
        case RepresentationType.SOURCE_CODE:
            file_name = rep.file_name or "Untitled"
            return Code(
                source=_as_text(rep.payload),
                file_name=file_name,
                language=rep.language or language_for(file_name),
            )
        case RepresentationType.MOVIE:
            return VideoBytes(data=_as_bytes(rep.payload))
        case RepresentationType.IMAGE:
            return ImageBytes(data=_as_bytes(rep.payload))
        case RepresentationType.URL:
            url = _as_text(rep.payload).strip()
            return Link(url=url) if url else None
        case RepresentationType.PLAIN_TEXT_FILE:
            return Document(
                data=_as_bytes(rep.payload),
                media_type=PLAIN_TEXT_MEDIA_TYPE,
                file_name=rep.file_name or "Untitled.txt",
            )
        case RepresentationType.TEXT:
            body = _as_text(rep.payload)
            return Text(body=body) if body.strip() else None
    return None


def resolve_shared_item(
    representations: Iterable[SharedRepresentation],
) -> ContentKind | None:
    """Pick the single content kind a share action stands for.

    Returns None when no representation yields usable content.
    """
    offered = list(representations)
    for rep_type in REPRESENTATION_PRECEDENCE:
        for rep in offered:
            if rep.type is not rep_type:
                continue
            kind = _convert(rep)
            if kind is not None:
                logger.debug("Shared item resolved as %s", rep_type.value)
                return kind
    return None


def representation_for_path(path: Path) -> SharedRepresentation:
    """Describe a local file the way a share action would offer it."""
    suffix = path.suffix.lower()
    data = path.read_bytes()
    if suffix == ".pdf":
        rep_type = RepresentationType.PDF
    elif suffix in LANGUAGE_BY_EXTENSION:
        rep_type = RepresentationType.SOURCE_CODE
    elif suffix in PLAIN_TEXT_EXTENSIONS:
        rep_type = RepresentationType.PLAIN_TEXT_FILE
    else:
        guessed, _ = mimetypes.guess_type(path.name)
        if guessed and guessed.startswith("video/"):
            rep_type = RepresentationType.MOVIE
        elif guessed and guessed.startswith("image/"):
            rep_type = RepresentationType.IMAGE
        else:
            rep_type = RepresentationType.PLAIN_TEXT_FILE
    return SharedRepresentation(type=rep_type, payload=data, file_name=path.name)
