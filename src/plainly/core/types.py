"""Core data types that flow through the explanation core.

This module defines the immutable values that describe a single explanation:
the content being explained, the mode it is processed in, the request pairing
the two, the produced result, the durable history record, and the explicit
state of an orchestrator. Every value is frozen; a request never mutates its
own payload.
"""

from __future__ import annotations

import dataclasses
import datetime
from enum import Enum
import typing
import uuid

# --- Minimal guard helpers (clarity > boilerplate) ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _require_str(value: object, field_name: str) -> None:
    _require(
        condition=isinstance(value, str),
        message="must be str",
        field_name=field_name,
        exc=TypeError,
    )


def _require_bytes(value: object, field_name: str) -> None:
    _require(
        condition=isinstance(value, bytes | bytearray),
        message="must be bytes",
        field_name=field_name,
        exc=TypeError,
    )


# --- Result type for errors-as-data ---
# Backends raise; the gateway converts every failure into a `Failure` so the
# orchestrator consumes a predictable value instead of wrapping broad excepts.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


# --- Enumerations ---


class ContentKindTag(str, Enum):
    """Payload-free projection of a content kind, used for icons and labels."""

    TEXT = "text"
    URL = "url"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    CODE = "code"


class ProcessingMode(str, Enum):
    """Where an explanation is computed."""

    ON_DEVICE = "on_device"
    CLOUD = "cloud"

    @property
    def display_name(self) -> str:
        """Short user-facing name of the mode."""
        return "On-Device" if self is ProcessingMode.ON_DEVICE else "Cloud"

    @property
    def privacy_caption(self) -> str:
        """Caption shown next to the mode picker."""
        if self is ProcessingMode.ON_DEVICE:
            return "Private On-Device Processing"
        return "Secured Cloud Processing"


# --- Content kinds (closed set) ---


@dataclasses.dataclass(frozen=True, slots=True)
class Text:
    """Free text typed or shared by the user."""

    body: str

    def __post_init__(self) -> None:
        _require_str(self.body, "body")

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.TEXT


@dataclasses.dataclass(frozen=True, slots=True)
class Link:
    """A web URL."""

    url: str

    def __post_init__(self) -> None:
        _require_str(self.url, "url")
        _require(
            condition=self.url.strip() != "",
            message="cannot be empty string",
            field_name="url",
        )

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.URL


@dataclasses.dataclass(frozen=True, slots=True)
class ImageBytes:
    """Raw image bytes."""

    data: bytes

    def __post_init__(self) -> None:
        _require_bytes(self.data, "data")

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.IMAGE


@dataclasses.dataclass(frozen=True, slots=True)
class VideoBytes:
    """Raw bytes of a short video clip."""

    data: bytes

    def __post_init__(self) -> None:
        _require_bytes(self.data, "data")

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.VIDEO


@dataclasses.dataclass(frozen=True, slots=True)
class Document:
    """A document with its declared media type and file name."""

    data: bytes
    media_type: str
    file_name: str

    def __post_init__(self) -> None:
        _require_bytes(self.data, "data")
        _require(
            condition=isinstance(self.media_type, str)
            and self.media_type.strip() != "",
            message="must be a non-empty str",
            field_name="media_type",
            exc=TypeError,
        )
        _require_str(self.file_name, "file_name")

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.DOCUMENT


@dataclasses.dataclass(frozen=True, slots=True)
class Code:
    """Source code with the file it came from and its language."""

    source: str
    file_name: str
    language: str

    def __post_init__(self) -> None:
        _require_str(self.source, "source")
        _require_str(self.file_name, "file_name")
        _require_str(self.language, "language")

    @property
    def tag(self) -> ContentKindTag:
        return ContentKindTag.CODE


@dataclasses.dataclass(frozen=True, slots=True)
class YouTubeVideo:
    """A YouTube video reference found inside a `Text` or `Link` payload.

    Keeps the payload it was found in so history can record what the user
    actually shared.
    """

    url: str
    found_in: Text | Link

    def __post_init__(self) -> None:
        _require_str(self.url, "url")
        _require(
            condition=isinstance(self.found_in, Text | Link),
            message="must be Text or Link",
            field_name="found_in",
            exc=TypeError,
        )

    @property
    def tag(self) -> ContentKindTag:
        return self.found_in.tag


ContentKind = Text | Link | ImageBytes | VideoBytes | Document | Code | YouTubeVideo


# --- Request / result / record ---


@dataclasses.dataclass(frozen=True, slots=True)
class ExplanationRequest:
    """One explanation attempt: what to explain and where to compute it."""

    kind: ContentKind
    mode: ProcessingMode

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.mode, ProcessingMode),
            message="must be a ProcessingMode",
            field_name="mode",
            exc=TypeError,
        )

    def with_mode(self, mode: ProcessingMode) -> ExplanationRequest:
        """Return a copy of this request targeting another mode."""
        return dataclasses.replace(self, mode=mode)


@dataclasses.dataclass(frozen=True, slots=True)
class ExplanationResult:
    """Markdown produced by a backend, passed through unparsed."""

    markdown: str


@dataclasses.dataclass(frozen=True, slots=True)
class HistoryRecord:
    """Durable record of one successful explanation. Never mutated."""

    title: str
    original_input_summary: str
    result_markdown: str
    used_cloud: bool
    kind: ContentKindTag
    thumbnail: bytes | None = None
    id: uuid.UUID = dataclasses.field(default_factory=uuid.uuid4)
    created_at: datetime.datetime = dataclasses.field(
        default_factory=lambda: datetime.datetime.now(datetime.UTC)
    )

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.kind, ContentKindTag),
            message="must be a ContentKindTag",
            field_name="kind",
            exc=TypeError,
        )
        _require(
            condition=self.created_at.tzinfo is not None,
            message="must be timezone-aware",
            field_name="created_at",
        )

    @property
    def mode(self) -> ProcessingMode:
        return ProcessingMode.CLOUD if self.used_cloud else ProcessingMode.ON_DEVICE

    @property
    def display_title(self) -> str:
        """Title for listings, normalizing generic titles written by older builds."""
        if self.title in ("Url", "YouTube Link"):
            return self.original_input_summary
        if self.title in ("Video", "Video File Upload"):
            return "Video Clip"
        return self.title


# --- Orchestrator state (exactly one active at a time) ---


@dataclasses.dataclass(frozen=True, slots=True)
class IdleState:
    """Nothing requested yet."""


@dataclasses.dataclass(frozen=True, slots=True)
class LoadingState:
    """A backend call is in flight."""

    label: str
    mode: ProcessingMode


@dataclasses.dataclass(frozen=True, slots=True)
class ResultState:
    """An explanation is available."""

    result: ExplanationResult
    mode: ProcessingMode
    from_cache: bool = False
    restored: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorState:
    """The last attempt failed; a retry is possible."""

    message: str
    error: Exception | None = None


ExplanationState = IdleState | LoadingState | ResultState | ErrorState
