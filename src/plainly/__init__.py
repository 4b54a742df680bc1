"""Plainly: explanation orchestration core.

Classifies a submitted input, picks where it is processed, dispatches it to
an on-device or cloud model, caches the result per mode and records the first
success of every request in a local history log.
"""

import importlib.metadata
import logging

from plainly.config import FrozenConfig, ResolvedConfig, resolve_config
from plainly.core.classifier import classify, extract_youtube_url
from plainly.core.exceptions import (
    BackendUnavailableError,
    ConfigurationError,
    EmptyInputError,
    ExplainError,
    ExplainTimeoutError,
    GenerationFailedError,
    HistoryStoreError,
    PlainlyError,
    TransportError,
)
from plainly.core.policy import default_mode, loading_label, shows_mode_picker
from plainly.core.types import (
    Code,
    ContentKind,
    ContentKindTag,
    Document,
    ErrorState,
    ExplanationRequest,
    ExplanationResult,
    ExplanationState,
    Failure,
    HistoryRecord,
    IdleState,
    ImageBytes,
    Link,
    LoadingState,
    ProcessingMode,
    Result,
    ResultState,
    Success,
    Text,
    VideoBytes,
    YouTubeVideo,
)
from plainly.frontdoor import PlainlyApp, create_app, explain
from plainly.gateway import ExplanationGateway
from plainly.history import HistoryStore, InMemoryHistoryStore, JSONHistoryStore
from plainly.ingest import from_user_text, resolve_shared_item
from plainly.orchestrator import ExplanationOrchestrator
from plainly.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("plainly")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Entry points
    "PlainlyApp",
    "create_app",
    "explain",
    "ExplanationOrchestrator",
    "ExplanationGateway",
    # Content
    "Code",
    "ContentKind",
    "ContentKindTag",
    "Document",
    "ImageBytes",
    "Link",
    "Text",
    "VideoBytes",
    "YouTubeVideo",
    "classify",
    "extract_youtube_url",
    "from_user_text",
    "resolve_shared_item",
    # Policy
    "ProcessingMode",
    "default_mode",
    "loading_label",
    "shows_mode_picker",
    # Requests, results and state
    "ExplanationRequest",
    "ExplanationResult",
    "ExplanationState",
    "IdleState",
    "LoadingState",
    "ResultState",
    "ErrorState",
    "Result",
    "Success",
    "Failure",
    # History
    "HistoryRecord",
    "HistoryStore",
    "InMemoryHistoryStore",
    "JSONHistoryStore",
    # Configuration
    "FrozenConfig",
    "ResolvedConfig",
    "resolve_config",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "PlainlyError",
    "ConfigurationError",
    "ExplainError",
    "EmptyInputError",
    "BackendUnavailableError",
    "GenerationFailedError",
    "TransportError",
    "ExplainTimeoutError",
    "HistoryStoreError",
]
