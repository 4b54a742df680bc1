"""Exceptions for the explanation core."""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal[
    "empty_input",
    "unavailable",
    "generation_failed",
    "transport",
    "timeout",
]


class PlainlyError(Exception):
    """Base exception for plainly errors."""


class ConfigurationError(PlainlyError):
    """Raised when configuration cannot be resolved or validated."""


class HistoryStoreError(PlainlyError):
    """Raised when the history log cannot be written."""


class ExplainError(PlainlyError):
    """A failed explanation attempt with a human-readable cause."""

    kind: ErrorKind = "generation_failed"

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(cause)


class EmptyInputError(ExplainError):
    """No request could be constructed from the input."""

    kind: ErrorKind = "empty_input"

    def __init__(self, cause: str = "No input found.") -> None:
        super().__init__(cause)


class BackendUnavailableError(ExplainError):
    """The on-device backend is not ready. Recovered by the gateway."""

    kind: ErrorKind = "unavailable"


class GenerationFailedError(ExplainError):
    """A backend answered but produced no usable content."""

    kind: ErrorKind = "generation_failed"


class TransportError(ExplainError):
    """Network or model-service failure; the upstream message is kept verbatim."""

    kind: ErrorKind = "transport"


class ExplainTimeoutError(TransportError):
    """A backend call exceeded the configured timeout."""

    kind: ErrorKind = "timeout"
