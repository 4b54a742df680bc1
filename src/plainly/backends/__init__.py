"""Explanation backends: capability protocols and their implementations."""

from .base import CloudCapability, LocalCapability
from .gemini import GeminiCloudBackend
from .local import HttpLocalBackend
from .mock import MockCloudBackend, MockLocalBackend

__all__ = [
    "CloudCapability",
    "GeminiCloudBackend",
    "HttpLocalBackend",
    "LocalCapability",
    "MockCloudBackend",
    "MockLocalBackend",
]
