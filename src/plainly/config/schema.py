"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, TOML files and programmatic overrides into the
correct types with proper defaults.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plainly.constants import (
    DEFAULT_CLOUD_MODEL,
    DEFAULT_HISTORY_PATH,
    DEFAULT_LOCAL_BASE_URL,
    DEFAULT_LOCAL_MODEL,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
)


class PlainlySettings(BaseSettings):
    """Pydantic settings schema for plainly configuration.

    Integrates with environment variables using the PLAINLY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLAINLY_",
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="API key for the hosted (cloud) model",
    )

    cloud_model: str = Field(
        default=DEFAULT_CLOUD_MODEL,
        description="Hosted model identifier",
        min_length=1,
    )

    use_real_api: bool = Field(
        default=False,
        description="Call real backends instead of the deterministic mocks",
    )

    local_base_url: str = Field(
        default=DEFAULT_LOCAL_BASE_URL,
        description="Base URL of the on-device model server",
        min_length=1,
    )

    local_model: str = Field(
        default=DEFAULT_LOCAL_MODEL,
        description="Model served by the on-device server",
        min_length=1,
    )

    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Upper bound for a single backend call",
        gt=0,
    )

    probe_timeout_seconds: float = Field(
        default=DEFAULT_PROBE_TIMEOUT,
        description="Upper bound for the one-time on-device availability probe",
        gt=0,
    )

    history_path: Path = Field(
        default=DEFAULT_HISTORY_PATH,
        description="Location of the explanation history blob",
    )

    youtube_text_fallback: bool = Field(
        default=True,
        description="Retry a rejected YouTube reference as a plain URL prompt",
    )

    @field_validator("history_path", mode="before")
    @classmethod
    def expand_history_path(cls, v: Any) -> Any:
        """Expand `~` so file and env values behave like shell paths."""
        if isinstance(v, str | Path):
            return Path(v).expanduser()
        return v

    @field_validator("local_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "PlainlySettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set PLAINLY_API_KEY, provide it in a config file, "
                "or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return {name: getattr(self, name) for name in FIELD_ORDER}


FIELD_ORDER: tuple[str, ...] = (
    "api_key",
    "cloud_model",
    "use_real_api",
    "local_base_url",
    "local_model",
    "request_timeout_seconds",
    "probe_timeout_seconds",
    "history_path",
    "youtube_text_fallback",
)
