"""Core configuration data types.

Follows the resolve-once, freeze-then-flow pattern: `ResolvedConfig` carries
values plus where each came from; `FrozenConfig` is what components receive.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Logically immutable; provides helpers for creating variants and
    converting to the frozen form.
    """

    api_key: str | None
    cloud_model: str
    use_real_api: bool
    local_base_url: str
    local_model: str
    request_timeout_seconds: float
    probe_timeout_seconds: float
    history_path: Path
    youtube_text_fallback: bool

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, "
            f"cloud_model={self.cloud_model!r}, use_real_api={self.use_real_api!r}, "
            f"local_base_url={self.local_base_url!r}, local_model={self.local_model!r}, "
            f"request_timeout_seconds={self.request_timeout_seconds!r}, "
            f"history_path={str(self.history_path)!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration handed to components."""
        return FrozenConfig(
            api_key=self.api_key,
            cloud_model=self.cloud_model,
            use_real_api=self.use_real_api,
            local_base_url=self.local_base_url,
            local_model=self.local_model,
            request_timeout_seconds=self.request_timeout_seconds,
            probe_timeout_seconds=self.probe_timeout_seconds,
            history_path=self.history_path,
            youtube_text_fallback=self.youtube_text_fallback,
        )

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in new_values and field != "origin":
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Human-readable report of each field's origin, secrets redacted."""
        lines = []
        for field, origin in self.origin.items():
            if field == "api_key":
                if self.api_key is None:
                    value_display = f"{origin}:None"
                else:
                    value_display = f"{origin}:[REDACTED]"
            elif origin == "env":
                value_display = f"env:PLAINLY_{field.upper()}={getattr(self, field)}"
            else:
                value_display = f"{origin}:{getattr(self, field)}"
            lines.append(f"{field}: {value_display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to gateways, backends and stores."""

    api_key: str | None
    cloud_model: str
    use_real_api: bool
    local_base_url: str
    local_model: str
    request_timeout_seconds: float
    probe_timeout_seconds: float
    history_path: Path
    youtube_text_fallback: bool

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, "
            f"cloud_model={self.cloud_model!r}, use_real_api={self.use_real_api!r}, "
            f"local_base_url={self.local_base_url!r}, local_model={self.local_model!r}, "
            f"request_timeout_seconds={self.request_timeout_seconds!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()
