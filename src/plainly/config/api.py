"""Public API for the configuration system."""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .types import ResolvedConfig

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()


def resolve_config(
    overrides: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > Project file > Home file > Defaults

    Args:
        overrides: Programmatic overrides. Only known fields are used.
        profile: Profile name to load from configuration files. If None,
            uses the PLAINLY_PROFILE environment variable if set.
        project_root: Directory to search for pyproject.toml. If None,
            searches the current directory and parents.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ConfigurationError: If validation fails or a project file is malformed.

    Example:
        config = resolve_config({"use_real_api": True, "api_key": "..."})
        frozen = config.to_frozen()
    """
    return _resolver.resolve(overrides, profile=profile, project_root=project_root)


def config_info(config: ResolvedConfig) -> dict[str, Any]:
    """JSON-friendly description of a resolved config, secrets redacted."""
    values = config._asdict()
    values.pop("origin")
    values["api_key"] = "[REDACTED]" if config.api_key else None
    values["history_path"] = str(config.history_path)
    return {"values": values, "origin": dict(config.origin)}
