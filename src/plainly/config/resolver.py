"""Configuration resolution with precedence handling.

Merges configuration according to the documented precedence order:
Programmatic > Environment > Project file > Home file > Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from plainly.core.exceptions import ConfigurationError

from .env_loader import EnvironmentConfigLoader
from .file_loader import ConfigFileError, FileConfigLoader
from .schema import FIELD_ORDER, PlainlySettings
from .types import ConfigOrigin, ResolvedConfig

logger = logging.getLogger(__name__)


class SourceTracker:
    """Tracks the origin of configuration values during resolution."""

    def __init__(self) -> None:
        self._origins: dict[str, ConfigOrigin] = {}

    def set_origin(self, field: str, origin: ConfigOrigin) -> None:
        self._origins[field] = origin

    def get_source_map(self) -> dict[str, ConfigOrigin]:
        return dict(self._origins)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence).
            profile: Profile name to load from files; defaults to PLAINLY_PROFILE.
            project_root: Directory to search for pyproject.toml.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If validation fails or a project file is malformed.
        """
        tracker = SourceTracker()
        merged: dict[str, Any] = {}

        if profile is None:
            profile = os.getenv("PLAINLY_PROFILE")

        # Step 1: schema defaults
        for field in FIELD_ORDER:
            merged[field] = PlainlySettings.model_fields[field].get_default(
                call_default_factory=True
            )
            tracker.set_origin(field, "default")

        # Step 2: home file (errors are non-fatal)
        try:
            self._apply(merged, tracker, self.file_loader.load_home_config(profile), "file")
        except ConfigFileError as e:
            logger.warning("Skipping home config: %s", e)

        # Step 3: project file
        try:
            self._apply(
                merged,
                tracker,
                self.file_loader.load_project_config(project_root, profile),
                "file",
            )
        except ConfigFileError as e:
            raise ConfigurationError(str(e)) from e

        # Step 4: environment
        try:
            self._apply(merged, tracker, self.env_loader.load_env_config(), "env")
        except ValueError as e:
            raise ConfigurationError(f"Environment configuration error: {e}") from e

        # Step 5: programmatic overrides
        if programmatic:
            self._apply(merged, tracker, programmatic, "programmatic")

        # Step 6: validate the merged result once
        try:
            final = PlainlySettings(**merged).to_dict()
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(**final, origin=tracker.get_source_map())

    def _apply(
        self,
        merged: dict[str, Any],
        tracker: SourceTracker,
        values: dict[str, Any],
        origin: ConfigOrigin,
    ) -> None:
        for field, value in values.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                tracker.set_origin(field, origin)
