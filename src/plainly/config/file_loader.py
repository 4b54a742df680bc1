"""File-based configuration loading with profile support.

Loads configuration from the `[tool.plainly]` table of the nearest
pyproject.toml and from a home-level `~/.config/plainly.toml`, with optional
named profiles in both.
"""

import os
from pathlib import Path
import tomllib
from typing import Any


class ConfigFileError(Exception):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads configuration from TOML files with profile support."""

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load configuration from pyproject.toml.

        Args:
            project_root: Directory to search for pyproject.toml. If None,
                searches the current directory and its parents.
            profile: Optional profile from `[tool.plainly.profiles.<name>]`.

        Returns:
            Configuration values; empty if there is no file or no plainly table.

        Raises:
            ConfigFileError: If the file exists but cannot be parsed, or the
                requested profile does not exist.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        data = self._read_toml(pyproject_path)
        plainly_config = data.get("tool", {}).get("plainly", {})
        if not plainly_config:
            return {}
        return self._select_profile(pyproject_path, plainly_config, profile)

    def load_home_config(self, profile: str | None = None) -> dict[str, Any]:
        """Load configuration from the home-level TOML file.

        Raises:
            ConfigFileError: If the file exists but cannot be parsed, or the
                requested profile does not exist.
        """
        home_config_path = self._get_home_config_path()
        if not home_config_path.exists():
            return {}
        data = self._read_toml(home_config_path)
        return self._select_profile(home_config_path, data, profile)

    def _read_toml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(mode="rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(path, f"Failed to parse TOML: {e}", cause=e) from e

    def _select_profile(
        self, path: Path, table: dict[str, Any], profile: str | None
    ) -> dict[str, Any]:
        if profile:
            profiles = table.get("profiles", {})
            if profile not in profiles:
                available = list(profiles.keys()) if profiles else []
                raise ConfigFileError(
                    path,
                    f"Profile '{profile}' not found. Available profiles: {available}",
                )
            return dict(profiles[profile])
        config = dict(table)
        config.pop("profiles", None)
        return config

    def _find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        explicit = os.getenv("PLAINLY_PYPROJECT_PATH")
        if explicit:
            path = Path(explicit)
            return path if path.exists() else None

        current = Path(start_dir or Path.cwd()).resolve()
        while current != current.parent:
            candidate = current / "pyproject.toml"
            if candidate.exists():
                return candidate
            current = current.parent
        return None

    def _get_home_config_path(self) -> Path:
        """Path of the home config, overridable via PLAINLY_CONFIG_HOME."""
        override = os.getenv("PLAINLY_CONFIG_HOME")
        if override:
            return Path(override)
        return Path.home() / ".config" / "plainly.toml"
