"""Configuration management for plainly.

Resolve-once, freeze-then-flow configuration:
- ResolvedConfig: post-resolution configuration with audit metadata
- FrozenConfig: immutable configuration handed to components
- SourceMap: origin of each configuration value
"""

from .api import config_info, resolve_config
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import PlainlySettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "FileConfigLoader",
    "FrozenConfig",
    "PlainlySettings",
    "ResolvedConfig",
    "SourceMap",
    "config_info",
    "resolve_config",
]
