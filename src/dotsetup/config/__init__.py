"""Public configuration API for dotsetup."""

from __future__ import annotations

from .models import (
    ConfigError,
    ConfigIOError,
    ConfigScope,
    ConfigValidationError,
    ConfigYamlError,
    DotsetupConfig,
    InstallConfig,
    SourcesConfig,
)
from .store import FileConfigStore

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigScope",
    "ConfigValidationError",
    "ConfigYamlError",
    "DotsetupConfig",
    "FileConfigStore",
    "InstallConfig",
    "SourcesConfig",
]
