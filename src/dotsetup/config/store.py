"""File-based configuration store."""

from __future__ import annotations

from pathlib import Path

from result import Result

from dotsetup.common import AppPaths, create_logger, get_global_config_path

from .loader import load_config_file
from .models import ConfigError, DotsetupConfig
from .resolver import apply_env_overrides

logger = create_logger("config")


class FileConfigStore:
    def __init__(self, paths: AppPaths, config_path: Path | None = None) -> None:
        self.paths = paths
        self.config_path = config_path

    @property
    def path(self) -> Path:
        return self.config_path or get_global_config_path(self.paths)

    def load(self) -> Result[DotsetupConfig, ConfigError]:
        path = self.path
        logger.debug("Loading config", path=str(path), exists=path.is_file())

        return (
            load_config_file(path)
            .and_then(apply_env_overrides)
            .inspect_err(lambda error: logger.error("Config load failed", scope=error.scope.value, error=error.message))
        )
