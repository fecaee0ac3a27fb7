"""Loguru setup for dotsetup.

The CLI writes a rotating log file under the XDG data directory, one record per
reporter line, build command and decision. Imported as a library, dotsetup stays
silent until ``dotsetup.enable_logging()`` is called.
"""

import sys
from pathlib import Path
from typing import Any, Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from dotsetup.constants import APP_NAME

from .models import AppInfo, AppPaths
from .paths import expand_home, get_data_directory

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
type LogFormat = Literal["json", "text"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]: <18} | {message} | {extra}\n{exception}"


class LoggingConfig(BaseModel):
    """The ``logging`` section of config.yaml."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    log_level: LogLevel = "INFO"
    log_file: str | None = None
    rotation: str = "1 MB"
    retention: str = "7 days"
    format: LogFormat = "text"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def resolve_log_file(self, paths: AppPaths) -> Path:
        return expand_home(self.log_file) if self.log_file else get_default_log_file_path(paths)


def setup_cli_logging(app_info: AppInfo, config: LoggingConfig, paths: AppPaths) -> int:
    """Route every dotsetup record to the log file; returns the loguru handler id."""
    log_file = config.resolve_log_file(paths)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"scope": "cli", "env": app_info.environment})
    logger.enable(APP_NAME)

    sink_options: dict[str, Any] = {
        "level": config.log_level,
        "rotation": config.rotation,
        "retention": config.retention,
        "diagnose": app_info.environment == "dev",
    }
    if config.format == "json":
        sink_options["serialize"] = True
    else:
        sink_options["format"] = TEXT_FORMAT

    handler_id = logger.add(log_file, **sink_options)
    logger.debug("Log file opened", log_file=str(log_file), version=app_info.version, format=config.format)
    return handler_id


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: str = "INFO") -> int:
    logger.remove()
    logger.configure(extra={"scope": APP_NAME})
    logger.enable(APP_NAME)
    return logger.add(sys.stderr, level=level.upper(), format=TEXT_FORMAT, colorize=False)


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)


def get_default_log_file_path(paths: AppPaths) -> Path:
    return get_data_directory(paths) / paths.logs_dir_name / f"{APP_NAME}.log"
