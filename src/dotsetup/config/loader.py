"""Configuration file loading and validation helpers."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result

from dotsetup.utils import format_validation_error

from .models import (
    ConfigError,
    ConfigIOError,
    ConfigScope,
    ConfigValidationError,
    ConfigYamlError,
    DotsetupConfig,
)


def load_config_file(path: Path) -> Result[DotsetupConfig, ConfigError]:
    """Load and validate the global config file.

    A missing file is not an error: the defaults are returned instead.
    """
    if not path.is_file():
        return Ok(DotsetupConfig())

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        return Err(ConfigIOError(scope=ConfigScope.GLOBAL, path=path, message=str(exc)))

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = getattr(mark, "line", None)
        column = getattr(mark, "column", None)
        return Err(
            ConfigYamlError(
                scope=ConfigScope.GLOBAL,
                path=path,
                line=(line + 1) if line is not None else None,
                column=(column + 1) if column is not None else None,
                message=str(exc),
            ),
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        return Err(
            ConfigValidationError(
                scope=ConfigScope.GLOBAL,
                path=path,
                message="Configuration root must be a mapping of keys to values.",
            ),
        )

    return validate_config(data, scope=ConfigScope.GLOBAL, path=path)


def validate_config(
    data: dict[str, object],
    *,
    scope: ConfigScope,
    path: Path | None = None,
) -> Result[DotsetupConfig, ConfigError]:
    try:
        return Ok(DotsetupConfig.model_validate(data))
    except ValidationError as exc:
        error_details = exc.errors()
        field = None
        if error_details:
            loc = error_details[0].get("loc") or ()
            field = ".".join(str(part) for part in loc) or None
        message = format_validation_error("configuration", exc)
        return Err(ConfigValidationError(scope=scope, path=path, field=field, message=message))
