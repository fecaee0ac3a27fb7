"""Environment variable resolution helpers for configuration."""

from __future__ import annotations

import os

import yaml
from result import Ok, Result

from dotsetup.constants import ENV_PREFIX
from dotsetup.utils import deep_merge
from dotsetup.utils.types import JsonDict

from .loader import validate_config
from .models import ConfigError, ConfigScope, DotsetupConfig


def apply_env_overrides(config: DotsetupConfig) -> Result[DotsetupConfig, ConfigError]:
    """Apply DOTSETUP_CONFIG__SECTION__KEY environment overrides to config."""
    override_data: JsonDict = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = key[len(ENV_PREFIX) :].strip("_")
        if not path:
            continue
        segments = [segment.lower() for segment in path.split("__") if segment]
        _insert_override(override_data, segments, _parse_env_value(value))

    if not override_data:
        return Ok(config)

    merged = deep_merge(config.model_dump(), override_data)
    return validate_config(merged, scope=ConfigScope.ENVIRONMENT)


def _insert_override(data: JsonDict, path: list[str], value: object) -> None:
    cursor = data
    *parents, leaf = path
    for segment in parents:
        child = cursor.get(segment)
        if not isinstance(child, dict):
            child = {}
            cursor[segment] = child
        cursor = child
    cursor[leaf] = value


def _parse_env_value(raw: str) -> object:
    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return parsed
