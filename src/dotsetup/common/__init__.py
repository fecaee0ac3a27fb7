"""Common models and helpers used across dotsetup modules."""

from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_cli_logging
from .models import AppInfo, AppPaths
from .paths import (
    contract_home,
    expand_home,
    get_data_directory,
    get_global_config_path,
    get_global_config_root,
    get_home_directory,
)

__all__ = [
    "AppInfo",
    "AppPaths",
    "LoggingConfig",
    "contract_home",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "expand_home",
    "get_data_directory",
    "get_global_config_path",
    "get_global_config_root",
    "get_home_directory",
    "setup_cli_logging",
]
