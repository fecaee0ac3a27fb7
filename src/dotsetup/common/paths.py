"""Path discovery utilities for dotsetup."""

from __future__ import annotations

import os
from pathlib import Path

from .models import AppPaths


def get_home_directory() -> Path:
    """Return the user's home directory, honouring $HOME when set."""
    home = os.getenv("HOME")
    return Path(home) if home else Path.home()


def expand_home(path: Path | str, home: Path | None = None) -> Path:
    """Expand a leading ``~`` against ``home`` (defaults to the current $HOME)."""
    raw = str(path)
    base = home or get_home_directory()
    if raw == "~":
        return base
    if raw.startswith("~/"):
        return base / raw[2:]
    return Path(raw)


def get_global_config_root(paths: AppPaths) -> Path:
    """Get global config root directory.

    Returns ~/.config/{config_dir_name} (or XDG_CONFIG_HOME/{config_dir_name} if set).
    """
    xdg_base = os.getenv("XDG_CONFIG_HOME")
    base_dir = Path(xdg_base).expanduser() if xdg_base else get_home_directory() / ".config"
    return base_dir / paths.config_dir_name


def get_global_config_path(paths: AppPaths) -> Path:
    return get_global_config_root(paths) / paths.config_filename


def get_data_directory(paths: AppPaths) -> Path:
    """Get XDG data directory.

    Returns ~/.local/share/{data_dir_name} (or XDG_DATA_HOME/{data_dir_name} if set).
    """
    xdg_data = os.getenv("XDG_DATA_HOME")
    base_dir = Path(xdg_data).expanduser() if xdg_data else get_home_directory() / ".local" / "share"
    return base_dir / paths.data_dir_name


def contract_home(path: Path, home: Path | None = None) -> str:
    """Render ``path`` with the home directory shown as ``~``."""
    base = home or get_home_directory()
    try:
        return f"~/{path.relative_to(base)}"
    except ValueError:
        return str(path)
