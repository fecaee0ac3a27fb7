"""Pydantic models for dotsetup configuration and configuration errors."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt

from dotsetup.common import LoggingConfig, expand_home
from dotsetup.utils.types import HttpUrlString, VersionSpec

SETUP_TOOLS_BASE_URL = "https://raw.githubusercontent.com/opipi406/linux-setup-tools/main"
GIT_CONTRIB_BASE_URL = "https://raw.githubusercontent.com/git/git/master/contrib/completion"


class ConfigScope(str, Enum):
    """Where a configuration value came from."""

    GLOBAL = "global"
    ENVIRONMENT = "environment"


class ConfigYamlError(BaseModel):
    """YAML parsing error in configuration file."""

    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    path: Path
    line: int | None = None
    column: int | None = None
    message: str


class ConfigValidationError(BaseModel):
    """Schema validation error in configuration."""

    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    path: Path | None = None
    field: str | None = None
    message: str


class ConfigIOError(BaseModel):
    """File I/O error reading configuration."""

    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    path: Path
    message: str


type ConfigError = ConfigYamlError | ConfigValidationError | ConfigIOError


class SourcesConfig(BaseModel):
    """Remote locations of every asset dotsetup fetches."""

    model_config = ConfigDict(extra="forbid")

    git_completion_url: HttpUrlString = f"{GIT_CONTRIB_BASE_URL}/git-completion.bash"
    git_prompt_url: HttpUrlString = f"{GIT_CONTRIB_BASE_URL}/git-prompt.sh"
    vimrc_url: HttpUrlString = f"{SETUP_TOOLS_BASE_URL}/vim/vimrc.template"
    source_build_vimrc_url: HttpUrlString = f"{SETUP_TOOLS_BASE_URL}/vim-setup/vimrc.template"
    vim_tags_url: HttpUrlString = "https://api.github.com/repos/vim/vim/tags?per_page=1"
    vim_archive_url: HttpUrlString = "https://github.com/vim/vim/archive/refs/tags/v{version}.tar.gz"
    vim_repository_url: HttpUrlString = "https://github.com/vim/vim.git"
    ncurses_archive_url: HttpUrlString = "https://invisible-island.net/datafiles/release/ncurses.tar.gz"


class InstallConfig(BaseModel):
    """Local install locations and build knobs.

    Paths may start with ``~`` and are expanded against $HOME when resolved, so
    the same config works unchanged for any user.
    """

    model_config = ConfigDict(extra="forbid")

    rc_file: str = "~/.bashrc"
    prefix: str = "~/local"
    build_dir: str = "~/.vim_build_tmp"
    vim_version: VersionSpec = "latest"
    jobs: PositiveInt | None = None
    http_timeout: PositiveFloat = 30.0

    def rc_path(self, home: Path | None = None) -> Path:
        return expand_home(self.rc_file, home)

    def prefix_path(self, home: Path | None = None) -> Path:
        return expand_home(self.prefix, home)

    def build_path(self, home: Path | None = None) -> Path:
        return expand_home(self.build_dir, home)

    def build_jobs(self) -> int:
        return self.jobs or os.cpu_count() or 1


class DotsetupConfig(BaseModel):
    """Effective configuration (~/.config/dotsetup/config.yaml plus environment overrides)."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)
