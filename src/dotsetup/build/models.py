"""Data and error models for source builds and package installs."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BuildStage(str, Enum):
    """Stages of a source build, in execution order."""

    RESOLVE_VERSION = "resolve-version"
    VERIFY_TOOLCHAIN = "verify-toolchain"
    DOWNLOAD = "download"
    EXTRACT = "extract"
    CONFIGURE = "configure"
    COMPILE = "compile"
    INSTALL = "install"
    VERIFY = "verify"


class BuildError(BaseModel):
    """A build stage failed. Transient build files are already removed."""

    model_config = ConfigDict(extra="forbid")

    package: str
    stage: BuildStage
    message: str
    output_tail: list[str] = []


class PackageInstallError(BaseModel):
    """The system package manager failed to install a package."""

    model_config = ConfigDict(extra="forbid")

    package: str
    manager: str | None = None
    message: str

