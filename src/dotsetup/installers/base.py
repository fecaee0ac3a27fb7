"""Shared context and result models for installers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel
from result import Result

from dotsetup.build import BuildError, PackageInstallError
from dotsetup.common import contract_home
from dotsetup.config import DotsetupConfig
from dotsetup.deploy import (
    BlockOutcome,
    Confirmer,
    DeploymentError,
    DeploymentReport,
    DeploymentWorkflow,
    Fetcher,
    PrerequisiteError,
    Progress,
    RcFileError,
    Reporter,
)


class InstallStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


class InstallOutcome(BaseModel):
    """Summary of a finished (or cleanly cancelled) installer run."""

    installer: str
    status: InstallStatus = InstallStatus.COMPLETED
    deployments: list[DeploymentReport] = []
    blocks: dict[str, BlockOutcome] = {}
    binary: Path | None = None


type InstallError = PrerequisiteError | DeploymentError | RcFileError | BuildError | PackageInstallError


class Installer(Protocol):
    name: str

    def run(self, *, force: bool) -> Result[InstallOutcome, InstallError]: ...


@dataclass(frozen=True)
class InstallerContext:
    """Everything an installer needs, passed explicitly instead of read from globals."""

    config: DotsetupConfig
    home: Path
    reporter: Reporter
    progress: Progress
    fetcher: Fetcher
    confirm: Confirmer | None
    clock: Callable[[], datetime] = field(default=datetime.now)

    @property
    def workflow(self) -> DeploymentWorkflow:
        return DeploymentWorkflow(self.fetcher, self.reporter, self.progress, clock=self.clock)

    @property
    def rc_file(self) -> Path:
        return self.config.install.rc_path(self.home)

    @property
    def prefix(self) -> Path:
        return self.config.install.prefix_path(self.home)

    @property
    def build_dir(self) -> Path:
        return self.config.install.build_path(self.home)

    def ask(self, prompt: str, *, default: bool = False) -> bool:
        """Ask ``prompt``; non-interactive runs answer no."""
        return self.confirm is not None and self.confirm(prompt, default)

    def display(self, path: Path) -> str:
        return contract_home(path, self.home)

    def print_manual_block(self, text: str) -> None:
        self.reporter.detail(f"\nAdd the following to {self.display(self.rc_file)} manually:")
        indented = "\n".join(f"  {line}" if line else "" for line in text.splitlines())
        self.reporter.detail(f"{indented}\n")
