"""Data and error models for dotfile deployment."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dotsetup.utils.types import HttpUrlString, NonEmptyString


class TargetKind(str, Enum):
    """Kinds of file dotsetup is responsible for placing."""

    GIT_COMPLETION = "git-completion"
    GIT_PROMPT = "git-prompt"
    VIM_CONFIG = "vim-config"


class Decision(str, Enum):
    """Outcome of the deployment decision policy."""

    FRESH = "fresh"
    SKIP = "skip"
    BACKUP_THEN_OVERWRITE = "backup-then-overwrite"
    OVERWRITE_NO_BACKUP = "overwrite-no-backup"
    ABORT = "abort"

    @property
    def fetches(self) -> bool:
        return self in (Decision.FRESH, Decision.BACKUP_THEN_OVERWRITE, Decision.OVERWRITE_NO_BACKUP)


class BackupStyle(str, Enum):
    """Where backups of a plan's files are written."""

    SIBLING = "sibling"
    DIRECTORY = "directory"


class DeploymentTarget(BaseModel):
    """A single file placed on the host from a remote source."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: TargetKind
    source_url: HttpUrlString
    destination: Path
    mode: int | None = None

    @property
    def display_name(self) -> str:
        return self.destination.name


class ExistingFileState(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    present: bool

    @classmethod
    def inspect(cls, path: Path) -> ExistingFileState:
        return cls(path=path, present=path.is_file())


class BackupRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_path: Path
    backup_path: Path
    timestamp_suffix: str


class DeploymentPlan(BaseModel):
    """A group of targets that share one decision and one backup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: NonEmptyString
    targets: tuple[DeploymentTarget, ...] = Field(min_length=1)
    backup_style: BackupStyle = BackupStyle.SIBLING
    backup_dir_prefix: str = ".dotsetup-backup"

    def inspect(self) -> list[ExistingFileState]:
        return [ExistingFileState.inspect(target.destination) for target in self.targets]


class DeploymentReport(BaseModel):
    """What a deployment run did."""

    plan: str
    decision: Decision
    backups: list[BackupRecord] = []
    fetched: list[Path] = []

    @property
    def backup_location(self) -> Path | None:
        if not self.backups:
            return None
        first = self.backups[0]
        # sibling backups sit next to the original; directory backups share one folder
        if first.backup_path.parent == first.original_path.parent:
            return first.backup_path
        return first.backup_path.parent


class BaseDeployError(BaseModel):
    """Base deployment error model."""

    model_config = ConfigDict(extra="forbid")

    message: str


class MissingPrerequisiteError(BaseDeployError):
    """One or more required external tools are not installed."""

    tools: list[str]


class PermissionDeniedError(BaseDeployError):
    """A directory that must be writable is not."""

    path: Path


class BackupFailedError(BaseDeployError):
    """Copying an existing file aside failed; nothing was overwritten."""

    path: Path


class NetworkError(BaseDeployError):
    """Downloading a resource failed."""

    url: str


class FetchFailedError(BaseDeployError):
    """At least one target of a plan could not be fetched."""

    failures: list[NetworkError]
    fetched: list[Path] = []


class RcFileError(BaseDeployError):
    """Reading or appending to the shell resource file failed."""

    path: Path


type PrerequisiteError = MissingPrerequisiteError | PermissionDeniedError
type DeploymentError = BackupFailedError | FetchFailedError


__all__ = [
    "BackupFailedError",
    "BackupRecord",
    "BackupStyle",
    "BaseDeployError",
    "Decision",
    "DeploymentError",
    "DeploymentPlan",
    "DeploymentReport",
    "DeploymentTarget",
    "ExistingFileState",
    "FetchFailedError",
    "MissingPrerequisiteError",
    "NetworkError",
    "PermissionDeniedError",
    "PrerequisiteError",
    "RcFileError",
    "TargetKind",
]
