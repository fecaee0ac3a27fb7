"""Dotfile deployment: decide, back up, fetch and wire into the shell."""

from .fetcher import HttpFetcher
from .models import (
    BackupFailedError,
    BackupRecord,
    BackupStyle,
    Decision,
    DeploymentError,
    DeploymentPlan,
    DeploymentReport,
    DeploymentTarget,
    ExistingFileState,
    FetchFailedError,
    MissingPrerequisiteError,
    NetworkError,
    PermissionDeniedError,
    PrerequisiteError,
    RcFileError,
    TargetKind,
)
from .policy import PromptSet, decide
from .prerequisites import ToolRequirement, check_environment
from .protocol import Confirmer, Fetcher, Progress, Reporter
from .rcfile import BlockOutcome, ConfigBlock, append_block, ensure_block
from .workflow import DeploymentWorkflow

__all__ = [
    "BackupFailedError",
    "BackupRecord",
    "BackupStyle",
    "BlockOutcome",
    "ConfigBlock",
    "Confirmer",
    "Decision",
    "DeploymentError",
    "DeploymentPlan",
    "DeploymentReport",
    "DeploymentTarget",
    "DeploymentWorkflow",
    "ExistingFileState",
    "FetchFailedError",
    "Fetcher",
    "HttpFetcher",
    "MissingPrerequisiteError",
    "NetworkError",
    "PermissionDeniedError",
    "PrerequisiteError",
    "Progress",
    "PromptSet",
    "RcFileError",
    "Reporter",
    "TargetKind",
    "ToolRequirement",
    "append_block",
    "check_environment",
    "decide",
    "ensure_block",
]
