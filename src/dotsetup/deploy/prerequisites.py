"""Environment checks run before any destructive action."""

from __future__ import annotations

import os
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import MissingPrerequisiteError, PermissionDeniedError, PrerequisiteError

logger = create_logger("deploy.prerequisites")


@dataclass(frozen=True)
class ToolRequirement:
    """An external command, satisfied by ``name`` or any of ``alternatives``."""

    name: str
    alternatives: tuple[str, ...] = ()

    @property
    def candidates(self) -> tuple[str, ...]:
        return (self.name, *self.alternatives)

    @property
    def label(self) -> str:
        if not self.alternatives:
            return self.name
        return f"{self.name} (or {', '.join(self.alternatives)})"

    def is_available(self) -> bool:
        return any(shutil.which(candidate) is not None for candidate in self.candidates)


def find_missing_tools(requirements: Sequence[ToolRequirement]) -> list[str]:
    return [requirement.label for requirement in requirements if not requirement.is_available()]


def check_environment(
    requirements: Sequence[ToolRequirement],
    home: Path,
) -> Result[None, PrerequisiteError]:
    missing = find_missing_tools(requirements)
    if missing:
        logger.error("Missing prerequisites", tools=missing)
        return Err(
            MissingPrerequisiteError(
                tools=missing,
                message=f"Required command not found: {', '.join(missing)}",
            )
        )

    if not home.is_dir() or not os.access(home, os.W_OK):
        logger.error("Home directory not writable", home=str(home))
        return Err(PermissionDeniedError(path=home, message=f"No write permission for home directory: {home}"))

    return Ok(None)
