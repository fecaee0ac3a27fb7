"""Collaborator protocols for the deployment workflow."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from result import Result

from .models import NetworkError

type Confirmer = Callable[[str, bool], bool]
"""Ask a yes/no question: (prompt, default answer) -> answer."""


class Fetcher(Protocol):
    """Protocol for placing a remote resource at a local path."""

    def fetch(self, url: str, destination: Path, *, mode: int | None = None) -> Result[Path, NetworkError]:
        """Download ``url`` and place it at ``destination``.

        Implementations must leave an existing destination untouched when the
        download fails.
        """
        ...


class Reporter(Protocol):
    """Protocol for operator-facing progress output."""

    def header(self, text: str) -> None: ...

    def step(self, current: int, total: int, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def detail(self, text: str) -> None: ...


class Progress(Protocol):
    """Protocol for showing a progress indicator around a foreground operation."""

    def track[T, E](self, message: str, operation: Callable[[], Result[T, E]]) -> Result[T, E]:
        """Run ``operation`` while an indicator is shown, then report its outcome."""
        ...
