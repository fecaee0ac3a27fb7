"""Collaborator protocols for running external build tools."""

from __future__ import annotations

import subprocess
from typing import Protocol


class ProcessProgress(Protocol):
    """Protocol for waiting on a child process while showing progress."""

    def wait(self, message: str, process: subprocess.Popen[bytes]) -> int:
        """Block until ``process`` exits and return its exit status."""
        ...
