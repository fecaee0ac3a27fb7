"""Cosmetic progress spinner around foreground operations and child processes."""

from __future__ import annotations

import subprocess
import time
from collections.abc import Callable

from result import Result
from rich.console import Console

from .console import ConsoleReporter

POLL_INTERVAL = 0.1


class Spinner:
    """Show a rich status spinner while work runs, then print ✓ or ✗ with the message.

    The spinner owns no domain data: it only renders while the foreground
    operation (or the polled child process) is alive.
    """

    def __init__(self, reporter: ConsoleReporter, console: Console | None = None) -> None:
        self._reporter = reporter
        self._console = console or Console()

    def track[T, E](self, message: str, operation: Callable[[], Result[T, E]]) -> Result[T, E]:
        with self._console.status(message, spinner="dots"):
            result = operation()

        if result.is_ok():
            self._reporter.success(message)
        else:
            self._reporter.error(message)
        return result

    def wait(self, message: str, process: subprocess.Popen[bytes]) -> int:
        with self._console.status(message, spinner="dots"):
            while process.poll() is None:
                time.sleep(POLL_INTERVAL)

        if process.returncode == 0:
            self._reporter.success(message)
        else:
            self._reporter.error(message)
        return process.returncode
