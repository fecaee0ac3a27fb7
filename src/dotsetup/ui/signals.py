"""Signal handling: interrupts unwind the stack so scoped cleanups always run."""

from __future__ import annotations

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

import typer

from dotsetup.common import create_logger

from .console import ConsoleReporter

logger = create_logger("signals")

EXIT_INTERRUPTED = 130
EXIT_TERMINATED = 143


class InterruptRequested(BaseException):
    """The operator interrupted the run (SIGINT or an aborted prompt)."""


class TerminationRequested(BaseException):
    """The process received SIGTERM."""


def _raise_termination(signum: int, frame: FrameType | None) -> None:
    raise TerminationRequested()


def install_signal_handlers() -> None:
    signal.signal(signal.SIGTERM, _raise_termination)


@contextmanager
def exit_on_interrupt(reporter: ConsoleReporter) -> Iterator[None]:
    """Translate interrupts into exit codes 130 (SIGINT) and 143 (SIGTERM)."""
    previous = signal.getsignal(signal.SIGTERM)
    install_signal_handlers()
    try:
        yield
    except (KeyboardInterrupt, InterruptRequested):
        typer.echo(err=True)
        reporter.error("Interrupted")
        logger.warning("Run interrupted")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None
    except TerminationRequested:
        reporter.error("Received termination signal")
        logger.warning("Run terminated")
        raise typer.Exit(code=EXIT_TERMINATED) from None
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
