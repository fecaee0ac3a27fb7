from __future__ import annotations

import signal

import pytest
import typer

from dotsetup.ui import (
    EXIT_INTERRUPTED,
    EXIT_TERMINATED,
    ConsoleReporter,
    InterruptRequested,
    TerminationRequested,
    exit_on_interrupt,
)


@pytest.mark.parametrize(
    ("raised", "code"),
    [
        (KeyboardInterrupt, EXIT_INTERRUPTED),
        (InterruptRequested, EXIT_INTERRUPTED),
        (TerminationRequested, EXIT_TERMINATED),
    ],
)
def test_interrupts_map_to_exit_codes(raised: type[BaseException], code: int) -> None:
    with pytest.raises(typer.Exit) as exc_info:
        with exit_on_interrupt(ConsoleReporter(color=False)):
            raise raised()

    assert exc_info.value.exit_code == code


def test_sigterm_raises_termination_inside_context() -> None:
    with pytest.raises(typer.Exit) as exc_info:
        with exit_on_interrupt(ConsoleReporter(color=False)):
            signal.raise_signal(signal.SIGTERM)

    assert exc_info.value.exit_code == EXIT_TERMINATED


def test_previous_handler_is_restored() -> None:
    previous = signal.getsignal(signal.SIGTERM)

    with exit_on_interrupt(ConsoleReporter(color=False)):
        assert signal.getsignal(signal.SIGTERM) is not previous

    assert signal.getsignal(signal.SIGTERM) is previous


def test_other_errors_pass_through() -> None:
    with pytest.raises(RuntimeError):
        with exit_on_interrupt(ConsoleReporter(color=False)):
            raise RuntimeError("unrelated")
