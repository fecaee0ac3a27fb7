from .console import ICON_ARROW, ConsoleReporter
from .prompts import terminal_confirm
from .signals import (
    EXIT_INTERRUPTED,
    EXIT_TERMINATED,
    InterruptRequested,
    TerminationRequested,
    exit_on_interrupt,
    install_signal_handlers,
)
from .spinner import Spinner

__all__ = [
    "EXIT_INTERRUPTED",
    "EXIT_TERMINATED",
    "ICON_ARROW",
    "ConsoleReporter",
    "InterruptRequested",
    "Spinner",
    "TerminationRequested",
    "exit_on_interrupt",
    "install_signal_handlers",
    "terminal_confirm",
]
