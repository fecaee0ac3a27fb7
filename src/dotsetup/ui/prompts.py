"""Interactive yes/no confirmation."""

from __future__ import annotations

import typer

from .signals import InterruptRequested


def terminal_confirm(prompt: str, default: bool) -> bool:
    """Ask on the terminal; Ctrl-C or end of input at the prompt interrupts the run."""
    try:
        return typer.confirm(prompt, default=default)
    except typer.Abort as e:
        raise InterruptRequested() from e
