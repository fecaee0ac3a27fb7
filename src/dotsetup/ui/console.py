"""Leveled, colorized operator output."""

from __future__ import annotations

import typer

from dotsetup.common import create_logger

logger = create_logger("ui")

ICON_CHECK = "✓"
ICON_CROSS = "✗"
ICON_WARN = "⚠"
ICON_INFO = "ℹ"
ICON_ARROW = "→"

HEADER_WIDTH = 60


class ConsoleReporter:
    """Print progress for humans and mirror every line into the log."""

    def __init__(self, color: bool | None = None) -> None:
        self._color = color

    def header(self, text: str) -> None:
        typer.echo()
        typer.secho(text, bold=True, color=self._color)
        typer.secho("─" * HEADER_WIDTH, dim=True, color=self._color)

    def step(self, current: int, total: int, message: str) -> None:
        logger.info(message, step=current, total=total)
        typer.echo(typer.style(f"[{current}/{total}]", fg=typer.colors.CYAN) + f" {message}", color=self._color)

    def info(self, message: str) -> None:
        logger.info(message)
        typer.secho(f"{ICON_INFO}  {message}", fg=typer.colors.BLUE, color=self._color)

    def success(self, message: str) -> None:
        logger.success(message)
        typer.secho(f"{ICON_CHECK}  {message}", fg=typer.colors.GREEN, color=self._color)

    def warn(self, message: str) -> None:
        logger.warning(message)
        typer.secho(f"{ICON_WARN}  {message}", fg=typer.colors.YELLOW, err=True, color=self._color)

    def error(self, message: str) -> None:
        logger.error(message)
        typer.secho(f"{ICON_CROSS}  {message}", fg=typer.colors.RED, err=True, color=self._color)

    def detail(self, text: str) -> None:
        typer.secho(text, dim=True, color=self._color)
