from __future__ import annotations

import os
from typing import Annotated

import typer

from dotsetup.common import LoggingConfig, create_logger, setup_cli_logging
from dotsetup.config import FileConfigStore
from dotsetup.settings import settings

from .commands import config as config_commands
from .commands import install as install_commands

logger = create_logger("cli")

app = typer.Typer(
    help="Set up git prompt and vim dotfiles on this host.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(config_commands.app, name="config")
app.command("git-prompt")(install_commands.git_prompt)
app.command("vim")(install_commands.vim)
app.command("vim-build")(install_commands.vim_build)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{settings.app.project_name} version {settings.app.version}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def _root_callback(
    ctx: typer.Context,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = False,
) -> None:
    # Respect NO_COLOR environment variable and --no-color flag
    color = None
    if no_color or os.getenv("NO_COLOR"):
        ctx.color = False
        color = False
    ctx.obj = install_commands.CliState(color=color)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _setup_logging() -> None:
    config_store = FileConfigStore(settings.paths)
    config = config_store.load().unwrap_or(None)
    logging_config = config.logging if config else LoggingConfig()

    if logging_config.enabled:
        setup_cli_logging(
            app_info=settings.app,
            config=logging_config,
            paths=settings.paths,
        )
        logger.debug("CLI logging initialized", config=logging_config.model_dump())


def main() -> None:
    """Entrypoint for the dotsetup CLI."""
    _setup_logging()
    app()
