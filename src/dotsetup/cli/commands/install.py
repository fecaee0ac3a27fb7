"""Installer commands: git-prompt, vim and vim-build."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Annotated

import httpx
import typer
from rich.console import Console

from dotsetup.build import BuildError, CommandRunner, PackageInstallError, SourceBuildPipeline, SystemPackageInstaller
from dotsetup.common import create_logger, get_home_directory
from dotsetup.config import FileConfigStore
from dotsetup.constants import APP_NAME, APP_VERSION
from dotsetup.deploy import (
    BackupFailedError,
    FetchFailedError,
    HttpFetcher,
    MissingPrerequisiteError,
    PermissionDeniedError,
    RcFileError,
)
from dotsetup.installers import (
    GitPromptInstaller,
    InstallError,
    Installer,
    InstallerContext,
    InstallStatus,
    VimInstaller,
    VimSourceBuildInstaller,
)
from dotsetup.settings import settings
from dotsetup.ui import ConsoleReporter, Spinner, exit_on_interrupt, terminal_confirm

from .config import handle_config_error

logger = create_logger("cli.install")

ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Skip all confirmations; existing files are always backed up first."),
]


@dataclass(frozen=True)
class CliState:
    """Options given to the root command, shared with every subcommand."""

    color: bool | None = None


@dataclass(frozen=True)
class Session:
    context: InstallerContext
    pipeline: SourceBuildPipeline
    packages: SystemPackageInstaller


def create_http_client(timeout: float) -> httpx.Client:
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": f"{APP_NAME}/{APP_VERSION}"},
    )


def git_prompt(ctx: typer.Context, force: ForceOption = False) -> None:
    """Install git completion and the git-aware prompt into your shell.

    Examples:

        # Interactive setup
        dotsetup git-prompt

        # No questions asked; existing files are backed up
        dotsetup git-prompt --force
    """
    _run(ctx, lambda session: GitPromptInstaller(session.context), force=force)


def vim(ctx: typer.Context, force: ForceOption = False) -> None:
    """Deploy ~/.vimrc, installing vim first when it is missing."""
    _run(ctx, lambda session: VimInstaller(session.context, session.pipeline, session.packages), force=force)


def vim_build(ctx: typer.Context, force: ForceOption = False) -> None:
    """Build ncurses and vim from source into ~/local, then configure the shell and ~/.vimrc."""
    _run(ctx, lambda session: VimSourceBuildInstaller(session.context, session.pipeline), force=force)


def _run(ctx: typer.Context, factory: Callable[[Session], Installer], *, force: bool) -> None:
    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    reporter = ConsoleReporter(color=state.color)

    with exit_on_interrupt(reporter), _session(reporter, state) as session:
        installer = factory(session)
        result = installer.run(force=force)

    if result.is_err():
        _handle_error(result.unwrap_err(), reporter)
        raise typer.Exit(code=1)

    outcome = result.unwrap()
    logger.info("Installer finished", installer=outcome.installer, status=outcome.status.value)
    if outcome.status is InstallStatus.ABORTED:
        raise typer.Exit(code=0)


@contextmanager
def _session(reporter: ConsoleReporter, state: CliState) -> Iterator[Session]:
    loaded = FileConfigStore(settings.paths).load()
    if loaded.is_err():
        handle_config_error(loaded.unwrap_err())
        raise typer.Exit(code=1)
    config = loaded.unwrap()

    console = Console(no_color=state.color is False, stderr=True)
    spinner = Spinner(reporter, console)

    with create_http_client(config.install.http_timeout) as client:
        fetcher = HttpFetcher(client)
        runner = CommandRunner(spinner)
        context = InstallerContext(
            config=config,
            home=get_home_directory(),
            reporter=reporter,
            progress=spinner,
            fetcher=fetcher,
            confirm=terminal_confirm,
        )
        yield Session(
            context=context,
            pipeline=SourceBuildPipeline(runner, fetcher, spinner, client, jobs=config.install.build_jobs()),
            packages=SystemPackageInstaller(runner),
        )


def _handle_error(error: InstallError, reporter: ConsoleReporter) -> None:
    match error:
        case MissingPrerequisiteError() | PermissionDeniedError() | RcFileError():
            reporter.error(error.message)
        case BackupFailedError():
            reporter.error("Aborting; existing files were left untouched")
        case FetchFailedError(fetched=fetched):
            reporter.error(error.message)
            for path in fetched:
                reporter.detail(f"  downloaded: {path}")
        case BuildError(package=package, stage=stage, output_tail=tail):
            reporter.error(f"{package} build failed during {stage.value}: {error.message}")
            if tail:
                reporter.detail("\n".join(tail))
        case PackageInstallError(manager=manager):
            reporter.error(f"{error.message} (via {manager})")
