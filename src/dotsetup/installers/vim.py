"""Install vim (when missing) and deploy ~/.vimrc."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from result import Err, Ok, Result

from dotsetup.build import BuildLocations, SourceBuildPipeline, SystemPackageInstaller, detect_package_manager
from dotsetup.common import create_logger
from dotsetup.deploy import (
    BackupStyle,
    BlockOutcome,
    Decision,
    DeploymentPlan,
    DeploymentTarget,
    PromptSet,
    TargetKind,
    append_block,
    check_environment,
)
from dotsetup.deploy.rcfile import path_block

from .base import InstallError, InstallerContext, InstallOutcome, InstallStatus

logger = create_logger("installers.vim")

TOTAL_STEPS = 3

PROMPTS = PromptSet(
    backup_prompt="Back up the existing .vimrc and overwrite it?",
    no_backup_prompt="Overwrite without a backup?",
    declined=Decision.ABORT,
)


def on_search_path(directory: Path) -> bool:
    """Return True when ``directory`` is an entry of the current $PATH."""
    entries = os.environ.get("PATH", "").split(os.pathsep)
    return str(directory) in entries


class VimInstaller:
    name = "vim"

    def __init__(
        self,
        context: InstallerContext,
        pipeline: SourceBuildPipeline,
        packages: SystemPackageInstaller,
    ) -> None:
        self._context = context
        self._pipeline = pipeline
        self._packages = packages

    def plan(self) -> DeploymentPlan:
        return DeploymentPlan(
            name=self.name,
            targets=(
                DeploymentTarget(
                    kind=TargetKind.VIM_CONFIG,
                    source_url=self._context.config.sources.vimrc_url,
                    destination=self._context.home / ".vimrc",
                ),
            ),
            backup_style=BackupStyle.SIBLING,
        )

    def run(self, *, force: bool) -> Result[InstallOutcome, InstallError]:
        ctx = self._context
        reporter = ctx.reporter
        logger.info("Starting vim setup", force=force)

        reporter.header("Vim Setup")

        reporter.step(1, TOTAL_STEPS, "Checking environment...")
        checked = check_environment((), ctx.home)
        if checked.is_err():
            return Err(checked.unwrap_err())

        outcome = InstallOutcome(installer=self.name)
        if shutil.which("vim") is None:
            reporter.warn("vim is not installed")
            installed = self._install_vim()
            if installed.is_err():
                return Err(installed.unwrap_err())
            outcome = installed.unwrap()

        reporter.step(2, TOTAL_STEPS, "Checking existing .vimrc...")
        plan = self.plan()
        if not plan.inspect()[0].present:
            reporter.info(".vimrc does not exist; creating a new one")

        prepared = ctx.workflow.prepare(plan, force=force, confirm=ctx.confirm, prompts=PROMPTS)
        if prepared.is_err():
            return Err(prepared.unwrap_err())
        report = prepared.unwrap()
        if report.decision is Decision.ABORT:
            reporter.info("Setup cancelled")
            return Ok(outcome.model_copy(update={"status": InstallStatus.ABORTED, "deployments": [report]}))

        reporter.step(3, TOTAL_STEPS, "Downloading .vimrc...")
        delivered = ctx.workflow.deliver(plan, report)
        if delivered.is_err():
            return Err(delivered.unwrap_err())

        reporter.success("vim setup complete")
        reporter.info(f"Placed at: {plan.targets[0].destination}")
        reporter.info("To review the settings: vim ~/.vimrc")

        return Ok(outcome.model_copy(update={"deployments": [delivered.unwrap()]}))

    def _install_vim(self) -> Result[InstallOutcome, InstallError]:
        """Install vim with the system package manager, falling back to a source build."""
        reporter = self._context.reporter

        if not self._packages.sudo_available():
            reporter.warn("sudo is not available; building vim from source")
            return self._build_from_source()

        manager = detect_package_manager()
        if manager is None:
            reporter.warn("No supported package manager found; building vim from source")
            return self._build_from_source()

        reporter.info(f"Installing vim with {manager.name}...")
        installed = self._packages.install("vim", manager)
        if installed.is_err():
            return Err(installed.unwrap_err())

        reporter.success("vim installation complete")
        return Ok(InstallOutcome(installer=self.name, binary=_which("vim")))

    def _build_from_source(self) -> Result[InstallOutcome, InstallError]:
        ctx = self._context
        install = ctx.config.install
        sources = ctx.config.sources
        locations = BuildLocations(prefix=ctx.prefix, build_dir=ctx.build_dir)

        ctx.reporter.info("Building vim from source (this can take a few minutes)...")
        built = self._pipeline.build_vim_release(
            locations,
            version=install.vim_version,
            tags_url=sources.vim_tags_url,
            archive_url=sources.vim_archive_url,
        )
        if built.is_err():
            return Err(built.unwrap_err())
        binary = built.unwrap()
        ctx.reporter.success(f"vim source build complete → {binary}")

        blocks: dict[str, BlockOutcome] = {}
        bin_dir = locations.prefix / "bin"
        if on_search_path(bin_dir):
            logger.debug("Prefix already on PATH", bin_dir=str(bin_dir))
        else:
            block = path_block(locations.prefix)
            existed = ctx.rc_file.exists()
            appended = append_block(ctx.rc_file, block)
            if appended.is_err():
                return Err(appended.unwrap_err())
            if not appended.unwrap():
                blocks[block.name] = BlockOutcome.ALREADY_PRESENT
            else:
                blocks[block.name] = BlockOutcome.APPENDED if existed else BlockOutcome.CREATED
                ctx.reporter.info(f"Added the PATH setting to {ctx.display(ctx.rc_file)}")
                ctx.reporter.info(f"To apply it: source {ctx.display(ctx.rc_file)}")

        return Ok(InstallOutcome(installer=self.name, blocks=blocks, binary=binary))


def _which(command: str) -> Path | None:
    found = shutil.which(command)
    return Path(found) if found else None
