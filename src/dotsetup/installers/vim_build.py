"""Build ncurses and vim from source into the user prefix, then configure them."""

from __future__ import annotations

import shutil

from result import Err, Ok, Result

from dotsetup.build import BuildLocations, SourceBuildPipeline
from dotsetup.common import create_logger
from dotsetup.deploy import (
    BackupStyle,
    BlockOutcome,
    Decision,
    DeploymentPlan,
    DeploymentTarget,
    PromptSet,
    TargetKind,
    ToolRequirement,
    append_block,
    check_environment,
)
from dotsetup.deploy.rcfile import path_block, vi_alias_block

from .base import InstallError, InstallerContext, InstallOutcome

logger = create_logger("installers.vim_build")

TOTAL_STEPS = 5

REQUIREMENTS = (
    ToolRequirement("git"),
    ToolRequirement("make"),
    ToolRequirement("gcc", alternatives=("cc",)),
)

PROMPTS = PromptSet(
    backup_prompt="Back up the existing .vimrc and overwrite it?",
    declined=Decision.SKIP,
    fresh_prompt="Download and place .vimrc?",
)


class VimSourceBuildInstaller:
    name = "vim-build"

    def __init__(self, context: InstallerContext, pipeline: SourceBuildPipeline) -> None:
        self._context = context
        self._pipeline = pipeline

    @property
    def locations(self) -> BuildLocations:
        return BuildLocations(prefix=self._context.prefix, build_dir=self._context.build_dir)

    def plan(self) -> DeploymentPlan:
        return DeploymentPlan(
            name=self.name,
            targets=(
                DeploymentTarget(
                    kind=TargetKind.VIM_CONFIG,
                    source_url=self._context.config.sources.source_build_vimrc_url,
                    destination=self._context.home / ".vimrc",
                ),
            ),
            backup_style=BackupStyle.SIBLING,
        )

    def run(self, *, force: bool) -> Result[InstallOutcome, InstallError]:
        ctx = self._context
        reporter = ctx.reporter
        logger.info("Starting vim source build setup", force=force)

        reporter.header("Vim Source Build Setup")

        reporter.step(1, TOTAL_STEPS, "Checking environment...")
        checked = check_environment(REQUIREMENTS, ctx.home)
        if checked.is_err():
            return Err(checked.unwrap_err())

        skip_build = False
        existing = shutil.which("vim")
        if existing is not None:
            reporter.warn(f"vim is already installed: {existing}")
            if not force and not ctx.ask("Reinstall vim?"):
                reporter.warn("Skipping the vim installation")
                skip_build = True
        reporter.success("Environment check complete")

        reporter.step(2, TOTAL_STEPS, "Installing ncurses...")
        skip_build = self._skip_or_confirm(skip_build, force=force, prompt="Install ncurses?", package="ncurses")
        if not skip_build:
            built = self._pipeline.build_ncurses(self.locations, archive_url=ctx.config.sources.ncurses_archive_url)
            if built.is_err():
                return Err(built.unwrap_err())
            reporter.success("ncurses build complete")
            reporter.info(f"Installed into: {ctx.prefix}")

        reporter.step(3, TOTAL_STEPS, "Installing vim...")
        skip_build = self._skip_or_confirm(skip_build, force=force, prompt="Install vim?", package="vim")
        binary = None
        if not skip_build:
            built = self._pipeline.build_vim_head(
                self.locations,
                repository_url=ctx.config.sources.vim_repository_url,
            )
            if built.is_err():
                return Err(built.unwrap_err())
            binary = built.unwrap()
            reporter.success(f"vim installation complete → {binary}")

        reporter.step(4, TOTAL_STEPS, "Checking shell configuration...")
        blocks: dict[str, BlockOutcome] = {}
        rc_display = ctx.display(ctx.rc_file)
        if force or ctx.ask(f"Add PATH and alias settings to {rc_display}?"):
            for block in (path_block(ctx.prefix), vi_alias_block()):
                existed = ctx.rc_file.exists()
                appended = append_block(ctx.rc_file, block)
                if appended.is_err():
                    return Err(appended.unwrap_err())
                if appended.unwrap():
                    blocks[block.name] = BlockOutcome.APPENDED if existed else BlockOutcome.CREATED
                    reporter.success(f"Added {block.name} to {rc_display}")
                else:
                    blocks[block.name] = BlockOutcome.ALREADY_PRESENT
                    reporter.info(f"{block.name} already configured in {rc_display}")
        else:
            reporter.warn("Skipping the shell configuration")

        reporter.step(5, TOTAL_STEPS, "Setting up .vimrc...")
        plan = self.plan()
        if not plan.inspect()[0].present:
            reporter.info(".vimrc does not exist; creating a new one")
        deployed = ctx.workflow.run(plan, force=force, confirm=ctx.confirm, prompts=PROMPTS)
        if deployed.is_err():
            return Err(deployed.unwrap_err())
        report = deployed.unwrap()
        if report.decision is Decision.SKIP:
            reporter.warn("Skipping the .vimrc setup")

        reporter.success("vim setup complete")
        reporter.info(f"Installed at: {self.locations.vim_binary}")
        reporter.info(f"Config file: {plan.targets[0].destination}")
        reporter.info(f"To apply the settings: source {rc_display}")

        return Ok(InstallOutcome(installer=self.name, deployments=[report], blocks=blocks, binary=binary))

    def _skip_or_confirm(self, skip_build: bool, *, force: bool, prompt: str, package: str) -> bool:
        """Return the updated skip flag; declining a build skips every later build too."""
        if skip_build:
            self._context.reporter.warn(f"Skipping the {package} installation")
            return True
        if force or self._context.ask(prompt):
            return False
        self._context.reporter.warn(f"Skipping the {package} installation")
        return True
