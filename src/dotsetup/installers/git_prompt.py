"""Install git-completion.bash and git-prompt.sh and source them from the rc file."""

from __future__ import annotations

from result import Err, Ok, Result

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
    check_environment,
    ensure_block,
)
from dotsetup.deploy.rcfile import git_prompt_block

from .base import InstallError, InstallerContext, InstallOutcome, InstallStatus

logger = create_logger("installers.git_prompt")

TOTAL_STEPS = 4
EXECUTABLE = 0o755

REQUIREMENTS = (ToolRequirement("git"),)

PROMPTS = PromptSet(
    backup_prompt="Back up the existing files and overwrite them?",
    declined=Decision.ABORT,
)


class GitPromptInstaller:
    name = "git-prompt"

    def __init__(self, context: InstallerContext) -> None:
        self._context = context

    def plan(self) -> DeploymentPlan:
        sources = self._context.config.sources
        home = self._context.home
        return DeploymentPlan(
            name=self.name,
            targets=(
                DeploymentTarget(
                    kind=TargetKind.GIT_COMPLETION,
                    source_url=sources.git_completion_url,
                    destination=home / ".git-completion.bash",
                    mode=EXECUTABLE,
                ),
                DeploymentTarget(
                    kind=TargetKind.GIT_PROMPT,
                    source_url=sources.git_prompt_url,
                    destination=home / ".git-prompt.sh",
                    mode=EXECUTABLE,
                ),
            ),
            backup_style=BackupStyle.DIRECTORY,
            backup_dir_prefix=".git-prompt-backup",
        )

    def run(self, *, force: bool) -> Result[InstallOutcome, InstallError]:
        ctx = self._context
        reporter = ctx.reporter
        logger.info("Starting git prompt setup", force=force)

        reporter.header("Git Prompt Setup")

        reporter.step(1, TOTAL_STEPS, "Checking environment...")
        checked = check_environment(REQUIREMENTS, ctx.home)
        if checked.is_err():
            return Err(checked.unwrap_err())
        reporter.success("Environment check complete")

        reporter.step(2, TOTAL_STEPS, "Checking existing files...")
        plan = self.plan()
        if not any(state.present for state in plan.inspect()):
            reporter.info("No existing files found; downloading fresh copies")

        prepared = ctx.workflow.prepare(plan, force=force, confirm=ctx.confirm, prompts=PROMPTS)
        if prepared.is_err():
            return Err(prepared.unwrap_err())
        report = prepared.unwrap()
        if report.decision is Decision.ABORT:
            reporter.info("Setup cancelled")
            return Ok(InstallOutcome(installer=self.name, status=InstallStatus.ABORTED, deployments=[report]))

        reporter.step(3, TOTAL_STEPS, "Downloading files...")
        delivered = ctx.workflow.deliver(plan, report)
        if delivered.is_err():
            return Err(delivered.unwrap_err())
        for target in plan.targets:
            reporter.info(f"Placed at: {target.destination}")

        reporter.step(4, TOTAL_STEPS, f"Checking {ctx.display(ctx.rc_file)} configuration...")
        block = git_prompt_block()
        block_result = ensure_block(
            ctx.rc_file,
            block,
            force=force,
            confirm=ctx.confirm,
            add_prompt=f"Add the git prompt configuration to {ctx.display(ctx.rc_file)}?",
            create_prompt=f"{ctx.display(ctx.rc_file)} does not exist. Create it with the git prompt configuration?",
        )
        if block_result.is_err():
            return Err(block_result.unwrap_err())
        self._report_block(block_result.unwrap(), block.text)

        reporter.success("git prompt setup complete")
        reporter.info(f"To apply the settings: source {ctx.display(ctx.rc_file)}")

        return Ok(
            InstallOutcome(
                installer=self.name,
                deployments=[delivered.unwrap()],
                blocks={block.name: block_result.unwrap()},
            )
        )

    def _report_block(self, outcome: BlockOutcome, text: str) -> None:
        ctx = self._context
        rc_display = ctx.display(ctx.rc_file)
        match outcome:
            case BlockOutcome.ALREADY_PRESENT:
                ctx.reporter.success(f"git prompt configuration already present in {rc_display}")
            case BlockOutcome.APPENDED:
                ctx.reporter.success(f"Added the git prompt configuration to {rc_display}")
            case BlockOutcome.CREATED:
                ctx.reporter.success(f"Created {rc_display} with the git prompt configuration")
            case BlockOutcome.DECLINED:
                ctx.reporter.warn(f"Skipped updating {rc_display}")
                ctx.print_manual_block(text)
