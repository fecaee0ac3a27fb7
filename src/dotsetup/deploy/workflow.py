"""Decide, back up, fetch and report for one deployment plan."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import partial

from result import Err, Ok, Result

from dotsetup.common import create_logger

from .backup import backup_file, backup_files_to_directory
from .models import (
    BackupFailedError,
    BackupRecord,
    BackupStyle,
    Decision,
    DeploymentError,
    DeploymentPlan,
    DeploymentReport,
    ExistingFileState,
    FetchFailedError,
    NetworkError,
)
from .policy import PromptSet, decide
from .protocol import Confirmer, Fetcher, Progress, Reporter

logger = create_logger("deploy.workflow")


class DeploymentWorkflow:
    """Deployment workflow engine shared by every installer.

    ``prepare`` inspects the destinations, takes the decision and writes any
    backup; ``deliver`` fetches the targets. ``run`` does both. Nothing is
    fetched unless the backup (when one was chosen) succeeded.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        reporter: Reporter,
        progress: Progress,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._fetcher = fetcher
        self._reporter = reporter
        self._progress = progress
        self._clock = clock

    def run(
        self,
        plan: DeploymentPlan,
        *,
        force: bool,
        confirm: Confirmer | None,
        prompts: PromptSet,
    ) -> Result[DeploymentReport, DeploymentError]:
        return self.prepare(plan, force=force, confirm=confirm, prompts=prompts).and_then(
            partial(self.deliver, plan)
        )

    def prepare(
        self,
        plan: DeploymentPlan,
        *,
        force: bool,
        confirm: Confirmer | None,
        prompts: PromptSet,
    ) -> Result[DeploymentReport, BackupFailedError]:
        logger.info("Preparing deployment", plan=plan.name, force=force)

        states = plan.inspect()
        for state in states:
            if state.present:
                self._reporter.warn(f"Existing file detected: {state.path}")

        decision = decide(states, force=force, confirm=confirm, prompts=prompts)
        report = DeploymentReport(plan=plan.name, decision=decision)

        match decision:
            case Decision.BACKUP_THEN_OVERWRITE:
                backup_result = self._backup(plan, states)
                if backup_result.is_err():
                    error = backup_result.unwrap_err()
                    self._reporter.error(error.message)
                    return Err(error)
                report = report.model_copy(update={"backups": backup_result.unwrap()})
                self._reporter.info(f"Backup created → {report.backup_location}")
            case Decision.OVERWRITE_NO_BACKUP:
                self._reporter.info("Continuing without a backup")
            case _:
                pass

        return Ok(report)

    def deliver(self, plan: DeploymentPlan, report: DeploymentReport) -> Result[DeploymentReport, FetchFailedError]:
        """Fetch every target of ``plan``; a no-op when the decision was SKIP or ABORT.

        Each target is fetched and reported independently, so one failed download
        does not prevent the others.
        """
        if not report.decision.fetches:
            logger.info("Deployment not performed", plan=plan.name, decision=report.decision.value)
            return Ok(report)

        fetched = []
        failures: list[NetworkError] = []

        for target in plan.targets:
            fetch = partial(self._fetcher.fetch, target.source_url, target.destination, mode=target.mode)
            result = self._progress.track(f"Downloading {target.display_name}", fetch)
            if result.is_ok():
                fetched.append(result.unwrap())
            else:
                error = result.unwrap_err()
                self._reporter.error(error.message)
                failures.append(error)

        if failures:
            logger.error("Deployment failed", plan=plan.name, failed=[failure.url for failure in failures])
            return Err(
                FetchFailedError(
                    failures=failures,
                    fetched=fetched,
                    message=f"{len(failures)} of {len(plan.targets)} downloads failed for {plan.name}",
                )
            )

        logger.success("Deployment complete", plan=plan.name, decision=report.decision.value)
        return Ok(report.model_copy(update={"fetched": fetched}))

    def _backup(
        self,
        plan: DeploymentPlan,
        states: list[ExistingFileState],
    ) -> Result[list[BackupRecord], BackupFailedError]:
        now = self._clock()
        present = [state.path for state in states if state.present]

        match plan.backup_style:
            case BackupStyle.DIRECTORY:
                return backup_files_to_directory(
                    present,
                    parent=plan.targets[0].destination.parent,
                    prefix=plan.backup_dir_prefix,
                    now=now,
                )
            case BackupStyle.SIBLING:
                records: list[BackupRecord] = []
                for path in present:
                    result = backup_file(path, now=now)
                    if result.is_err():
                        return Err(result.unwrap_err())
                    records.append(result.unwrap())
                return Ok(records)
