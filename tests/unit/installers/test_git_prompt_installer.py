from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeFetcher, ImmediateProgress, RecordingReporter, ScriptedConfirmer

from dotsetup.config import DotsetupConfig
from dotsetup.deploy import BlockOutcome, Decision, FetchFailedError, MissingPrerequisiteError
from dotsetup.installers import GitPromptInstaller, InstallerContext, InstallStatus

CONFIG = DotsetupConfig()


def _tools(monkeypatch: pytest.MonkeyPatch, *names: str) -> None:
    monkeypatch.setattr(
        "dotsetup.deploy.prerequisites.shutil.which",
        lambda name: f"/usr/bin/{name}" if name in names else None,
    )


def _installer(
    home: Path,
    reporter: RecordingReporter,
    progress: ImmediateProgress,
    fixed_clock,
    *,
    fetcher: FakeFetcher | None = None,
    confirm=None,
) -> GitPromptInstaller:
    context = InstallerContext(
        config=CONFIG,
        home=home,
        reporter=reporter,
        progress=progress,
        fetcher=fetcher or FakeFetcher(),
        confirm=confirm,
        clock=fixed_clock,
    )
    return GitPromptInstaller(context)


@pytest.fixture(autouse=True)
def _git_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    _tools(monkeypatch, "git")


def test_fresh_host_forced(home: Path, reporter, progress, fixed_clock) -> None:
    outcome = _installer(home, reporter, progress, fixed_clock).run(force=True).unwrap()

    assert outcome.status is InstallStatus.COMPLETED
    assert (home / ".git-completion.bash").exists()
    assert (home / ".git-prompt.sh").exists()
    assert (home / ".git-prompt.sh").stat().st_mode & 0o111
    bashrc = (home / ".bashrc").read_text()
    assert bashrc.count("# Git prompt configuration") == 1
    assert ".git-completion.bash" in bashrc
    assert ".git-prompt.sh" in bashrc
    assert outcome.blocks == {"git-prompt": BlockOutcome.CREATED}
    assert outcome.deployments[0].decision is Decision.FRESH
    assert [line for line in reporter.lines if line[0] == "step"][-1] == (
        "step",
        "[4/4] Checking ~/.bashrc configuration...",
    )


def test_second_run_does_not_duplicate_block(home: Path, reporter, progress, fixed_clock) -> None:
    _installer(home, reporter, progress, fixed_clock).run(force=True).unwrap()
    outcome = _installer(home, reporter, progress, fixed_clock).run(force=True).unwrap()

    assert outcome.blocks == {"git-prompt": BlockOutcome.ALREADY_PRESENT}
    assert (home / ".bashrc").read_text().count("# Git prompt configuration") == 1
    assert outcome.deployments[0].decision is Decision.BACKUP_THEN_OVERWRITE
    assert (home / ".git-prompt-backup.20240517093015" / ".git-prompt.sh").exists()


def test_declined_backup_cancels_without_changes(home: Path, reporter, progress, fixed_clock) -> None:
    (home / ".git-prompt.sh").write_text("mine\n")
    fetcher = FakeFetcher()
    confirm = ScriptedConfirmer(False)

    outcome = _installer(home, reporter, progress, fixed_clock, fetcher=fetcher, confirm=confirm).run(
        force=False
    ).unwrap()

    assert outcome.status is InstallStatus.ABORTED
    assert (home / ".git-prompt.sh").read_text() == "mine\n"
    assert not (home / ".bashrc").exists()
    assert fetcher.calls == []
    assert "Setup cancelled" in reporter.messages("info")
    assert len(confirm.prompts) == 1


def test_declined_rc_update_prints_manual_snippet(home: Path, reporter, progress, fixed_clock) -> None:
    (home / ".bashrc").write_text("# my bashrc\n")
    confirm = ScriptedConfirmer(False)

    outcome = _installer(home, reporter, progress, fixed_clock, confirm=confirm).run(force=False).unwrap()

    assert outcome.blocks == {"git-prompt": BlockOutcome.DECLINED}
    assert (home / ".bashrc").read_text() == "# my bashrc\n"
    assert confirm.prompts == ["Add the git prompt configuration to ~/.bashrc?"]
    assert any("__git_ps1" in text for text in reporter.messages("detail"))


def test_missing_rc_file_asks_to_create_it(home: Path, reporter, progress, fixed_clock) -> None:
    confirm = ScriptedConfirmer(True)

    outcome = _installer(home, reporter, progress, fixed_clock, confirm=confirm).run(force=False).unwrap()

    assert outcome.blocks == {"git-prompt": BlockOutcome.CREATED}
    assert confirm.prompts == ["~/.bashrc does not exist. Create it with the git prompt configuration?"]


def test_missing_git_fails_before_any_write(home: Path, reporter, progress, fixed_clock, monkeypatch) -> None:
    _tools(monkeypatch)
    fetcher = FakeFetcher()

    result = _installer(home, reporter, progress, fixed_clock, fetcher=fetcher).run(force=True)

    assert isinstance(result.unwrap_err(), MissingPrerequisiteError)
    assert fetcher.calls == []
    assert list(home.iterdir()) == []


def test_failed_download_skips_rc_update(home: Path, reporter, progress, fixed_clock) -> None:
    fetcher = FakeFetcher(failing={CONFIG.sources.git_prompt_url})

    result = _installer(home, reporter, progress, fixed_clock, fetcher=fetcher).run(force=True)

    assert isinstance(result.unwrap_err(), FetchFailedError)
    assert (home / ".git-completion.bash").exists()
    assert not (home / ".bashrc").exists()
