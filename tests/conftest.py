from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from result import Err, Ok, Result

from dotsetup.deploy import NetworkError

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 15)


class RecordingReporter:
    """Reporter that keeps every line instead of printing it."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def header(self, text: str) -> None:
        self.lines.append(("header", text))

    def step(self, current: int, total: int, message: str) -> None:
        self.lines.append(("step", f"[{current}/{total}] {message}"))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def success(self, message: str) -> None:
        self.lines.append(("success", message))

    def warn(self, message: str) -> None:
        self.lines.append(("warn", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def detail(self, text: str) -> None:
        self.lines.append(("detail", text))

    def messages(self, level: str) -> list[str]:
        return [text for kind, text in self.lines if kind == level]


class ImmediateProgress:
    """Runs operations without any indicator."""

    def __init__(self) -> None:
        self.tracked: list[str] = []
        self.waited: list[str] = []

    def track[T, E](self, message: str, operation: Callable[[], Result[T, E]]) -> Result[T, E]:
        self.tracked.append(message)
        return operation()

    def wait(self, message: str, process: subprocess.Popen[bytes]) -> int:
        self.waited.append(message)
        return process.wait()


class FakeFetcher:
    """Writes canned content per URL; URLs listed in ``failing`` return a NetworkError."""

    def __init__(self, contents: dict[str, str] | None = None, failing: set[str] | None = None) -> None:
        self.contents = contents or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, Path]] = []

    def fetch(self, url: str, destination: Path, *, mode: int | None = None) -> Result[Path, NetworkError]:
        self.calls.append((url, destination))
        if url in self.failing:
            return Err(NetworkError(url=url, message=f"HTTP 404 while downloading {url}"))
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(self.contents.get(url, f"downloaded from {url}\n"), encoding="utf-8")
        if mode is not None:
            destination.chmod(mode)
        return Ok(destination)


class ScriptedConfirmer:
    """Answers prompts from a fixed list and records what was asked."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str, default: bool) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh home directory with HOME and the XDG variables pointing inside tmp_path."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for key in list(os.environ):
        if key.startswith("DOTSETUP_CONFIG__"):
            monkeypatch.delenv(key, raising=False)
    return home_dir


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def progress() -> ImmediateProgress:
    return ImmediateProgress()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
