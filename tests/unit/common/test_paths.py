from __future__ import annotations

from pathlib import Path

import pytest

from dotsetup.common import (
    AppPaths,
    contract_home,
    expand_home,
    get_data_directory,
    get_global_config_root,
    get_home_directory,
)


def test_home_directory_honours_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_home_directory() == tmp_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("~", "/home/me"),
        ("~/.bashrc", "/home/me/.bashrc"),
        ("~/local/bin", "/home/me/local/bin"),
        ("/opt/vim", "/opt/vim"),
        ("relative/dir", "relative/dir"),
    ],
)
def test_expand_home(raw: str, expected: str) -> None:
    assert expand_home(raw, Path("/home/me")) == Path(expected)


def test_contract_home() -> None:
    home = Path("/home/me")

    assert contract_home(home / ".bashrc", home) == "~/.bashrc"
    assert contract_home(Path("/etc/profile"), home) == "/etc/profile"


def test_global_config_root_uses_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    assert get_global_config_root(AppPaths()) == tmp_path / "xdg" / "dotsetup"


def test_global_config_root_falls_back_to_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_global_config_root(AppPaths()) == tmp_path / ".config" / "dotsetup"


def test_data_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_data_directory(AppPaths()) == tmp_path / ".local" / "share" / "dotsetup"
