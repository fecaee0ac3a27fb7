from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from dotsetup.config import DotsetupConfig
from dotsetup.config.loader import load_config_file, validate_config
from dotsetup.config.models import (
    ConfigIOError,
    ConfigScope,
    ConfigValidationError,
    ConfigYamlError,
)


def _write_yaml(path: Path, data: object) -> None:
    path.write_text(yaml.dump(data))


def test_load_success(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    _write_yaml(config_path, {"install": {"prefix": "~/opt", "jobs": 2}, "logging": {"log_level": "DEBUG"}})

    config = load_config_file(config_path).unwrap()

    assert config.install.prefix == "~/opt"
    assert config.install.jobs == 2
    assert config.logging.log_level == "DEBUG"
    assert config.install.rc_file == "~/.bashrc"


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    result = load_config_file(tmp_path / "missing.yaml")

    assert result.unwrap() == DotsetupConfig()


def test_load_empty_file_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config_file(path).unwrap() == DotsetupConfig()


def test_load_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("install: [")

    result = load_config_file(path)

    error = result.unwrap_err()
    assert isinstance(error, ConfigYamlError)
    assert error.scope is ConfigScope.GLOBAL
    assert error.path == path
    assert error.line is not None
    assert error.message


def test_load_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    _write_yaml(path, ["not", "a", "mapping"])

    error = load_config_file(path).unwrap_err()

    assert isinstance(error, ConfigValidationError)
    assert error.message == "Configuration root must be a mapping of keys to values."


def test_load_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    _write_yaml(path, {"install": {"prefx": "~/opt"}})

    error = load_config_file(path).unwrap_err()

    assert isinstance(error, ConfigValidationError)
    assert error.field == "install.prefx"
    assert error.path == path


@pytest.mark.parametrize(
    ("data", "field"),
    [
        ({"install": {"vim_version": "nightly"}}, "install.vim_version"),
        ({"install": {"jobs": 0}}, "install.jobs"),
        ({"sources": {"vimrc_url": "ftp://example.com/vimrc"}}, "sources.vimrc_url"),
    ],
)
def test_validate_config_rejects_bad_values(data: dict[str, object], field: str) -> None:
    error = validate_config(data, scope=ConfigScope.ENVIRONMENT).unwrap_err()

    assert isinstance(error, ConfigValidationError)
    assert error.scope is ConfigScope.ENVIRONMENT
    assert error.field == field


def test_load_handles_io_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "io.yaml"
    _write_yaml(path, {})

    original = Path.read_text

    def fake_read_text(self: Path, *args, **kwargs):
        if self == path:
            raise OSError("boom")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", fake_read_text, raising=False)

    error = load_config_file(path).unwrap_err()

    assert isinstance(error, ConfigIOError)
    assert error.scope is ConfigScope.GLOBAL
    assert error.path == path
    assert error.message == "boom"
