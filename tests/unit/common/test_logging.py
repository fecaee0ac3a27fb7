from __future__ import annotations

import json
from pathlib import Path

import pytest
from loguru import logger

from dotsetup.common import (
    AppInfo,
    AppPaths,
    LoggingConfig,
    create_logger,
    disable_library_logging,
    enable_library_logging,
    setup_cli_logging,
)
from dotsetup.common.logging import get_default_log_file_path


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()
    disable_library_logging()


def test_default_log_file_lives_in_data_directory(home: Path, tmp_path: Path) -> None:
    assert get_default_log_file_path(AppPaths()) == tmp_path / "xdg-data" / "dotsetup" / "logs" / "dotsetup.log"


def test_cli_logging_writes_scoped_records(home: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    handler_id = setup_cli_logging(
        app_info=AppInfo(),
        config=LoggingConfig(log_file=str(log_file), log_level="DEBUG"),
        paths=AppPaths(),
    )

    create_logger("deploy.workflow").info("Deployment complete", plan="vim")
    logger.remove(handler_id)

    content = log_file.read_text()
    assert "Deployment complete" in content
    assert "deploy.workflow" in content


def test_cli_logging_json_format(home: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "run.jsonl"
    handler_id = setup_cli_logging(
        app_info=AppInfo(),
        config=LoggingConfig(log_file=str(log_file), format="json"),
        paths=AppPaths(),
    )

    create_logger("build.pipeline").warning("Build tools missing", tools=["make"])
    logger.remove(handler_id)

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    record = next(r for r in records if r["record"]["message"] == "Build tools missing")
    assert record["record"]["extra"]["scope"] == "build.pipeline"
    assert record["record"]["extra"]["tools"] == ["make"]


def test_logging_config_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        LoggingConfig.model_validate({"log_level": "LOUD"})


def test_logging_config_accepts_lowercase_level() -> None:
    assert LoggingConfig.model_validate({"log_level": "debug"}).log_level == "DEBUG"


def test_log_file_setting_expands_home(home: Path) -> None:
    config = LoggingConfig(log_file="~/logs/dotsetup.log")

    assert config.resolve_log_file(AppPaths()) == home / "logs" / "dotsetup.log"


def test_library_logging_writes_scope_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    handler_id = enable_library_logging("debug")

    create_logger("deploy.rcfile").debug("Config block appended")
    logger.remove(handler_id)

    err = capsys.readouterr().err
    assert "deploy.rcfile" in err
    assert "Config block appended" in err
