"""Copy existing files aside before they are overwritten."""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import BackupFailedError, BackupRecord

logger = create_logger("deploy.backup")

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def timestamp_suffix(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def backup_file(path: Path, *, now: datetime) -> Result[BackupRecord, BackupFailedError]:
    """Copy ``path`` to ``<path>.bak.<timestamp>`` next to it."""
    suffix = timestamp_suffix(now)
    backup_path = _unique(path.with_name(f"{path.name}.bak.{suffix}"))

    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        logger.error("Backup failed", path=str(path), error=str(e))
        return Err(BackupFailedError(path=path, message=f"Failed to back up {path}: {e}"))

    logger.info("Backup created", original=str(path), backup=str(backup_path))
    return Ok(BackupRecord(original_path=path, backup_path=backup_path, timestamp_suffix=suffix))


def backup_files_to_directory(
    paths: Sequence[Path],
    *,
    parent: Path,
    prefix: str,
    now: datetime,
) -> Result[list[BackupRecord], BackupFailedError]:
    """Copy every existing file in ``paths`` into ``<parent>/<prefix>.<timestamp>/``.

    Missing files are ignored; the directory is only created when at least one
    file exists.
    """
    existing = [path for path in paths if path.is_file()]
    if not existing:
        return Ok([])

    suffix = timestamp_suffix(now)
    backup_dir = _unique(parent / f"{prefix}.{suffix}")

    records: list[BackupRecord] = []
    try:
        backup_dir.mkdir(parents=True)
        for path in existing:
            target = backup_dir / path.name
            shutil.copy2(path, target)
            records.append(BackupRecord(original_path=path, backup_path=target, timestamp_suffix=suffix))
    except OSError as e:
        logger.error("Backup failed", directory=str(backup_dir), error=str(e))
        return Err(BackupFailedError(path=backup_dir, message=f"Failed to back up into {backup_dir}: {e}"))

    logger.info("Backup created", directory=str(backup_dir), files=len(records))
    return Ok(records)


def _unique(candidate: Path) -> Path:
    if not candidate.exists():
        return candidate
    counter = 1
    while candidate.with_name(f"{candidate.name}.{counter}").exists():
        counter += 1
    return candidate.with_name(f"{candidate.name}.{counter}")
