"""Scoped build directories and source archive extraction."""

from __future__ import annotations

import shutil
import tarfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import BuildError, BuildStage

logger = create_logger("build.archive")


@contextmanager
def build_directory(path: Path, *, package: str) -> Iterator[Result[Path, BuildError]]:
    """Provide an empty build directory that is removed on every exit path.

    Leftovers from an earlier, interrupted run are removed first. Yields ``Err``
    when the directory cannot be prepared; nothing is cleaned up in that case.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        path.mkdir(parents=True)
    except OSError as e:
        logger.error("Build directory unavailable", path=str(path), error=str(e))
        yield Err(BuildError(package=package, stage=BuildStage.DOWNLOAD, message=f"Cannot prepare {path}: {e}"))
        return

    logger.debug("Build directory created", path=str(path))
    try:
        yield Ok(path)
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug("Build directory removed", path=str(path))


def extract_archive(
    archive: Path,
    destination: Path,
    *,
    package: str,
    strip_components: int = 1,
) -> Result[Path, BuildError]:
    """Extract a gzip'd tarball into ``destination``, dropping leading path components."""
    try:
        with tarfile.open(archive, "r:gz") as tar:
            members = list(_strip_members(tar.getmembers(), strip_components))
            if not members:
                return Err(BuildError(package=package, stage=BuildStage.EXTRACT, message=f"{archive.name} is empty"))
            destination.mkdir(parents=True, exist_ok=True)
            tar.extractall(destination, members=members, filter="data")
    except (tarfile.TarError, OSError) as e:
        logger.error("Extraction failed", archive=str(archive), error=str(e))
        message = f"Failed to extract {archive.name}: {e}"
        return Err(BuildError(package=package, stage=BuildStage.EXTRACT, message=message))

    logger.debug("Archive extracted", archive=str(archive), destination=str(destination), members=len(members))
    return Ok(destination)


def _strip_members(members: list[tarfile.TarInfo], count: int) -> Iterator[tarfile.TarInfo]:
    for member in members:
        stripped = _strip(member.name, count)
        if stripped is None:
            continue
        if member.islnk():
            link = _strip(member.linkname, count)
            if link is None:
                continue
            member.linkname = link
        member.name = stripped
        yield member


def _strip(name: str, count: int) -> str | None:
    parts = PurePosixPath(name).parts[count:]
    if not parts:
        return None
    return str(PurePosixPath(*parts))
