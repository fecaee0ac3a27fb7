"""Linear source-build pipelines for vim and ncurses.

Each pipeline runs its stages in order and stops at the first failure, reporting
the failed stage. Nothing is retried and a partially installed prefix is left as
is; the transient build directory is always removed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import httpx
from result import Err, Ok, Result

from dotsetup.common import create_logger
from dotsetup.deploy.prerequisites import ToolRequirement
from dotsetup.deploy.protocol import Fetcher, Progress

from .archive import build_directory, extract_archive
from .models import BuildError, BuildStage
from .toolchain import BUILD_TOOLS, CommandRunner, verify_toolchain
from .versions import resolve_version

logger = create_logger("build.pipeline")

_GIT = ToolRequirement("git")

VIM_RELEASE_CONFIGURE_FLAGS = (
    "--enable-gui=no",
    "--without-x",
    "--with-tlib=ncurses",
    "--with-features=normal",
)


@dataclass(frozen=True)
class BuildLocations:
    """Where a build happens and where it installs to."""

    prefix: Path
    build_dir: Path

    @property
    def vim_binary(self) -> Path:
        return self.prefix / "bin" / "vim"


class SourceBuildPipeline:
    def __init__(
        self,
        runner: CommandRunner,
        fetcher: Fetcher,
        progress: Progress,
        client: httpx.Client,
        *,
        jobs: int = 1,
    ) -> None:
        self._runner = runner
        self._fetcher = fetcher
        self._progress = progress
        self._client = client
        self._jobs = jobs

    def build_vim_release(
        self,
        locations: BuildLocations,
        *,
        version: str,
        tags_url: str,
        archive_url: str,
    ) -> Result[Path, BuildError]:
        """Build a tagged vim release: resolve, verify, download, extract, configure, make, install.

        ``archive_url`` may contain a ``{version}`` placeholder.
        """
        package = "vim"
        resolved = resolve_version(version, package=package, tags_url=tags_url, client=self._client)
        if resolved.is_err():
            return Err(resolved.unwrap_err())
        vim_version = resolved.unwrap()
        logger.info("Building vim release", version=vim_version, prefix=str(locations.prefix))

        checked = verify_toolchain(package, BUILD_TOOLS)
        if checked.is_err():
            return Err(checked.unwrap_err())

        with build_directory(locations.build_dir, package=package) as prepared:
            if prepared.is_err():
                return Err(prepared.unwrap_err())
            workdir = prepared.unwrap()
            source_dir = workdir / "vim"
            return (
                self._download_and_extract(
                    package,
                    archive_url.format(version=vim_version),
                    workdir / "vim.tar.gz",
                    source_dir,
                    label=f"Downloading vim {vim_version} source",
                )
                .and_then(
                    lambda _: self._configure_make_install(
                        package,
                        source_dir,
                        [f"--prefix={locations.prefix}", *VIM_RELEASE_CONFIGURE_FLAGS],
                        locations.prefix,
                    )
                )
                .and_then(lambda _: _verify_binary(package, locations.vim_binary))
            )

    def build_vim_head(self, locations: BuildLocations, *, repository_url: str) -> Result[Path, BuildError]:
        """Build vim from a shallow clone of the repository's default branch."""
        package = "vim"
        checked = verify_toolchain(package, (*BUILD_TOOLS, _GIT))
        if checked.is_err():
            return Err(checked.unwrap_err())

        with build_directory(locations.build_dir, package=package) as prepared:
            if prepared.is_err():
                return Err(prepared.unwrap_err())
            workdir = prepared.unwrap()
            source_dir = workdir / "vim"
            flags = [f"--prefix={locations.prefix}", f"--with-local-dir={locations.prefix}"]
            return (
                self._runner.run(
                    ["git", "clone", "--depth", "1", repository_url, str(source_dir)],
                    package=package,
                    stage=BuildStage.DOWNLOAD,
                    message="Cloning vim repository",
                )
                .and_then(lambda _: self._configure_make_install(package, source_dir, flags, locations.prefix))
                .and_then(lambda _: _verify_binary(package, locations.vim_binary))
            )

    def build_ncurses(self, locations: BuildLocations, *, archive_url: str) -> Result[Path, BuildError]:
        """Build ncurses from its release tarball into the prefix."""
        package = "ncurses"
        checked = verify_toolchain(package, BUILD_TOOLS)
        if checked.is_err():
            return Err(checked.unwrap_err())

        with build_directory(locations.build_dir, package=package) as prepared:
            if prepared.is_err():
                return Err(prepared.unwrap_err())
            workdir = prepared.unwrap()
            source_dir = workdir / "ncurses"
            return (
                self._download_and_extract(
                    package,
                    archive_url,
                    workdir / "ncurses.tar.gz",
                    source_dir,
                    label="Downloading ncurses source",
                )
                .and_then(
                    lambda _: self._configure_make_install(
                        package, source_dir, [f"--prefix={locations.prefix}"], locations.prefix
                    )
                )
                .map(lambda _: locations.prefix)
            )

    def _download_and_extract(
        self,
        package: str,
        url: str,
        archive: Path,
        source_dir: Path,
        *,
        label: str,
    ) -> Result[Path, BuildError]:
        downloaded = self._progress.track(label, lambda: self._fetcher.fetch(url, archive))
        if downloaded.is_err():
            error = downloaded.unwrap_err()
            return Err(BuildError(package=package, stage=BuildStage.DOWNLOAD, message=error.message))

        return extract_archive(archive, source_dir, package=package)

    def _configure_make_install(
        self,
        package: str,
        source_dir: Path,
        configure_flags: list[str],
        prefix: Path,
    ) -> Result[None, BuildError]:
        try:
            prefix.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(BuildError(package=package, stage=BuildStage.INSTALL, message=f"Cannot create {prefix}: {e}"))

        return (
            self._runner.run(
                ["./configure", *configure_flags],
                package=package,
                stage=BuildStage.CONFIGURE,
                message=f"Configuring {package}",
                cwd=source_dir,
            )
            .and_then(
                lambda _: self._runner.run(
                    ["make", f"-j{self._jobs}"],
                    package=package,
                    stage=BuildStage.COMPILE,
                    message=f"Compiling {package} (this can take a few minutes)",
                    cwd=source_dir,
                )
            )
            .and_then(
                lambda _: self._runner.run(
                    ["make", "install"],
                    package=package,
                    stage=BuildStage.INSTALL,
                    message=f"Installing {package} into {prefix}",
                    cwd=source_dir,
                )
            )
        )


def _verify_binary(package: str, binary: Path) -> Result[Path, BuildError]:
    if binary.is_file() and os.access(binary, os.X_OK):
        logger.success("Source build complete", package=package, binary=str(binary))
        return Ok(binary)
    return Err(
        BuildError(
            package=package,
            stage=BuildStage.VERIFY,
            message=f"Build finished but {binary} is missing or not executable",
        )
    )
