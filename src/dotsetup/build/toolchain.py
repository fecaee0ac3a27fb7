"""Run external build commands and check for build tools."""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from result import Err, Ok, Result

from dotsetup.common import create_logger
from dotsetup.deploy.prerequisites import ToolRequirement, find_missing_tools

from .models import BuildError, BuildStage
from .protocol import ProcessProgress

logger = create_logger("build.toolchain")

OUTPUT_TAIL_LINES = 20

BUILD_TOOLS = (
    ToolRequirement("make"),
    ToolRequirement("gcc", alternatives=("cc",)),
)


class CommandRunner:
    """Run commands as child processes, capturing their combined output.

    Output is only surfaced (as the last lines) when a command fails.
    """

    def __init__(self, progress: ProcessProgress) -> None:
        self._progress = progress

    def run(
        self,
        argv: Sequence[str],
        *,
        package: str,
        stage: BuildStage,
        message: str,
        cwd: Path | None = None,
    ) -> Result[None, BuildError]:
        logger.debug("Running command", argv=list(argv), cwd=str(cwd) if cwd else None, stage=stage.value)

        with tempfile.TemporaryFile() as output:
            try:
                process = subprocess.Popen(
                    list(argv),
                    cwd=cwd,
                    stdin=subprocess.DEVNULL,
                    stdout=output,
                    stderr=subprocess.STDOUT,
                )
            except OSError as e:
                return Err(BuildError(package=package, stage=stage, message=f"Failed to start {argv[0]}: {e}"))

            try:
                returncode = self._progress.wait(message, process)
            finally:
                if process.poll() is None:
                    process.terminate()
                    process.wait()

            if returncode == 0:
                return Ok(None)

            output.seek(0)
            tail = output.read().decode("utf-8", errors="replace").splitlines()[-OUTPUT_TAIL_LINES:]

        logger.error(
            "Command failed", argv=list(argv), returncode=returncode, stage=stage.value, output="\n".join(tail)
        )
        return Err(
            BuildError(
                package=package,
                stage=stage,
                message=f"{' '.join(argv)} exited with status {returncode}",
                output_tail=tail,
            )
        )

    def probe(self, argv: Sequence[str]) -> bool:
        """Return True when ``argv`` runs and exits 0, without showing progress."""
        try:
            subprocess.run(list(argv), capture_output=True, check=True, stdin=subprocess.DEVNULL)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False


def verify_toolchain(package: str, requirements: Sequence[ToolRequirement] = BUILD_TOOLS) -> Result[None, BuildError]:
    missing = find_missing_tools(requirements)
    if not missing:
        return Ok(None)

    logger.error("Build tools missing", package=package, tools=missing)
    return Err(
        BuildError(
            package=package,
            stage=BuildStage.VERIFY_TOOLCHAIN,
            message=f"Tools required for the source build are missing: {', '.join(missing)}",
        )
    )
