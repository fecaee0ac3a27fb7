"""Install packages through whichever system package manager is present."""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import BuildStage, PackageInstallError
from .toolchain import CommandRunner

logger = create_logger("build.packages")


@dataclass(frozen=True)
class PackageManager:
    name: str
    commands: tuple[tuple[str, ...], ...]

    def install_commands(self, package: str) -> list[list[str]]:
        return [["sudo", *(arg.format(package=package) for arg in command)] for command in self.commands]


PACKAGE_MANAGERS = (
    PackageManager("apt-get", (("apt-get", "update", "-qq"), ("apt-get", "install", "-y", "-qq", "{package}"))),
    PackageManager("yum", (("yum", "install", "-y", "{package}"),)),
    PackageManager("dnf", (("dnf", "install", "-y", "{package}"),)),
    PackageManager("pacman", (("pacman", "-S", "--noconfirm", "{package}"),)),
    PackageManager("apk", (("apk", "add", "{package}"),)),
)


def detect_package_manager() -> PackageManager | None:
    return next((manager for manager in PACKAGE_MANAGERS if shutil.which(manager.name)), None)


class SystemPackageInstaller:
    """Privileged package installs via passwordless sudo."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def sudo_available(self) -> bool:
        return self._runner.probe(["sudo", "-n", "true"])

    def install(self, package: str, manager: PackageManager) -> Result[str, PackageInstallError]:
        logger.info("Installing package", package=package, manager=manager.name)
        for command in manager.install_commands(package):
            result = self._runner.run(
                command,
                package=package,
                stage=BuildStage.INSTALL,
                message=f"Installing {package} with {manager.name}",
            )
            if result.is_err():
                return Err(
                    PackageInstallError(
                        package=package,
                        manager=manager.name,
                        message=result.unwrap_err().message,
                    )
                )

        if shutil.which(package) is None:
            return Err(
                PackageInstallError(
                    package=package,
                    manager=manager.name,
                    message=f"{manager.name} finished but '{package}' is still not on PATH",
                )
            )
        return Ok(package)
