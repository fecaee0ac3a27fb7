"""Source builds (vim, ncurses) and system package installs."""

from .archive import build_directory, extract_archive
from .models import BuildError, BuildStage, PackageInstallError
from .packages import PACKAGE_MANAGERS, PackageManager, SystemPackageInstaller, detect_package_manager
from .pipeline import BuildLocations, SourceBuildPipeline
from .protocol import ProcessProgress
from .toolchain import BUILD_TOOLS, CommandRunner, verify_toolchain
from .versions import LATEST, resolve_version

__all__ = [
    "BUILD_TOOLS",
    "LATEST",
    "PACKAGE_MANAGERS",
    "BuildError",
    "BuildLocations",
    "BuildStage",
    "CommandRunner",
    "PackageInstallError",
    "PackageManager",
    "ProcessProgress",
    "SourceBuildPipeline",
    "SystemPackageInstaller",
    "build_directory",
    "detect_package_manager",
    "extract_archive",
    "resolve_version",
    "verify_toolchain",
]
