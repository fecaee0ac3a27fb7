"""The three installers: git prompt, vim and vim source build."""

from .base import InstallError, Installer, InstallerContext, InstallOutcome, InstallStatus
from .git_prompt import GitPromptInstaller
from .vim import VimInstaller
from .vim_build import VimSourceBuildInstaller

__all__ = [
    "GitPromptInstaller",
    "InstallError",
    "Installer",
    "InstallOutcome",
    "InstallStatus",
    "InstallerContext",
    "VimInstaller",
    "VimSourceBuildInstaller",
]
