"""dotsetup - deploy git prompt and vim dotfiles onto a Linux host.

By default, dotsetup's internal logging is disabled when used as a library.
Library users can enable logging by calling dotsetup.enable_logging().
"""

from dotsetup.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]
