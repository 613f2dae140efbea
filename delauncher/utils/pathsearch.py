"""
Command path resolution.

Implements the POSIX command search used for every command that enters the
launcher list: a name containing "/" is tested as-is, anything else is looked
up in each $PATH folder from left to right and the first executable regular
file wins. Both checks are inherently racy; they are a filter for the menu,
not a security boundary.
"""

import os
import stat
from typing import Optional

from delauncher.errors import NameTooLongError

# Matches the Linux limit, including the terminating NUL of the C API.
PATH_MAX = 4096


def _too_long(path: str) -> bool:
    return len(os.fsencode(path)) >= PATH_MAX


def can_execute(path: str) -> bool:
    """
    Return True if path is a regular file the effective user may execute.

    Args:
        path: Relative or absolute path of the file to test
    """
    effective_ids = os.access in os.supports_effective_ids
    try:
        if not os.access(path, os.X_OK, effective_ids=effective_ids):
            return False
        return stat.S_ISREG(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def command_path(command: str) -> Optional[str]:
    """
    Resolve a command the way a POSIX shell would.

    Args:
        command: Command name, or a path when it contains "/"

    Returns:
        The path that would be executed, or None when nothing matches.
        Names containing "/" are returned unchanged when executable.

    Raises:
        NameTooLongError: When a candidate path reaches PATH_MAX
    """
    # POSIX 2.9.1 "Command Search and Execution", item 2.
    if "/" in command:
        if _too_long(command):
            raise NameTooLongError(command)
        return command if can_execute(command) else None

    search_path = os.environ.get("PATH")
    if search_path is None:
        return None

    for folder in search_path.split(":"):
        # Zero-length prefixes are the current working directory (POSIX 8.3).
        if not folder:
            folder = "."
        if not folder.endswith("/"):
            folder += "/"

        candidate = folder + command
        if _too_long(candidate):
            raise NameTooLongError(candidate)
        if can_execute(candidate):
            return candidate

    return None
