"""
Desktop Entry Parser - Extracts the command name from a .desktop file.

Only the handful of keys needed to decide whether an entry is a graphical
program and what it runs are looked at:

    [Desktop Entry]
    NoDisplay = false
    Terminal = false
    Exec = env GDK_BACKEND=x11 firefox %u

NoDisplay or Terminal set to true disqualifies the entry. The first word of
Exec is the command; if that word is env(1), the first following word that
is neither a variable assignment nor an option is used instead.
"""

import os
import re
from typing import Optional

DESKTOP_ENTRY_EXTENSION = ".desktop"

# Exec words longer than this are cut short.
MAX_TOKEN_LENGTH = 4095

_SECTION_HEADER = "[desktop entry]"
_BOOLEAN_FIELD = re.compile(r"(?:NoDisplay|Terminal)\s*=\s*(\S{1,5})")
_EXEC_FIELD = re.compile(r"Exec\s*=\s*(.*)")
_ENV_WRAPPER = "env"


def is_desktop_entry_name(path: str) -> bool:
    """Return True if the file name ends with the desktop entry extension."""
    return path.endswith(DESKTOP_ENTRY_EXTENSION)


def _basename(token: str) -> str:
    return os.path.basename(token.rstrip("/"))


def exec_command(value: str) -> Optional[str]:
    """
    Return the command name an Exec value runs.

    Args:
        value: Everything after "Exec =" on the line

    Returns:
        Base name of the program, or None when there is no usable word

    Example:
        exec_command("env FOO=bar myapp --flag")  # -> "myapp"
    """
    words = [word[:MAX_TOKEN_LENGTH] for word in value.split()]
    if not words:
        return None

    command = _basename(words[0])
    if command == _ENV_WRAPPER:
        command = None
        for word in words[1:]:
            if "=" not in word[1:] and not word.startswith("-"):
                command = _basename(word)
                break

    return command or None


def read_exec_command(path: str) -> Optional[str]:
    """
    Parse a desktop entry and return the command it launches.

    Files that cannot be opened or read are treated as having no command.

    Args:
        path: Path of the .desktop file

    Returns:
        Command name, or None if the entry is hidden, runs in a terminal or
        has no Exec key inside its [Desktop Entry] section
    """
    command = None
    inside_desktop_entry = False

    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            for line in f:
                if not inside_desktop_entry:
                    inside_desktop_entry = line.rstrip("\n").lower() == _SECTION_HEADER
                    continue

                if line.startswith("["):
                    # [Desktop Action ...] and friends
                    inside_desktop_entry = False
                    continue

                match = _BOOLEAN_FIELD.match(line)
                if match:
                    if match.group(1).lower() == "true":
                        return None
                    continue

                match = _EXEC_FIELD.match(line)
                if match and match.group(1).split():
                    command = exec_command(match.group(1))
    except OSError:
        return None

    return command
