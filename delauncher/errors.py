"""
Exception hierarchy for the launcher.

Anything deriving from DelError is fatal for the current operation and is
turned into exit status 1 by the command line entry point.
"""

import errno
import os


class DelError(Exception):
    """Fatal error for a refresh or launch operation."""


class CommandListMemoryError(DelError, MemoryError):
    """The command list could not grow or copy an entry."""


class ListSourceError(DelError):
    """Reading stdin or a previously persisted list failed."""


class WalkError(DelError):
    """A search root could not be walked."""


class NoCommandsError(DelError):
    """A refresh found nothing worth persisting."""


class PersistError(DelError):
    """Writing or renaming the temporary list file failed."""


class NameTooLongError(OSError):
    """A resolved command path would not fit within PATH_MAX."""

    def __init__(self, path: str):
        super().__init__(errno.ENAMETOOLONG, os.strerror(errno.ENAMETOOLONG), path)
