"""
Command List Store - Unsorted in-memory list of runnable commands.

The list is a plain array grown in fixed chunks once it fills up. Membership
tests walk the array (case-insensitively) until a match is found; the list
holds tens to a few hundred commands, so a hash index is not worth it.

Persisting sorts the list alphabetically ignoring case and writes it through
a temporary file in the target's folder that is renamed over the target, so
readers only ever see the previous or the new complete list.
"""

import os
import tempfile
from typing import IO, Iterator, Optional

from loguru import logger

from delauncher.errors import CommandListMemoryError, NameTooLongError, PersistError
from delauncher.utils.pathsearch import command_path

# Number of slots added each time the list runs out of room.
INCREMENTAL_ALLOCATION_SIZE = 64

# The list file is byte-transparent: undecodable names survive a round trip.
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


def printable(text: str) -> str:
    """Text with undecodable bytes shown as U+FFFD, safe for a strict stdout."""
    return text.encode(FILE_ENCODING, FILE_ERRORS).decode(FILE_ENCODING, "replace")


class CommandList:
    """
    Growable collection of command names.

    Methods:
        contains(name): Case-insensitive membership test
        add(name): Append a name (duplicates permitted)
        load(path=..., stream=...): Append the valid names from a list file
        persist(path): Sort, de-duplicate and atomically write the list
    """

    def __init__(self):
        self._slots: list[Optional[str]] = []
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots[:self._count])

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    @property
    def capacity(self) -> int:
        """Number of names the list can hold before growing again."""
        return len(self._slots)

    def contains(self, name: str) -> bool:
        """
        Check to see if a command is already in the list, ignoring case.

        This is a linear scan.
        """
        needle = name.lower()
        for i in range(self._count):
            if self._slots[i].lower() == needle:
                return True
        return False

    def _grow(self) -> None:
        self._slots.extend([None] * INCREMENTAL_ALLOCATION_SIZE)

    def add(self, name: str) -> None:
        """
        Add a command to the list without checking for duplicates.

        Args:
            name: Command name to store

        Raises:
            CommandListMemoryError: The list could not be resized or the
                entry could not be stored. Scans must abort on this.
        """
        if self._count >= len(self._slots):
            try:
                self._grow()
            except MemoryError as e:
                raise CommandListMemoryError("could not resize command list") from e

        try:
            self._slots[self._count] = str(name)
        except MemoryError as e:
            raise CommandListMemoryError("could not update command list") from e

        self._count += 1

    def load(self, path: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
        """
        Load commands from a list file into memory.

        Exactly one of path or stream must be given. Every entry is
        re-validated; names that no longer resolve are announced as removed
        and dropped.

        Args:
            path: File containing a newline-separated list of commands
            stream: Already open text stream with the same format. It is
                not closed by this method.

        Raises:
            ValueError: Both or neither of path and stream were given
            OSError: The file could not be opened or read
            CommandListMemoryError: The list could not grow
        """
        if (path is None) == (stream is None):
            raise ValueError("exactly one of path or stream is required")

        if path is not None:
            with open(path, encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="\n") as f:
                self._load_entries(f)
        else:
            self._load_entries(stream)

    def _load_entries(self, stream: IO[str]) -> None:
        for line in stream:
            entry = line[:-1] if line.endswith("\n") else line
            if not entry:
                continue

            try:
                resolved = command_path(entry)
            except NameTooLongError as e:
                logger.warning(f"{entry}: {e.strerror}")
                resolved = None

            if resolved:
                self.add(entry)
            else:
                print(f"- {printable(entry)}")

    def sort(self) -> None:
        """Sort alphabetically ignoring case; equal keys keep first-seen order."""
        live = self._slots[:self._count]
        live.sort(key=str.lower)
        self._slots[:self._count] = live

    def persist(self, path: str) -> None:
        """
        Sort the list and atomically replace path with it.

        One command is written per line. Case-insensitive duplicates end up
        next to each other after sorting, so each entry is only compared to
        the one written before it.

        Args:
            path: Destination list file

        Raises:
            PersistError: Any step failed. The original file is untouched
                and the temporary file has been removed.
        """
        folder = os.path.dirname(path) or "."
        try:
            fd, tempname = tempfile.mkstemp(prefix=os.path.basename(path), dir=folder)
        except OSError as e:
            raise PersistError(f"mkstemp: {path}: {e.strerror or e}") from e

        self.sort()

        try:
            with os.fdopen(fd, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="\n") as f:
                previous = None
                for entry in self:
                    if previous is not None and previous.lower() == entry.lower():
                        continue
                    f.write(entry + "\n")
                    previous = entry

                f.flush()
                os.fsync(f.fileno())

            os.replace(tempname, path)
        except OSError as e:
            try:
                os.unlink(tempname)
            except OSError as unlink_error:
                logger.error(f"could not delete temporary file '{tempname}': {unlink_error.strerror}")
            raise PersistError(f"unable to write '{path}' via '{tempname}': {e.strerror or e}") from e

        logger.debug(f"Persisted {len(self)} commands to {path}")
