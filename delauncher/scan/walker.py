"""
Tree Walker - Depth-first listing of every file below a directory.

Behaves like find(1) with -xdev: directories on another filesystem than the
root are not entered, symbolic links to directories are followed but each
directory is only visited once, and unreadable sub-directories are skipped.

The number of directory handles held open at once is capped. When the cap is
reached, the oldest open directory is read into memory and closed before a
new one is opened.
"""

import os
import stat
from typing import Iterator, Optional

from loguru import logger

from delauncher.errors import WalkError

# Descriptors kept free for stdin, stdout, stderr and the desktop entry that
# is being parsed while the walk is suspended.
RESERVED_DESCRIPTORS = 4

# Used when the descriptor limit cannot be determined.
FALLBACK_OPEN_MAX = 256


def default_max_open() -> int:
    """Number of directories the walk may hold open at the same time."""
    try:
        open_max = os.sysconf("SC_OPEN_MAX")
    except (ValueError, OSError):
        open_max = -1
    if open_max <= 0:
        open_max = FALLBACK_OPEN_MAX
    return max(1, min(open_max, 2**31 - 1) - RESERVED_DESCRIPTORS)


class _Frame:
    """A directory being listed, either live or already read into memory."""

    def __init__(self, path: str, scanner):
        self.path = path
        self._scanner = scanner
        self._entries = scanner

    @property
    def is_open(self) -> bool:
        return self._scanner is not None

    def next_entry(self) -> Optional[os.DirEntry]:
        try:
            return next(self._entries)
        except StopIteration:
            return None
        except OSError as e:
            logger.debug(f"Stopped reading {self.path}: {e}")
            return None

    def materialize(self) -> None:
        """Read the remaining entries and release the directory handle."""
        try:
            remaining = list(self._entries)
        except OSError as e:
            logger.debug(f"Stopped reading {self.path}: {e}")
            remaining = []
        self.close()
        self._entries = iter(remaining)

    def close(self) -> None:
        if self._scanner is not None:
            self._scanner.close()
            self._scanner = None


def walk_files(root: str, max_open: Optional[int] = None) -> Iterator[str]:
    """
    Yield the path of every non-directory below root.

    Args:
        root: Directory (or single file) to walk
        max_open: Maximum simultaneously open directories; defaults to a
            margin below the process descriptor limit

    Raises:
        WalkError: The root itself cannot be examined or listed
    """
    if max_open is None:
        max_open = default_max_open()
    max_open = max(1, max_open)

    try:
        root_stat = os.stat(root)
    except OSError as e:
        raise WalkError(f"unable to walk '{root}': {e.strerror}") from e

    if not stat.S_ISDIR(root_stat.st_mode):
        yield root
        return

    device = root_stat.st_dev
    visited = {(root_stat.st_dev, root_stat.st_ino)}

    try:
        stack = [_Frame(root, os.scandir(root))]
    except OSError as e:
        raise WalkError(f"unable to walk '{root}': {e.strerror}") from e

    try:
        while stack:
            frame = stack[-1]
            entry = frame.next_entry()
            if entry is None:
                frame.close()
                stack.pop()
                continue

            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False

            if not is_dir:
                yield entry.path
                continue

            try:
                dir_stat = entry.stat()
            except OSError as e:
                logger.debug(f"Skipping {entry.path}: {e.strerror}")
                continue

            if dir_stat.st_dev != device:
                logger.debug(f"Not crossing mount point {entry.path}")
                continue

            key = (dir_stat.st_dev, dir_stat.st_ino)
            if key in visited:
                continue
            visited.add(key)

            open_frames = [f for f in stack if f.is_open]
            if len(open_frames) >= max_open:
                open_frames[0].materialize()

            try:
                stack.append(_Frame(entry.path, os.scandir(entry.path)))
            except OSError as e:
                logger.debug(f"Skipping {entry.path}: {e.strerror}")
    finally:
        for frame in stack:
            frame.close()
