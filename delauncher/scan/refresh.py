"""
Refresh - Rebuild the persisted command list.

Sources, in order:
  1. A newline-separated list on stdin when stdin is not a terminal
  2. The previously persisted list (missing on first run)
  3. Desktop entries found below each search root
"""

import io
import sys
from typing import IO, Optional, Sequence

from loguru import logger

from delauncher.errors import ListSourceError, NoCommandsError
from delauncher.scan.scanner import DesktopEntryScanner
from delauncher.services.command_list import FILE_ENCODING, FILE_ERRORS, CommandList

DEFAULT_ROOTS = ("/",)


def _readable_pipe(stream: Optional[IO[str]]) -> bool:
    """True if stream is open, usable and not an interactive terminal."""
    if stream is None or stream.closed:
        return False
    try:
        return not stream.isatty()
    except (OSError, ValueError):
        return False


def _list_stream(stream: IO[str]) -> IO[str]:
    """
    Decode stream's bytes the way list files are decoded.

    Streams without an underlying binary buffer are returned unchanged. The
    wrapper returned otherwise must be detached, not closed, once read.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream
    return io.TextIOWrapper(buffer, encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="\n")


def refresh_command_list(
    list_path: str,
    roots: Sequence[str] = DEFAULT_ROOTS,
    stdin: Optional[IO[str]] = None,
    max_open: Optional[int] = None,
) -> CommandList:
    """
    Search for desktop entries and atomically rewrite the command list.

    Args:
        list_path: File name of the command list
        roots: Directories to search; "/" when empty
        stdin: Stream of extra commands; defaults to sys.stdin
        max_open: Directory handle cap for the tree walk

    Returns:
        The command list that was persisted

    Raises:
        ListSourceError: stdin or the previous list could not be read
        WalkError: A root could not be walked
        CommandListMemoryError: The list could not grow
        NoCommandsError: Nothing was found; the old list is kept
        PersistError: The new list could not be written
    """
    commands = CommandList()

    if stdin is None:
        stdin = sys.stdin
    if _readable_pipe(stdin):
        logger.debug("Loading extra commands from stdin")
        source = _list_stream(stdin)
        try:
            commands.load(stream=source)
        except OSError as e:
            raise ListSourceError(f"could not load commands from stdin: {e.strerror or e}") from e
        finally:
            if source is not stdin:
                source.detach()

    try:
        commands.load(path=list_path)
    except FileNotFoundError:
        logger.debug(f"No previous command list at {list_path}")
    except OSError as e:
        raise ListSourceError(
            f"could not load commands from '{list_path}': {e.strerror or e}"
        ) from e

    scanner = DesktopEntryScanner(commands, max_open=max_open)
    for root in roots or DEFAULT_ROOTS:
        logger.debug(f"Searching {root} for desktop entries")
        scanner.scan(root)

    if not len(commands):
        raise NoCommandsError("no commands found")

    commands.persist(list_path)
    return commands
