"""
Desktop Entry Scanner - Adds the commands of installed desktop entries to a
command list.
"""

from typing import Optional

from loguru import logger

from delauncher.errors import NameTooLongError
from delauncher.scan.desktop_entry import is_desktop_entry_name, read_exec_command
from delauncher.scan.walker import walk_files
from delauncher.services.command_list import CommandList, printable
from delauncher.utils.pathsearch import command_path


class DesktopEntryScanner:
    """Visit desktop entries and collect the commands they launch."""

    def __init__(self, commands: CommandList, max_open: Optional[int] = None):
        self.commands = commands
        self.max_open = max_open

    def scan(self, root: str) -> None:
        """
        Walk root without crossing filesystems and visit every file.

        Raises:
            WalkError: root cannot be walked
            CommandListMemoryError: the list could not grow; the walk stops
        """
        files = walk_files(root, self.max_open)
        try:
            for path in files:
                self.visit(path)
        finally:
            files.close()

    def visit(self, path: str) -> Optional[str]:
        """
        Add the command of one desktop entry to the list.

        Lower-case names are preferred since menus conventionally show
        commands that way; the original spelling is only used when the
        lower-case one is not installed.

        Args:
            path: Candidate file; names without the .desktop extension are
                ignored without being opened

        Returns:
            The name that was added, or None
        """
        if not is_desktop_entry_name(path):
            return None

        command = read_exec_command(path)
        if not command or self.commands.contains(command):
            return None

        lowercase = command.lower()
        if self._resolves(lowercase):
            name = lowercase
        elif lowercase != command and self._resolves(command):
            name = command
        else:
            return None

        self.commands.add(name)
        print(f"+ {printable(name)} ({printable(path)})")
        return name

    def _resolves(self, command: str) -> bool:
        try:
            return command_path(command) is not None
        except NameTooLongError as e:
            logger.warning(f"{command}: {e.strerror}")
            return False
