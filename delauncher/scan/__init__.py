# DEL Scan Package
"""
Desktop entry discovery: parsing, tree walking and list refresh.
"""

from .desktop_entry import exec_command, is_desktop_entry_name, read_exec_command
from .refresh import refresh_command_list
from .scanner import DesktopEntryScanner
from .walker import walk_files

__all__ = [
    "DesktopEntryScanner",
    "exec_command",
    "is_desktop_entry_name",
    "read_exec_command",
    "refresh_command_list",
    "walk_files",
]
