# DEL Services Package
"""
Backend services for the Desktop Entry Launcher.

Services handle the command list, its persistence and the menu subprocess.
"""

from .command_list import CommandList
from .menu import MenuLauncher, launch_menu

__all__ = ["CommandList", "MenuLauncher", "launch_menu"]
