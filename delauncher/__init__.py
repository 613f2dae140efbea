# Desktop Entry Launcher Package
"""
Desktop Entry Launcher (DEL) for X11/Wayland menus.

Subsystems:
  - Scanner (refresh): finds Freedesktop desktop entries and persists a
    sorted list of runnable commands
  - Launcher: feeds the persisted list to a menu program (dmenu by default)
    and runs whatever it selects
"""

__version__ = "0.2.0"
