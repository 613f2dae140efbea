# DEL Utilities Package
"""
Shared utility functions: command path resolution, settings and logging.
"""

from .helpers import default_list_path, load_settings, setup_logging
from .pathsearch import can_execute, command_path

__all__ = [
    "can_execute",
    "command_path",
    "default_list_path",
    "load_settings",
    "setup_logging",
]
