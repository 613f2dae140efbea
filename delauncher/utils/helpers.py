"""
Helper utilities for the Desktop Entry Launcher.

Provides common functions used by both the refresh and launch actions:
- Settings loading
- Logging setup
- Default command list location
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

DEFAULT_COMMAND_LIST_BASENAME = ".del"
DEFAULT_MENU_COMMAND = "dmenu"


def setup_logging(level: str = "WARNING") -> None:
    """
    Send diagnostics to stderr as "del: <message>" lines.

    Progress notices are printed to stdout by the callers, so only
    diagnostics go through the logger.

    Args:
        level: Minimum loguru level name to emit
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="del: {message}")


def settings_path() -> Path:
    """
    Locate the settings file.

    Returns:
        $DEL_CONFIG when set, otherwise del/settings.toml inside
        $XDG_CONFIG_HOME (or ~/.config)
    """
    override = os.environ.get("DEL_CONFIG")
    if override:
        return Path(override)

    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "del" / "settings.toml"
    return Path.home() / ".config" / "del" / "settings.toml"


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load launcher settings from TOML file.

    Args:
        path: Settings file to read; defaults to settings_path()

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "launcher": {
                "list_path": "",
                "menu": ["dmenu"]
            },
            "refresh": {
                "roots": ["/"]
            },
            "logging": {
                "level": "WARNING"
            }
        }
    """
    # Default settings
    defaults = {
        "launcher": {
            "list_path": "",
            "menu": [DEFAULT_MENU_COMMAND],
        },
        "refresh": {
            "roots": ["/"],
        },
        "logging": {
            "level": "WARNING",
        },
    }

    if path is None:
        try:
            path = settings_path()
        except RuntimeError:
            # Path.home() fails when no home directory can be determined
            return defaults

    if not path.exists():
        logger.debug(f"Settings file not found at {path}, using defaults")
        return defaults

    try:
        loaded = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"could not load settings from {path}: {e}; using defaults")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def default_list_path() -> Optional[str]:
    """
    Return "$HOME/.del", or None when HOME is unset.
    """
    home = os.environ.get("HOME")
    if not home:
        return None
    if not home.endswith("/"):
        home += "/"
    return home + DEFAULT_COMMAND_LIST_BASENAME
