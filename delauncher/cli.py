"""
DEL command line entry point.

Usage:
  del -r [DIRECTORY...]     refresh the command list
  del [MENU [ARGUMENT...]]  pick a command with a menu and run it
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from delauncher import __version__
from delauncher.errors import DelError
from delauncher.scan.refresh import refresh_command_list
from delauncher.services.menu import FATAL, launch_menu
from delauncher.utils.helpers import (
    DEFAULT_COMMAND_LIST_BASENAME,
    DEFAULT_MENU_COMMAND,
    default_list_path,
    load_settings,
    setup_logging,
)

DESCRIPTION = """\
DEL searches for Freedesktop Desktop Entries, generates a list of graphical
commands and uses dmenu as a front-end so the user can select a command to
execute. The first time DEL is executed, it should be invoked as "del -r" to
generate the application list.

When "-r" is not specified, dmenu is launched with the command list fed into
standard input. Trailing command line arguments can be used to pass flags to
dmenu or use a different menu altogether:

    Set the background color of selected text to red:
    $ del -- -sb "#ff0000"

    Use rofi in dmenu mode instead of dmenu:
    $ del rofi -dmenu
"""

EPILOG = """\
With "-r", trailing arguments are folders to search. The search does not
cross filesystem boundaries, so folders on other devices must be listed
explicitly; it is equivalent to:

    find $ARGUMENTS -xdev -name '*.desktop'

When no folders are given, "/" is searched. A newline-separated list of
programs can be fed to del via stdin to include programs without desktop
entries; programs that are not found in $PATH are dropped.

Exit statuses:
  0     Success.
  1     Fatal error encountered.
  2     Non-fatal error encountered.
  >128  The menu was killed by signal N, where N is the status minus 128.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="del",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-f", "--file", metavar="PATH",
        help=f'command list file (default: "$HOME/{DEFAULT_COMMAND_LIST_BASENAME}")',
    )
    parser.add_argument(
        "-r", "--refresh", action="store_true",
        help="search for desktop entries to refresh the command list",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="show debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only show errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def _configure_logging(args: argparse.Namespace, settings: dict) -> None:
    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    else:
        level = str(settings["logging"].get("level", "WARNING"))

    try:
        setup_logging(level)
    except ValueError:
        setup_logging("WARNING")
        logger.warning(f"unknown log level {level!r}; using WARNING")


def _menu_command(arguments: List[str], settings: dict) -> List[str]:
    """Prepend the configured menu unless the arguments name a program."""
    if arguments and not arguments[0].startswith("-"):
        return arguments

    menu = settings["launcher"].get("menu")
    if isinstance(menu, str):
        menu = [menu]
    return list(menu or [DEFAULT_MENU_COMMAND]) + arguments


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    arguments = list(args.arguments)
    if arguments and arguments[0] == "--":
        arguments = arguments[1:]

    # Provisional level so warnings from loading settings reach stderr
    setup_logging("DEBUG" if args.verbose else "ERROR" if args.quiet else "WARNING")
    settings = load_settings()
    _configure_logging(args, settings)

    list_path = args.file or settings["launcher"].get("list_path") or default_list_path()
    if not list_path:
        logger.error('HOME is unset; use "-f" to specify list path')
        return FATAL

    if args.refresh:
        roots = arguments or list(settings["refresh"].get("roots") or ["/"])
        try:
            refresh_command_list(list_path, roots)
        except DelError as e:
            logger.error(str(e))
            return FATAL
        return 0

    return launch_menu(list_path, _menu_command(arguments, settings))


if __name__ == "__main__":
    sys.exit(main())
