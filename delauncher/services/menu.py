"""
Menu Launcher - Run a menu over the command list and execute its choices.

The menu (dmenu by default) gets the persisted command list as its standard
input, opened directly on the file. Every complete line it prints is started
as a command with no arguments the moment it arrives. Launched commands are
not waited on; they keep running after the launcher exits.

Exit status of run(), in order of precedence:
  - 0 if nothing went wrong
  - 1 on a fatal error
  - 2 on a non-fatal error
  - the menu's own exit status when it failed without other problems
  - 128 + N when the menu was killed by signal N
"""

import errno
import os
import signal
import subprocess
from enum import Enum
from typing import Optional, Sequence

from loguru import logger

FATAL = 1
NON_FATAL = 2

# Sent to the menu when reading its output fails. Deaths by this signal are
# expected and not reported.
MENU_KILL_SIGNAL = signal.SIGHUP


class MenuState(Enum):
    SPAWN_MENU = "spawn_menu"
    STREAM_SELECTIONS = "stream_selections"
    AWAIT_EXIT = "await_exit"
    DONE = "done"


class MenuLauncher:
    """
    One menu invocation.

    Args:
        list_path: Command list redirected into the menu
        argv: Menu program and its arguments
    """

    def __init__(self, list_path: str, argv: Sequence[str]):
        if not argv:
            raise ValueError("menu command is empty")
        self.list_path = list_path
        self.argv = list(argv)
        self.state: Optional[MenuState] = None
        self.process: Optional[subprocess.Popen] = None
        self.launched: list[subprocess.Popen] = []

    @property
    def program(self) -> str:
        return self.argv[0]

    def _enter(self, state: MenuState) -> None:
        logger.debug(f"{self.program}: {state.value}")
        self.state = state

    def run(self) -> int:
        """Show the menu, launch the selections and return an exit status."""
        self._enter(MenuState.SPAWN_MENU)
        if not self._spawn_menu():
            self._enter(MenuState.DONE)
            return FATAL

        self._enter(MenuState.STREAM_SELECTIONS)
        failure = self._stream_selections()

        self._enter(MenuState.AWAIT_EXIT)
        kill_signal = None
        if failure == FATAL:
            kill_signal = MENU_KILL_SIGNAL
            self.process.send_signal(kill_signal)

        status = self._await_exit(failure, kill_signal)
        self._enter(MenuState.DONE)
        return status

    def _spawn_menu(self) -> bool:
        try:
            list_file = open(self.list_path, "rb")
        except FileNotFoundError:
            logger.error(f'{self.list_path} missing; was "del -r" run?')
            return False
        except OSError as e:
            logger.error(f"open: {self.list_path}: {e.strerror}")
            return False

        with list_file:
            try:
                self.process = subprocess.Popen(
                    self.argv,
                    stdin=list_file,
                    stdout=subprocess.PIPE,
                )
            except (OSError, ValueError) as e:
                logger.error(f"{self.program}: {getattr(e, 'strerror', None) or e}")
                return False

        return True

    def _stream_selections(self) -> int:
        """Launch each line the menu prints; return FATAL if reading stopped early."""
        output = self.process.stdout
        failure = 0

        try:
            for line in output:
                if not line.endswith(b"\n"):
                    # The menu died or was killed in the middle of a write.
                    logger.warning(f"missing newline after '{os.fsdecode(line)}'")
                    continue

                command = os.fsdecode(line[:-1])
                if not command:
                    continue
                if not self._launch(command):
                    failure = FATAL
                    break
        except OSError as e:
            logger.error(f"could not read {self.program} output: {e.strerror or e}")
            failure = FATAL
        finally:
            try:
                output.close()
            except OSError as e:
                logger.error(f"unable to close {self.program} output: {e.strerror or e}")

        return failure

    def _launch(self, command: str) -> bool:
        """
        Start command in the background.

        Returns:
            False only if no process could be created at all
        """
        try:
            child = subprocess.Popen([command], close_fds=True)
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.ENOMEM):
                logger.error(f"could not fork to execute command: {e.strerror}")
                return False
            logger.warning(f"{command}: {e.strerror or e}")
            return True
        except ValueError as e:
            logger.warning(f"{command!r}: {e}")
            return True

        logger.debug(f"Launched {command} (pid {child.pid})")
        self.launched.append(child)
        return True

    def _await_exit(self, failure: int, kill_signal: Optional[int]) -> int:
        try:
            returncode = self.process.wait()
        except OSError as e:
            logger.error(f"error waiting on {self.program}: {e.strerror or e}")
            return failure or NON_FATAL

        if returncode >= 0:
            if not failure and returncode:
                logger.error(f"{self.program} died with exit status {returncode}")
                failure = returncode
            return failure

        signum = -returncode
        if signum != kill_signal:
            logger.error(f"{self.program} received signal {signum}")
            failure = failure or 128 + signum
        return failure


def launch_menu(list_path: str, argv: Sequence[str]) -> int:
    """
    Run the menu over list_path and execute whatever it prints.

    Example:
        launch_menu("/home/me/.del", ["rofi", "-dmenu"])
    """
    return MenuLauncher(list_path, argv).run()
