"""Terminal control for the picker session.

Owns raw-mode and alternate-screen lifecycle. ``raw_mode()`` is the one
guard that restores the terminal on every exit path, exceptions included.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import termios
import tty

from ..errors import TerminalError

logger = logging.getLogger(__name__)

ENTER_ALTERNATE_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_ALTERNATE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw-mode and alternate-screen transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"Failed to read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"Failed to enable raw mode: {exc}") from exc
        try:
            os.write(self.stdout_fd, ENTER_ALTERNATE_SCREEN)
        except OSError as exc:
            raise TerminalError(f"Failed to enter alternate screen: {exc}") from exc

    def disable_tui_mode(self) -> None:
        """Restore the saved tty state and the main screen buffer.

        Each step is attempted even when an earlier one fails; failures are
        reported on stderr.
        """
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            logger.error("failed to disable raw mode: %s", exc)
            print(f"Failed to disable raw mode: {exc}", file=sys.stderr)
        try:
            os.write(self.stdout_fd, LEAVE_ALTERNATE_SCREEN)
        except OSError as exc:
            logger.error("failed to leave alternate screen: %s", exc)
            print(f"Failed to leave alternate screen: {exc}", file=sys.stderr)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
