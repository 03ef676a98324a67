"""Session bootstrap: wires terminal, dispatcher, picker, and loop together."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..config import PickerConfig
from ..errors import TerminalError
from ..picker import GrepPicker
from ..search.dispatcher import SearchDispatcher
from .loop import RuntimeLoopTiming, run_main_loop
from .state import PickerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def run_picker(root: Path, config: PickerConfig) -> PickerSession:
    """Run the interactive picker over ``root`` and return the final session.

    Raises ``TerminalError`` when stdin/stdout are not a terminal or the
    terminal cannot be driven.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        raise TerminalError("binocular needs an interactive terminal")

    terminal = TerminalController(stdin_fd, stdout_fd)
    dispatcher = SearchDispatcher(root, config.context_lines)
    picker = GrepPicker(dispatcher, config.editor_command)
    session = PickerSession()
    logger.info("starting picker in %s", root)
    run_main_loop(
        session,
        picker,
        terminal,
        config.theme,
        RuntimeLoopTiming(),
        discard_stale=config.discard_stale_results,
    )
    return session
