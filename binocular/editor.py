"""Editor launch helper for opening a match at its line.

Spawns the configured editor with a ``file:line`` argument and returns
immediately; the editor's exit status is never inspected.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .errors import EditorFailed, ToolNotInstalled

logger = logging.getLogger(__name__)


def launch_editor_at(
    editor_command: Sequence[str],
    goto_target: str,
    cwd: Path | None = None,
) -> None:
    """Open ``goto_target`` (``"<file>:<line>"``) with ``editor_command``."""
    if shutil.which(editor_command[0]) is None:
        raise ToolNotInstalled(editor_command[0])
    cmd = [*editor_command, goto_target]
    logger.debug("launching editor: %s", cmd)
    try:
        subprocess.Popen(
            cmd,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise EditorFailed(f"Failed to open {goto_target} in {editor_command[0]}: {exc}") from exc
