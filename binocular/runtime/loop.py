"""Main interactive event loop for the picker.

Multiplexes keyboard input with search deliveries from background workers,
updates the session, and redraws after every handled event. The loop is the
only code that mutates ``PickerSession``.
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass

from ..errors import PickerError
from ..input import read_key
from ..picker import GrepPicker
from ..render import RenderContext, compute_layout, render_frame
from ..search.dispatcher import SearchDelivery
from ..ui_theme import PickerTheme
from .state import PickerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"ESC", "CTRL_C"})


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 50
    status_message_seconds: float = 5.0


def set_status_message(session: PickerSession, message: str, timing: RuntimeLoopTiming) -> None:
    session.status_message = message
    session.status_message_until = time.monotonic() + timing.status_message_seconds
    session.dirty = True


def apply_delivery(
    session: PickerSession,
    delivery: SearchDelivery,
    timing: RuntimeLoopTiming,
    discard_stale: bool = False,
) -> bool:
    """Apply one search delivery and return whether it was used.

    By default the last delivery wins even when it answers an older query.
    With ``discard_stale`` deliveries older than the last applied one are
    dropped. Errors leave the current results in place.
    """
    if discard_stale and delivery.sequence < session.applied_sequence:
        logger.debug("dropping stale delivery #%d for %r", delivery.sequence, delivery.query)
        return False
    session.applied_sequence = max(session.applied_sequence, delivery.sequence)

    if delivery.error is not None:
        set_status_message(session, delivery.error.message, timing)
        return True

    session.selection.replace(delivery.results or ())
    session.status_message = ""
    session.status_message_until = 0.0
    session.dirty = True
    logger.debug("applied delivery #%d for %r", delivery.sequence, delivery.query)
    return True


def handle_key(
    key: str,
    session: PickerSession,
    picker: GrepPicker,
    timing: RuntimeLoopTiming,
    discard_stale: bool = False,
) -> bool:
    """Handle one key token. Returns ``True`` when the loop should exit."""
    if key in QUIT_KEYS:
        return True
    session.dirty = True

    if key == "?":
        session.show_help = not session.show_help
        return False
    # Only the help toggle and quit work while the help overlay is shown.
    if session.show_help:
        return False

    if key == "UP":
        session.selection.move_up()
    elif key == "DOWN":
        session.selection.move_down()
    elif key == "ENTER":
        item = session.selection.selected()
        if item is None:
            return False
        try:
            picker.handle_selection(item)
        except PickerError as exc:
            logger.warning("failed to open %s: %s", item.goto_target(), exc)
            set_status_message(session, exc.message, timing)
    elif session.input.handle_key(key):
        immediate = picker.handle_input_change(session.input.value)
        if immediate is not None:
            apply_delivery(session, immediate, timing, discard_stale)
    return False


def _render(
    session: PickerSession,
    picker: GrepPicker,
    theme: PickerTheme,
    stdout_fd: int,
    size: tuple[int, int],
) -> None:
    width, height = size
    layout = compute_layout(width, height)
    session.selection.scroll_into_view(layout.results_rows)
    selected = session.selection.selected()
    render_frame(
        RenderContext(
            width=width,
            height=height,
            input=session.input,
            items=session.selection.results,
            selected_index=session.selection.selected_index,
            list_start=session.selection.list_start,
            preview_text=selected.preview() if selected is not None else "",
            preview_focus_line=selected.preview_focus_line() if selected is not None else None,
            show_help=session.show_help,
            theme=theme,
            status_message=session.status_message,
            preview_title=picker.preview_title,
            input_title=picker.name,
        ),
        stdout_fd,
    )


def run_main_loop(
    session: PickerSession,
    picker: GrepPicker,
    terminal: TerminalController,
    theme: PickerTheme,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    discard_stale: bool = False,
) -> None:
    """Run the picker until a quit key is pressed.

    Terminal state is restored on every exit path by ``terminal.raw_mode()``.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                session.dirty = True
            if session.status_message and time.monotonic() >= session.status_message_until:
                session.status_message = ""
                session.status_message_until = 0.0
                session.dirty = True

            if session.dirty:
                _render(session, picker, theme, terminal.stdout_fd, size)
                session.dirty = False

            delivery = picker.poll_delivery()
            if delivery is not None:
                apply_delivery(session, delivery, timing, discard_stale)
                continue

            try:
                key = read_key(terminal.stdin_fd, timeout_ms=timing.key_poll_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if handle_key(key, session, picker, timing, discard_stale):
                break
