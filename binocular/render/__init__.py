"""Frame composition for the picker screen.

Layout, top to bottom inside a one-cell margin: preview box, results box,
input box, and a status row. Frames are built as strings and written to the
terminal in one ``os.write`` call.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from ..ansi import ANSI_ESCAPE_RE, char_display_width, clip_ansi_line, display_width, fit_ansi_line, sanitize_line
from ..errors import TerminalError
from ..input.line_input import InputState
from ..picker import PickerItem
from ..ui_theme import PickerTheme
from .boxes import box_lines
from .help import build_help_overlay

MARGIN = 1
PREVIEW_HEIGHT = 10
INPUT_HEIGHT = 3
STATUS_HEIGHT = 1
MIN_RESULTS_HEIGHT = 3
HIGHLIGHT_SYMBOL = ">> "
HELP_LABEL = "Help (?)"


@dataclass(frozen=True)
class PaneLayout:
    """Pane rows (0-based screen rows) and sizes for one terminal size."""

    left: int
    width: int
    preview_top: int
    preview_height: int
    results_top: int
    results_height: int
    input_top: int
    status_top: int

    @property
    def results_rows(self) -> int:
        return max(0, self.results_height - 2)

    @property
    def input_columns(self) -> int:
        return max(1, self.width - 2)


def compute_layout(width: int, height: int) -> PaneLayout:
    inner_width = max(0, width - 2 * MARGIN)
    inner_height = max(0, height - 2 * MARGIN)
    fixed = INPUT_HEIGHT + STATUS_HEIGHT
    preview_height = min(PREVIEW_HEIGHT, max(0, inner_height - fixed - MIN_RESULTS_HEIGHT))
    results_height = max(0, inner_height - fixed - preview_height)
    preview_top = MARGIN
    results_top = preview_top + preview_height
    input_top = results_top + results_height
    return PaneLayout(
        left=MARGIN,
        width=inner_width,
        preview_top=preview_top,
        preview_height=preview_height,
        results_top=results_top,
        results_height=results_height,
        input_top=input_top,
        status_top=input_top + INPUT_HEIGHT,
    )


@dataclass
class RenderContext:
    width: int
    height: int
    input: InputState
    items: Sequence[PickerItem]
    selected_index: int | None
    list_start: int
    preview_text: str
    preview_focus_line: int | None
    show_help: bool
    theme: PickerTheme
    status_message: str = ""
    results_title: str = "Results"
    preview_title: str = "Preview"
    input_title: str = "Input"


def _result_rows(context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    out: list[str] = []
    for idx in range(context.list_start, min(len(context.items), context.list_start + rows)):
        row = context.items[idx].list_row(theme)
        if idx == context.selected_index:
            plain = ANSI_ESCAPE_RE.sub("", row)
            out.append(f"{theme.selection}{HIGHLIGHT_SYMBOL}{plain}{theme.reset}")
        else:
            out.append(" " * len(HIGHLIGHT_SYMBOL) + row)
    return out


def _preview_rows(context: RenderContext, rows: int) -> list[str]:
    if not context.preview_text:
        return []
    theme = context.theme
    out: list[str] = []
    for idx, line in enumerate(context.preview_text.split("\n")[:rows]):
        clean = sanitize_line(line)
        if idx == context.preview_focus_line:
            out.append(f"{theme.match}{clean}{theme.reset}")
        else:
            out.append(clean)
    return out


def _scrolled_input(input_state: InputState, columns: int) -> tuple[str, int]:
    """Return visible query text and the cursor column inside the box."""
    scroll = input_state.visual_scroll(columns)
    col = 0
    start = 0
    for ch in input_state.value:
        if col >= scroll:
            break
        col += char_display_width(ch, col)
        start += 1
    visible = clip_ansi_line(sanitize_line(input_state.value[start:]), columns)
    cursor = max(input_state.visual_cursor(), scroll) - scroll
    return visible, min(cursor, columns - 1)


def _status_row(context: RenderContext, width: int) -> str:
    theme = context.theme
    label_width = display_width(HELP_LABEL)
    left = sanitize_line(context.status_message)
    if not left:
        left = f"{len(context.items)} matches" if context.items else ""
    left = fit_ansi_line(left, max(0, width - label_width - 1))
    return f"{left} {theme.base}{HELP_LABEL}{theme.reset}"


def build_frame(context: RenderContext) -> str:
    """Compose one complete frame, including cursor placement."""
    layout = compute_layout(context.width, context.height)
    blank = " " * max(0, context.width)
    screen = [blank for _ in range(max(0, context.height))]

    def place(top: int, lines: list[str]) -> None:
        for offset, line in enumerate(lines):
            row = top + offset
            if 0 <= row < len(screen):
                pad_left = " " * layout.left
                screen[row] = fit_ansi_line(pad_left + line, context.width)

    place(
        layout.preview_top,
        box_lines(
            context.preview_title,
            _preview_rows(context, max(0, layout.preview_height - 2)),
            layout.width,
            layout.preview_height,
            context.theme,
        ),
    )
    place(
        layout.results_top,
        box_lines(
            context.results_title,
            _result_rows(context, layout.results_rows),
            layout.width,
            layout.results_height,
            context.theme,
        ),
    )
    visible_query, cursor_col = _scrolled_input(context.input, layout.input_columns)
    place(
        layout.input_top,
        box_lines(context.input_title, [visible_query], layout.width, INPUT_HEIGHT, context.theme),
    )
    place(layout.status_top, [_status_row(context, layout.width)])

    out: list[str] = ["\033[?25l"]
    for row, line in enumerate(screen):
        out.append(f"\033[{row + 1};1H{line}{context.theme.reset}")
    if context.show_help:
        out.append(build_help_overlay(context.width, context.height, context.theme))
    else:
        cursor_row = layout.input_top + 2
        cursor_column = layout.left + 2 + cursor_col
        out.append(f"\033[{cursor_row};{cursor_column}H\033[?25h")
    return "".join(out)


def render_frame(context: RenderContext, stdout_fd: int) -> None:
    """Write one frame to ``stdout_fd``; write failures are fatal."""
    try:
        os.write(stdout_fd, build_frame(context).encode("utf-8", errors="replace"))
    except OSError as exc:
        raise TerminalError(f"Failed to draw terminal: {exc}") from exc


__all__ = [
    "HELP_LABEL",
    "HIGHLIGHT_SYMBOL",
    "PaneLayout",
    "RenderContext",
    "build_frame",
    "compute_layout",
    "render_frame",
]
