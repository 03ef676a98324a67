"""Help overlay content and drawing.

The overlay is a centred box drawn over an already composed frame using
absolute cursor positioning.
"""

from __future__ import annotations

from ..ansi import fit_ansi_line
from ..ui_theme import PickerTheme
from .boxes import box_lines

HELP_BINDINGS: tuple[tuple[str, str], ...] = (
    ("<esc>", "Quit"),
    ("<up>", "Previous result"),
    ("<down>", "Next result"),
    ("<enter>", "Open result in editor"),
    ("?", "Toggle help"),
)
HELP_TITLE = "Help"
HELP_MIN_WIDTH = 40


def help_lines(theme: PickerTheme) -> list[str]:
    return [
        f"  {theme.base}{theme.bold}{key:<15}{theme.reset}{description}"
        for key, description in HELP_BINDINGS
    ]


def help_overlay_geometry(width: int, height: int) -> tuple[int, int, int, int]:
    """Return ``(col, row, box_width, box_height)`` with 0-based origin."""
    box_height = min(len(HELP_BINDINGS) + 2, max(0, height))
    box_width = min(max(HELP_MIN_WIDTH, width // 5), max(0, width))
    col = max(0, (width - box_width) // 2)
    row = max(0, (height - box_height) // 2)
    return col, row, box_width, box_height


def build_help_overlay(width: int, height: int, theme: PickerTheme) -> str:
    """Return escape sequences that draw the help box over the current frame."""
    col, row, box_width, box_height = help_overlay_geometry(width, height)
    if box_width < 3 or box_height < 3:
        return ""

    body = help_lines(theme)
    lines = box_lines(HELP_TITLE, body, box_width, box_height, theme)
    out: list[str] = []
    for offset, line in enumerate(lines):
        out.append(f"\033[{row + offset + 1};{col + 1}H")
        out.append(fit_ansi_line(line, box_width))
        out.append(theme.reset)
    return "".join(out)
