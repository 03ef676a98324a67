"""Rounded, titled boxes used for every pane."""

from __future__ import annotations

from ..ansi import display_width, fit_ansi_line
from ..ui_theme import PickerTheme


def _top_border(title: str, width: int, theme: PickerTheme) -> str:
    inner = width - 2
    label = f" {title} " if title else ""
    if display_width(label) > inner:
        label = fit_ansi_line(label, inner)
    left = (inner - display_width(label)) // 2
    right = inner - left - display_width(label)
    return f"{theme.base}╭{'─' * left}{theme.bold}{label}{theme.reset}{theme.base}{'─' * right}╮{theme.reset}"


def box_lines(title: str, body: list[str], width: int, height: int, theme: PickerTheme) -> list[str]:
    """Return exactly ``height`` rows of ``width`` columns framing ``body``.

    Body rows beyond the box interior are dropped; missing rows are blank.
    """
    if width < 2 or height < 2:
        return [" " * max(0, width) for _ in range(max(0, height))]
    inner_width = width - 2
    rows = [_top_border(title, width, theme)]
    for idx in range(height - 2):
        content = body[idx] if idx < len(body) else ""
        rows.append(
            f"{theme.base}│{theme.reset}{fit_ansi_line(content, inner_width)}{theme.reset}{theme.base}│{theme.reset}"
        )
    rows.append(f"{theme.base}╰{'─' * inner_width}╯{theme.reset}")
    return rows
