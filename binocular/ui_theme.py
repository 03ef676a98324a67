"""Color palette used by the renderer.

Colors come from configuration as names, ``#rrggbb`` strings, or 256-color
palette indexes and are turned into ANSI SGR prefixes here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

RESET = "\033[0m"
BOLD = "\033[1m"

_NAMED_FOREGROUNDS: dict[str, str] = {
    "reset": "39",
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "gray": "37",
    "grey": "37",
    "darkgray": "90",
    "darkgrey": "90",
    "lightred": "91",
    "lightgreen": "92",
    "lightyellow": "93",
    "lightblue": "94",
    "lightmagenta": "95",
    "lightcyan": "96",
    "white": "97",
}
_HEX_COLOR_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def color_to_sgr(value: object) -> str:
    """Translate one configured color into a foreground SGR prefix.

    Raises ``ValueError`` for anything that is not a known color.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid color: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ValueError(f"palette index out of range: {value}")
        return f"\033[38;5;{value}m"
    if not isinstance(value, str):
        raise ValueError(f"invalid color: {value!r}")

    stripped = value.strip()
    hex_match = _HEX_COLOR_RE.match(stripped)
    if hex_match:
        red, green, blue = (int(part, 16) for part in hex_match.groups())
        return f"\033[38;2;{red};{green};{blue}m"
    if stripped.isdigit():
        return color_to_sgr(int(stripped))
    key = stripped.lower().replace("-", "").replace("_", "").replace(" ", "")
    code = _NAMED_FOREGROUNDS.get(key)
    if code is None:
        raise ValueError(f"unknown color name: {value!r}")
    return f"\033[{code}m"


@dataclass(frozen=True)
class PickerTheme:
    """Semantic ANSI palette consumed by the renderer."""

    base: str
    filepath: str
    match: str
    selection: str
    reset: str = RESET
    bold: str = BOLD


DEFAULT_THEME = PickerTheme(
    base=color_to_sgr("LightCyan"),
    filepath=color_to_sgr("LightBlue"),
    match=color_to_sgr("LightMagenta"),
    selection=color_to_sgr("Yellow"),
)
