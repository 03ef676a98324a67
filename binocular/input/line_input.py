"""Single-line query editor backing the input box."""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import char_display_width


@dataclass
class InputState:
    """Query text and a cursor measured in characters."""

    value: str = ""
    cursor: int = 0

    def _set(self, value: str, cursor: int) -> bool:
        changed = value != self.value
        self.value = value
        self.cursor = max(0, min(cursor, len(value)))
        return changed

    def handle_key(self, key: str) -> bool:
        """Apply one key token and return whether the text changed.

        Unknown tokens are ignored.
        """
        if len(key) == 1 and key.isprintable():
            return self._set(self.value[: self.cursor] + key + self.value[self.cursor :], self.cursor + 1)
        if key == "BACKSPACE":
            if self.cursor == 0:
                return False
            return self._set(self.value[: self.cursor - 1] + self.value[self.cursor :], self.cursor - 1)
        if key in {"DELETE", "CTRL_D"}:
            return self._set(self.value[: self.cursor] + self.value[self.cursor + 1 :], self.cursor)
        if key in {"LEFT", "CTRL_B"}:
            self.cursor = max(0, self.cursor - 1)
        elif key in {"RIGHT", "CTRL_F"}:
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in {"HOME", "CTRL_A"}:
            self.cursor = 0
        elif key in {"END", "CTRL_E"}:
            self.cursor = len(self.value)
        elif key == "CTRL_U":
            return self._set(self.value[self.cursor :], 0)
        elif key == "CTRL_K":
            return self._set(self.value[: self.cursor], self.cursor)
        elif key == "CTRL_W":
            head = self.value[: self.cursor].rstrip(" ")
            word_start = head.rfind(" ") + 1
            return self._set(self.value[:word_start] + self.value[self.cursor :], word_start)
        return False

    def visual_cursor(self) -> int:
        """Display column of the cursor."""
        col = 0
        for ch in self.value[: self.cursor]:
            col += char_display_width(ch, col)
        return col

    def visual_scroll(self, width: int) -> int:
        """Horizontal scroll (in columns) that keeps the cursor inside ``width``."""
        overflow = max(0, self.visual_cursor() - max(1, width) + 1)
        scroll = 0
        col = 0
        for ch in self.value:
            if scroll >= overflow:
                break
            w = char_display_width(ch, col)
            scroll += w
            col += w
        return scroll
