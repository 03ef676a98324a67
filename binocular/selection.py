"""Result list and cursor state shared by keyboard input and search deliveries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .search.match import MatchRecord


@dataclass
class SelectionState:
    """Current results plus the selected index and list scroll offset.

    ``selected_index`` is ``None`` exactly when ``results`` is empty, otherwise a
    valid index. Only the event loop touches this object.
    """

    results: tuple[MatchRecord, ...] = field(default_factory=tuple)
    selected_index: int | None = None
    list_start: int = 0

    def replace(self, results: Sequence[MatchRecord]) -> None:
        """Swap in a complete result set and select its first item."""
        self.results = tuple(results)
        self.selected_index = 0 if self.results else None
        self.list_start = 0

    def move_up(self) -> None:
        if not self.results:
            return
        if self.selected_index is None:
            self.selected_index = 0
        elif self.selected_index == 0:
            self.selected_index = len(self.results) - 1
        else:
            self.selected_index -= 1

    def move_down(self) -> None:
        if not self.results:
            return
        if self.selected_index is None or self.selected_index >= len(self.results) - 1:
            self.selected_index = 0
        else:
            self.selected_index += 1

    def selected(self) -> MatchRecord | None:
        if self.selected_index is None or not self.results:
            return None
        return self.results[self.selected_index]

    def scroll_into_view(self, visible_rows: int) -> int:
        """Clamp ``list_start`` so the selected row is visible and return it."""
        visible_rows = max(1, visible_rows)
        if self.selected_index is not None:
            if self.selected_index < self.list_start:
                self.list_start = self.selected_index
            elif self.selected_index >= self.list_start + visible_rows:
                self.list_start = self.selected_index - visible_rows + 1
        max_start = max(0, len(self.results) - visible_rows)
        self.list_start = max(0, min(self.list_start, max_start))
        return self.list_start
