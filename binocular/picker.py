"""Picker interface between the event loop and a concrete search backend.

The loop only needs list rows and preview text from items, and an object
that reacts to query changes and selections. ``GrepPicker`` is the ripgrep
implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .editor import launch_editor_at
from .search.dispatcher import SearchDelivery, SearchDispatcher
from .search.match import MatchRecord
from .ui_theme import PickerTheme


class PickerItem(Protocol):
    def list_row(self, theme: PickerTheme) -> str: ...

    def preview(self) -> str: ...

    def preview_focus_line(self) -> int | None: ...


class GrepPicker:
    """Live ripgrep search over ``root`` that opens selections in an editor."""

    name = "Live Grep"
    preview_title = "Grep Preview"

    def __init__(
        self,
        dispatcher: SearchDispatcher,
        editor_command: Sequence[str],
    ) -> None:
        self.dispatcher = dispatcher
        self.editor_command = tuple(editor_command)

    @property
    def root(self) -> Path:
        return self.dispatcher.root

    def handle_input_change(self, query: str) -> SearchDelivery | None:
        return self.dispatcher.submit(query)

    def poll_delivery(self) -> SearchDelivery | None:
        return self.dispatcher.poll()

    def handle_selection(self, item: MatchRecord) -> None:
        """Open ``item`` in the editor; raises ``PickerError`` subclasses on failure."""
        launch_editor_at(self.editor_command, item.goto_target(), cwd=self.root)
