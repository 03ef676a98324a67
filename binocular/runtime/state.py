"""Mutable state owned by the event loop."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..input.line_input import InputState
from ..selection import SelectionState


@dataclass
class PickerSession:
    input: InputState = field(default_factory=InputState)
    selection: SelectionState = field(default_factory=SelectionState)
    show_help: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    applied_sequence: int = 0
    dirty: bool = True
