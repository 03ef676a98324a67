"""Runtime package: terminal control, session state, and the event loop."""

from .app import run_picker
from .loop import RuntimeLoopTiming, apply_delivery, handle_key, run_main_loop
from .state import PickerSession
from .terminal import TerminalController

__all__ = [
    "PickerSession",
    "RuntimeLoopTiming",
    "TerminalController",
    "apply_delivery",
    "handle_key",
    "run_main_loop",
    "run_picker",
]
