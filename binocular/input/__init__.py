"""Input layer: raw key decoding and the query line editor."""

from .keys import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .line_input import InputState

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "_PENDING_BYTES",
    "InputState",
    "read_key",
]
