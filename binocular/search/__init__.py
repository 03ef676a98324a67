"""Search package: ripgrep output parsing and background dispatch."""

from __future__ import annotations

from .dispatcher import (
    CHANNEL_CAPACITY,
    SEARCH_BINARY,
    SearchDelivery,
    SearchDispatcher,
    build_search_command,
    run_search,
)
from .match import MatchBuilder, MatchRecord
from .parser import DEFAULT_CONTEXT_LINES, parse_grouped_output

__all__ = [
    "CHANNEL_CAPACITY",
    "DEFAULT_CONTEXT_LINES",
    "MatchBuilder",
    "MatchRecord",
    "SEARCH_BINARY",
    "SearchDelivery",
    "SearchDispatcher",
    "build_search_command",
    "parse_grouped_output",
    "run_search",
]
