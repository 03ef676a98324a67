"""Exception hierarchy shared by search, editor, config, and terminal layers.

Per-search and editor failures are recoverable and end up as status
messages. ``ConfigError`` and ``TerminalError`` abort the program.
"""

from __future__ import annotations


class PickerError(Exception):
    """Base class for all binocular errors."""

    @property
    def message(self) -> str:
        return str(self)


class ToolNotInstalled(PickerError):
    """An external binary (search tool or editor) could not be found."""

    def __init__(self, tool: str, message: str | None = None) -> None:
        super().__init__(message or f"{tool} is not installed")
        self.tool = tool


class SearchFailed(PickerError):
    """The search tool ran but failed or produced unusable output."""


class MalformedOutput(SearchFailed):
    """A search output line did not match the grouped, line-numbered format."""

    def __init__(self, line: str, reason: str = "unexpected output line") -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line


class EditorFailed(PickerError):
    """The editor binary exists but could not be started."""


class ConfigError(PickerError):
    """The configuration file exists but cannot be used."""


class TerminalError(PickerError):
    """Terminal setup, drawing, or teardown failed."""
