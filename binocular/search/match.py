"""Match records produced from search output and the builder that assembles them."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..ansi import sanitize_line
from ..ui_theme import PickerTheme


@dataclass(frozen=True)
class MatchRecord:
    """One matched line plus its surrounding context, in file order.

    ``context_text`` is the newline-joined pre-context, matched line, and
    post-context. ``match_offset`` is the matched line's index within it.
    """

    file_path: str
    line_number: int
    matched_text: str
    context_text: str
    match_offset: int = 0

    def list_row(self, theme: PickerTheme) -> str:
        """Return the styled results-list row for this match."""
        return (
            f"{theme.filepath}{sanitize_line(self.file_path)} [{self.line_number}]{theme.reset} "
            f"{sanitize_line(self.matched_text)}"
        )

    def preview(self) -> str:
        return self.context_text

    def preview_focus_line(self) -> int | None:
        return self.match_offset

    def goto_target(self) -> str:
        """Return the ``file:line`` argument understood by editors' goto flags."""
        return f"{self.file_path}:{self.line_number}"


@dataclass
class MatchBuilder:
    """Accumulates one match while its context block is still being read."""

    file_path: str
    line_number: int
    matched_text: str
    context_lines: int
    pre_context: list[str] = field(default_factory=list)
    post_context: list[str] = field(default_factory=list)
    post_context_collected: bool = False

    def add_pre_context(self, context: dict[int, str]) -> MatchBuilder:
        """Pull up to ``context_lines`` earlier lines present in ``context``."""
        first = max(0, self.line_number - self.context_lines)
        for line_number in range(first, self.line_number):
            line = context.get(line_number)
            if line is not None:
                self.pre_context.append(line)
        return self

    def add_post_context(self, context: dict[int, str]) -> MatchBuilder:
        """Pull up to ``context_lines`` later lines present in ``context``.

        Only the first call collects anything: once the match's own block has
        been read, later blocks must not contribute.
        """
        if self.post_context_collected:
            return self
        self.post_context_collected = True
        last = self.line_number + self.context_lines
        for line_number in range(self.line_number + 1, last + 1):
            line = context.get(line_number)
            if line is not None:
                self.post_context.append(line)
        return self

    def build(self) -> MatchRecord:
        lines = [*self.pre_context, self.matched_text, *self.post_context]
        return MatchRecord(
            file_path=self.file_path,
            line_number=self.line_number,
            matched_text=self.matched_text,
            context_text="\n".join(lines),
            match_offset=len(self.pre_context),
        )
