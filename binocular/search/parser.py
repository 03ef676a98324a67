"""Parser for ripgrep's heading-grouped, line-numbered output with context.

The expected stream looks like::

    src/app.py
    8-    import os
    9-
    10:def main():
    11-    pass

    src/other.py
    3:main()

A non-numbered line names the current file, ``N-`` lines are context,
``N:`` lines are matches, and a blank line starts an unrelated block. A
match's post-context comes only from its own block.
Parsing is a single forward scan; all state is local to one call.
"""

from __future__ import annotations

import re

from ..errors import MalformedOutput
from .match import MatchBuilder, MatchRecord

DEFAULT_CONTEXT_LINES = 4
MAX_LINE_NUMBER = 0xFFFF
CONTEXT_SEPARATOR = "-"
MATCH_SEPARATOR = ":"

_LINE_NUMBER_RE = re.compile(r"[0-9]+")


def _split_numbered_line(output_line: str) -> tuple[int, str, str]:
    """Split ``"<digits><sep><text>"`` into line number, separator, and text."""
    digits = _LINE_NUMBER_RE.match(output_line)
    if digits is None:
        raise MalformedOutput(output_line, "expected a line number")
    separator = output_line[digits.end() : digits.end() + 1]
    if separator not in (CONTEXT_SEPARATOR, MATCH_SEPARATOR):
        raise MalformedOutput(output_line, "expected a context or a matching line")
    line_number = int(digits.group(0))
    if line_number > MAX_LINE_NUMBER:
        raise MalformedOutput(output_line, "line number out of range")
    return line_number, separator, output_line[digits.end() + 1 :]


def _output_lines(output: str) -> list[str]:
    lines = output.split("\n")
    # A trailing newline terminates the last line; it is not a blank separator.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_grouped_output(output: str, context_lines: int = DEFAULT_CONTEXT_LINES) -> list[MatchRecord]:
    """Turn one search invocation's stdout into match records in emission order.

    Raises ``MalformedOutput`` when a numbered line is neither context nor match.
    """
    lines = _output_lines(output)
    if not lines:
        return []

    current_file = lines[0]
    context: dict[int, str] = {}
    builder: MatchBuilder | None = None
    results: list[MatchRecord] = []

    for output_line in lines[1:]:
        is_header = bool(output_line) and not _LINE_NUMBER_RE.match(output_line)
        if not output_line or is_header:
            # The block is over: an open match takes its post-context now.
            if builder is not None:
                builder.add_post_context(context)
            context.clear()
            if is_header:
                current_file = output_line
            continue

        line_number, separator, text = _split_numbered_line(output_line)
        context[line_number] = text
        if separator != MATCH_SEPARATOR:
            continue

        if builder is not None:
            results.append(builder.add_post_context(context).build())
        builder = MatchBuilder(current_file, line_number, text, context_lines).add_pre_context(context)

    if builder is not None:
        results.append(builder.add_post_context(context).build())
    return results
