"""Command-line front door for binocular.

Parses options, loads configuration, sets up logging, and starts the picker.
Fatal configuration and terminal errors exit with a one-line message.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from .config import MAX_CONTEXT_LINES, load_config
from .errors import ConfigError, TerminalError
from .logs import configure_logging
from .runtime import run_picker

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _context_lines(value: str) -> int:
    """argparse type for the context-line count."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not 0 <= parsed <= MAX_CONTEXT_LINES:
        raise argparse.ArgumentTypeError(f"value must be between 0 and {MAX_CONTEXT_LINES}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binocular",
        description="Search a directory with ripgrep as you type and open matches in your editor.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to search. Defaults to current directory.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json (default: per-user config).")
    parser.add_argument(
        "--context",
        type=_context_lines,
        default=None,
        help="Context lines shown around each match (overrides config).",
    )
    parser.add_argument(
        "--discard-stale",
        action="store_true",
        help="Ignore results that arrive for queries older than the last applied one.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: WARNING).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the picker."""
    args = build_parser().parse_args(argv)

    root = Path(args.path) if args.path is not None else Path.cwd()
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    try:
        configure_logging(args.log_level, args.log_file)
    except OSError as exc:
        raise SystemExit(f"Cannot open log file: {exc}") from exc
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("config error: %s", exc)
        raise SystemExit(str(exc)) from exc
    if args.context is not None:
        config = replace(config, context_lines=args.context)
    if args.discard_stale:
        config = replace(config, discard_stale_results=True)

    try:
        run_picker(root.resolve(), config)
    except TerminalError as exc:
        logger.error("terminal error: %s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
