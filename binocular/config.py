"""JSON configuration loading.

Reads ``config.json`` from the per-user config directory and merges its
optional overrides over built-in defaults. A missing file means defaults;
a file that exists but cannot be used raises ``ConfigError``.
"""

from __future__ import annotations

import json
import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError
from .search.parser import DEFAULT_CONTEXT_LINES
from .ui_theme import DEFAULT_THEME, PickerTheme, color_to_sgr

logger = logging.getLogger(__name__)

APP_NAME = "binocular"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_EDITOR_COMMAND: tuple[str, ...] = ("code", "--goto")
MAX_CONTEXT_LINES = 50

_COLOR_KEYS = ("base", "filepath", "match", "selection")


@dataclass(frozen=True)
class PickerConfig:
    theme: PickerTheme = DEFAULT_THEME
    editor_command: tuple[str, ...] = field(default=DEFAULT_EDITOR_COMMAND)
    context_lines: int = DEFAULT_CONTEXT_LINES
    discard_stale_results: bool = False


def _parse_theme(raw_colors: object) -> PickerTheme:
    if raw_colors is None:
        return DEFAULT_THEME
    if not isinstance(raw_colors, dict):
        raise ConfigError("'colors' must be a JSON object")

    overrides: dict[str, str] = {}
    for key in _COLOR_KEYS:
        value = raw_colors.get(key)
        if value is None:
            continue
        try:
            overrides[key] = color_to_sgr(value)
        except ValueError as exc:
            raise ConfigError(f"colors.{key}: {exc}") from exc
    return PickerTheme(
        base=overrides.get("base", DEFAULT_THEME.base),
        filepath=overrides.get("filepath", DEFAULT_THEME.filepath),
        match=overrides.get("match", DEFAULT_THEME.match),
        selection=overrides.get("selection", DEFAULT_THEME.selection),
    )


def _parse_editor(raw_editor: object) -> tuple[str, ...]:
    if raw_editor is None:
        return DEFAULT_EDITOR_COMMAND
    if isinstance(raw_editor, str):
        try:
            command = tuple(shlex.split(raw_editor))
        except ValueError as exc:
            raise ConfigError(f"editor: {exc}") from exc
    elif isinstance(raw_editor, list) and all(isinstance(part, str) for part in raw_editor):
        command = tuple(raw_editor)
    else:
        raise ConfigError("'editor' must be a string or a list of strings")
    if not command:
        raise ConfigError("'editor' must not be empty")
    return command


def _parse_context_lines(raw_value: object) -> int:
    if raw_value is None:
        return DEFAULT_CONTEXT_LINES
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise ConfigError("'context_lines' must be an integer")
    if not 0 <= raw_value <= MAX_CONTEXT_LINES:
        raise ConfigError(f"'context_lines' must be between 0 and {MAX_CONTEXT_LINES}")
    return raw_value


def _parse_discard_stale(raw_value: object) -> bool:
    if raw_value is None:
        return False
    if not isinstance(raw_value, bool):
        raise ConfigError("'discard_stale_results' must be true or false")
    return raw_value


def config_from_mapping(data: dict[str, object]) -> PickerConfig:
    """Merge a decoded config object over the defaults. Unknown keys are ignored."""
    return PickerConfig(
        theme=_parse_theme(data.get("colors")),
        editor_command=_parse_editor(data.get("editor")),
        context_lines=_parse_context_lines(data.get("context_lines")),
        discard_stale_results=_parse_discard_stale(data.get("discard_stale_results")),
    )


def load_config(path: Path | None = None) -> PickerConfig:
    """Load configuration from ``path`` (default: per-user config file).

    Returns defaults when the file does not exist. Unreadable files, invalid
    JSON, a non-object top level, or invalid values raise ``ConfigError``.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no configuration file at %s, using defaults", config_path)
        return PickerConfig()
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file {config_path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse configuration file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a JSON object")

    config = config_from_mapping(data)
    logger.debug("loaded configuration from %s", config_path)
    return config
