"""
TOML-based config file loading for recentfiles.

Searches for `.recentfiles.toml`, `recentfiles.toml`, or
`pyproject.toml [tool.recentfiles]` walking up from the current directory.
Config values are merged with CLI flags using three-way precedence: explicit CLI
flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

from recentfiles.log import get_logger

log = get_logger(__name__)


@dataclass
class RecentFilesConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Listing and picking
    count: int | None = None
    threshold: int | None = None
    editor: str | None = None
    preview_lines: int | None = None
    # Scanning
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".recentfiles.toml", "recentfiles.toml", "pyproject.toml"]

_TOOL_SECTION = "recentfiles"

_VALID_FIELDS = {f.name for f in fields(RecentFilesConfig)}

_INT_FIELDS = {"count", "threshold", "preview_lines"}
_LIST_FIELDS = {"exclude", "extend_exclude"}


def _valid_value(name: str, value: Any) -> bool:
    if name in _INT_FIELDS:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if name in _LIST_FIELDS:
        return isinstance(value, list) and all(isinstance(v, str) for v in cast(list[Any], value))
    if name == "respect_gitignore":
        return isinstance(value, bool)
    return isinstance(value, str)


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.recentfiles.toml` >
    `recentfiles.toml` > `pyproject.toml` (only if it has `[tool.recentfiles]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.recentfiles] section."""
    try:
        data = tomllib.loads(path.read_text())
        tool = data.get("tool", {})
        return isinstance(tool, dict) and _TOOL_SECTION in tool
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> RecentFilesConfig:
    """
    Load a `RecentFilesConfig` from a TOML file. TOML kebab-case keys are
    mapped to Python snake_case. Malformed TOML is reported and yields an
    empty config.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        log.warning("Warning: ignoring malformed config %s: %s", config_path, e)
        return RecentFilesConfig()

    if config_path.name == "pyproject.toml":
        tool = data.get("tool", {})
        section = tool.get(_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
        data = cast(dict[str, Any], section) if isinstance(section, dict) else {}

    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> RecentFilesConfig:
    """Parse a flat or sectioned TOML dict into RecentFilesConfig."""
    # Flatten sections: [scan] and [picker] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            log.warning("Warning: unrecognized config key: %s", key)
        elif not _valid_value(snake_key, value):
            log.warning("Warning: ignoring invalid value for config key %s: %r", key, value)
        else:
            mapped[snake_key] = value

    return RecentFilesConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: RecentFilesConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(RecentFilesConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
