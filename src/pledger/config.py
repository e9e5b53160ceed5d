# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for pledger.

This module is responsible for:
- loading the optional application configuration from a TOML file,
- exposing typed dataclasses used by the CLI.

Expected sections in the TOML file (all optional)
-------------------------------------------------
[ledger]
    directory: ledger directory, resolved relative to the TOML file.

[display]
    mode:         "summary" (default) or "json".
    tag_width:    width of the tag column in summary tables (default 16).
    amount_width: width of the amount column in summary tables (default 10).

[editor]
    command: editor used by ``--edit``; ``$EDITOR`` is used when unset.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

from .errors import ConfigurationError

DEFAULT_CONFIG_FILE = "pledger.toml"

DISPLAY_MODES = ("summary", "json")


@dataclass(frozen=True)
class DisplayConfig:
    """Output options for the CLI."""

    mode: str = "summary"
    tag_width: int = 16
    amount_width: int = 10


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for pledger.

    Every field has a default so that running without a configuration file
    behaves like an empty one.
    """

    ledger_directory: Optional[Path] = None
    display: DisplayConfig = DisplayConfig()
    editor: Optional[str] = None


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        ConfigurationError: if the file does not exist, cannot be parsed or
            its root is not a table.
    """
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse TOML config file: {path}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid TOML root type in {path}, expected a table.")

    return data


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Config section [{name}] must be a table.")
    return section


def _positive_int(section: Mapping[str, Any], key: str, default: int, where: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"Invalid value for '{where}.{key}' in the configuration. "
            "Expected a positive integer."
        )
    return value


def _parse_display(raw: Mapping[str, Any]) -> DisplayConfig:
    section = _section(raw, "display")

    mode = str(section.get("mode", "summary"))
    if mode not in DISPLAY_MODES:
        raise ConfigurationError(
            f"Invalid value for 'display.mode': {mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )

    return DisplayConfig(
        mode=mode,
        tag_width=_positive_int(section, "tag_width", 16, "display"),
        amount_width=_positive_int(section, "amount_width", 10, "display"),
    )


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the pledger configuration.

    Parameters
    ----------
    config_path :
        Explicit path to a TOML file, which must exist. When omitted,
        ``pledger.toml`` in the current directory is read if present,
        otherwise the defaults are returned.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    ConfigurationError
        If the file is missing (explicit path only), malformed, or holds
        invalid values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        if not config_file.is_file():
            return AppConfig()
    else:
        config_file = Path(config_path).resolve()

    raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Ledger directory
    ledger_section = _section(raw, "ledger")
    directory_raw = ledger_section.get("directory")
    ledger_directory = (base_dir / str(directory_raw)).resolve() if directory_raw else None

    # 2) Display options
    display = _parse_display(raw)

    # 3) Editor
    editor_section = _section(raw, "editor")
    editor = editor_section.get("command") or None

    return AppConfig(
        ledger_directory=ledger_directory,
        display=display,
        editor=str(editor) if editor else None,
    )
