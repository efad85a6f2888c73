#!/usr/bin/env python3
"""
Application Settings
====================
Reads huaming/configs/app.yaml: engine defaults, the log format and the
input limits of the command-line interface.

Per-deployment overrides (.env and HUAMING_* variables) are handled in
huaming.config; this module only covers the YAML file shipped with the
package.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=4)
def load_app_config(path: Path = APP_CONFIG_PATH) -> dict:
    """Parse an application settings file (cached per path)."""
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def get_setting(dotted: str, default: Any = None, config: dict | None = None) -> Any:
    """
    Look up a dotted key such as `engine.default_gender`.

    Returns `default` as soon as any part of the path is missing.
    """
    node: Any = load_app_config() if config is None else config
    for key in dotted.split('.'):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


# =============================================================================
# CLI Settings
# =============================================================================

@dataclass(frozen=True)
class CliSettings:
    """Input limits and labels of the command-line interface."""
    name_max_length: int = 40
    name_pattern: str = r"^[A-Za-z][A-Za-z '\-]*$"
    table_title: str = "Chinese name suggestions"


def cli_settings(config: dict | None = None) -> CliSettings:
    """The `cli` section of app.yaml, with defaults for missing keys."""
    section = get_setting('cli', None, config) or {}
    defaults = CliSettings()
    try:
        max_length = int(section.get('name_max_length', defaults.name_max_length))
    except (TypeError, ValueError):
        raise ValueError(f"cli.name_max_length must be an integer, got {section.get('name_max_length')!r}")
    return CliSettings(
        name_max_length=max_length,
        name_pattern=str(section.get('name_pattern', defaults.name_pattern)),
        table_title=str(section.get('table_title', defaults.table_title)),
    )


def resolve_path(value, base: Path | None = None) -> Path:
    """Expand `~` and anchor relative paths at the package directory."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or PACKAGE_ROOT) / path).resolve()


__all__ = [
    "load_app_config",
    "get_setting",
    "CliSettings",
    "cli_settings",
    "resolve_path",
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
]
