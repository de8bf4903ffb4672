#!/usr/bin/env python3
"""Settings loader for namekit."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"

LANGUAGES_DIR_ENV = "NAMEKIT_LANGUAGES_DIR"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    """Parse configs/app.yaml once per process; an empty file yields {}."""
    try:
        text = APP_CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"namekit config not found at {APP_CONFIG_PATH}") from None
    return yaml.safe_load(text) or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Look up ``section.key`` in app.yaml, falling back to ``default``."""
    node: Any = load_app_config()
    for key in path.split('.'):
        if isinstance(node, dict) and key in node:
            node = node[key]
        else:
            return default
    return node


def require_setting(path: str) -> Any:
    """Like get_setting, but a missing key is a configuration error."""
    value = get_setting(path)
    if value is None:
        raise ValueError(f"{path} must be set in {APP_CONFIG_PATH.name}")
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Expand ``~`` and anchor relative paths at ``base`` (the package by default)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or PACKAGE_ROOT) / path).resolve()


def languages_dir() -> Path:
    """Directory holding language definition files."""
    override = os.environ.get(LANGUAGES_DIR_ENV)
    if override:
        return resolve_path(override, base=Path.cwd())
    return resolve_path(require_setting('languages.directory'))


__all__ = [
    "load_app_config",
    "get_setting",
    "require_setting",
    "resolve_path",
    "languages_dir",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "LANGUAGES_DIR_ENV",
]
