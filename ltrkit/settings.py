#!/usr/bin/env python3
"""
Settings
========
Reads ltrkit's app.yaml. Set LTRKIT_CONFIG to use another file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "app.yaml"
CONFIG_ENV_VAR = "LTRKIT_CONFIG"


def app_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return DEFAULT_CONFIG_PATH


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    path = app_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    return yaml.safe_load(path.read_text()) or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Look up a setting by dotted path, e.g. "generate.count"."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


__all__ = ["get_setting", "load_app_config", "app_config_path", "CONFIG_ENV_VAR"]
