from __future__ import annotations

# studentapp/config.py
import os
from typing import Any

import yaml

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(_PROJECT_ROOT, "config.yaml")

DEFAULTS: dict[str, Any] = {
    "db_path": None,
    "test_db_path": None,
    "log_level": "INFO",
    "app_title": "StudentApp",
}


def read_config_yaml(path: str | None = None) -> dict:
    """Read config.yaml; a missing or broken file falls back to defaults."""
    cfg_path = path or os.environ.get("STUDENTAPP_CONFIG") or CONFIG_PATH
    out = dict(DEFAULTS)
    if not os.path.exists(cfg_path):
        return out
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return out
    if not isinstance(cfg, dict):
        return out
    for k in DEFAULTS:
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_log_level() -> str:
    return (os.environ.get("STUDENTAPP_LOG_LEVEL") or read_config_yaml()["log_level"]).upper()


def get_app_title() -> str:
    return read_config_yaml()["app_title"]
