"""Utility functions for configuration and settings."""

import json
import logging
import os
from typing import Dict, Any, Optional

log = logging.getLogger(__name__)

CONFIG_ENV = "MCWORLDINFO_CONFIG"
CONFIG_FILE = "config.json"

DEFAULTS: Dict[str, Any] = {
    "metadata_filename": "level.dat",
    "max_depth": 512,
    "workers": 1,
    "label_width": 40,
    "log_level": "INFO",
    "log_file": None,
}


def _config_path(path: Optional[str] = None) -> str:
    if path:
        return path
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return env_path
    return os.path.join(os.getcwd(), CONFIG_FILE)


def load_cfg(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from config.json, layered over DEFAULTS.

    Args:
        path: explicit config file; falls back to $MCWORLDINFO_CONFIG, then
              config.json in the working directory

    Returns:
        dict with every key in DEFAULTS present
    """
    cfg = dict(DEFAULTS)
    config_path = _config_path(path)

    if os.path.exists(config_path):
        with open(config_path) as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_path}: expected a JSON object, got {type(loaded).__name__}")
        cfg.update(loaded)
        log.debug(f"[CONFIG] Loaded {config_path}")

    for key, default in DEFAULTS.items():
        if default is None:
            continue
        value = cfg[key]
        # bool is an int subclass but never a valid count here
        if isinstance(value, bool) or not isinstance(value, type(default)):
            log.warning(f"[CONFIG] Ignoring {key}={value!r}, expected {type(default).__name__}")
            cfg[key] = default
        elif isinstance(value, int) and value < 1:
            log.warning(f"[CONFIG] Ignoring {key}={value!r}, must be at least 1")
            cfg[key] = default

    if cfg["log_file"] is not None and not isinstance(cfg["log_file"], str):
        log.warning(f"[CONFIG] Ignoring log_file={cfg['log_file']!r}, expected a path")
        cfg["log_file"] = None

    return cfg
