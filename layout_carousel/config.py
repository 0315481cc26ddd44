"""Configuration loader and validator for the layout carousel.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) from
``<user config dir>/layout-carousel-niri/config.json`` or an explicit path.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

import platformdirs

logger = logging.getLogger(__name__)

APP_NAME = 'layout-carousel-niri'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'debug': False,
    'log_file': None,
    'socket_path': None,
    'ipc_timeout': 1.0,
    'lock_timeout': 1.0,
}


def default_config_path() -> str:
    return os.path.join(platformdirs.user_config_dir(APP_NAME, appauthor=False), 'config.json')


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments
    s = re.sub(r"//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


def _float_in_range(conf: dict, key: str, low: float, high: float) -> float:
    raw = conf.get(key, DEFAULT_CONFIG[key])
    if isinstance(raw, bool):
        raise ValueError(f"Invalid '{key}': {raw}")
    try:
        val = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid '{key}': {raw}")
    if not (low <= val <= high):
        raise ValueError(f"Invalid '{key}': {raw} (must be between {low} and {high})")
    return val


def _optional_path(conf: dict, key: str) -> str | None:
    val = conf.get(key, DEFAULT_CONFIG[key])
    if val is None:
        return None
    if not isinstance(val, str) or not val:
        raise ValueError(f"Invalid '{key}': must be a non-empty string or null")
    return os.path.expanduser(val)


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}
    if not isinstance(conf, dict):
        raise ValueError("Config must be a JSON object")

    out = dict(DEFAULT_CONFIG)

    dbg = conf.get('debug', DEFAULT_CONFIG['debug'])
    if not isinstance(dbg, bool):
        raise ValueError("Invalid 'debug' flag: must be boolean")
    out['debug'] = dbg

    out['log_file'] = _optional_path(conf, 'log_file')
    out['socket_path'] = _optional_path(conf, 'socket_path')
    out['ipc_timeout'] = _float_in_range(conf, 'ipc_timeout', 0.05, 10.0)
    out['lock_timeout'] = _float_in_range(conf, 'lock_timeout', 0.0, 10.0)

    return out


def _read_and_merge(path: str, target_config: dict, debug: bool = False) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        if debug:
            logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            if debug:
                logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    try:
        validated = validate_config(cfg)
    except ValueError as verr:
        if debug:
            logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None, debug: bool = False) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to the per-user
    ``config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)
    path = config_path if config_path is not None else default_config_path()

    if os.path.exists(path):
        logger.debug("Loading config from %s", path)
        _read_and_merge(path, config, debug=debug)

    return config
