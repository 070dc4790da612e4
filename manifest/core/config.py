"""Configuration management for the version picker.

Handles loading and caching of the JSON configuration file with environment
variable support (VERSION_PICKER_CONFIG_PATH).

The configuration system provides:
- Centralized config loading with caching
- General settings (interactive mode, log level)
- Manifest endpoint and fetch timeout
- Network retry policy for the HTTP session
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VERSION_PICKER_CONFIG_PATH"
DEFAULT_MANIFEST_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"

_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def get_config(force_reload: bool = False) -> Dict[str, Any]:
    """Load project configuration JSON.

    Looks for the path in VERSION_PICKER_CONFIG_PATH; falls back to 'config.json' in CWD.
    Caches the result unless force_reload is True.

    Returns:
        Configuration dictionary (empty dict if file not found or invalid)
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload:
        return _CONFIG_CACHE

    path = os.environ.get(CONFIG_ENV_VAR, "config.json")
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                loaded = json.load(f) or {}
            if not isinstance(loaded, dict):
                logger.error("Config file %s must contain a JSON object; ignoring it", path)
                loaded = {}
            _CONFIG_CACHE = loaded
        else:
            _CONFIG_CACHE = {}
    except (OSError, ValueError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        _CONFIG_CACHE = {}

    return _CONFIG_CACHE


def get_general_config() -> Dict[str, Any]:
    """Get general configuration section with defaults."""
    cfg = get_config()
    gen = dict(cfg.get("general", {}) or {})

    gen.setdefault("interactive_mode", True)
    gen.setdefault("log_level", "INFO")

    return gen


def get_manifest_config() -> Dict[str, Any]:
    """Get manifest endpoint configuration with defaults."""
    cfg = get_config()
    man = dict(cfg.get("manifest", {}) or {})

    man.setdefault("url", DEFAULT_MANIFEST_URL)
    man.setdefault("timeout_s", 15)

    return man


def get_network_config() -> Dict[str, Any]:
    """Return the network retry policy, with sensible defaults.

    Returns:
        Network configuration dictionary with all fields populated
    """
    cfg = get_config()
    net = dict(cfg.get("network", {}) or {})

    net.setdefault("max_attempts", 3)
    net.setdefault("base_backoff_s", 1.0)
    net.setdefault("backoff_multiplier", 1.5)
    net.setdefault("max_backoff_s", 30.0)
    net.setdefault("verify_ssl", True)

    # Ensure headers is a dict if provided
    if not isinstance(net.get("headers", {}), dict):
        net["headers"] = {}
    net.setdefault("headers", {})

    return net
