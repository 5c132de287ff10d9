"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. The cache key fingerprints every ``TILECRAFT_*`` environment
variable so overrides set after a first load are picked up.
"""
from __future__ import annotations

import hashlib
import os
from typing import Any, Dict

from .manager import ENV_PREFIX, ConfigManager

_config_cache: Dict[str, Dict[str, Any]] = {}


def _cache_key() -> str:
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    digest = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()
    return f"default:{digest}"


def get_cached_config() -> Dict[str, Any]:
    """Return the merged, validated configuration (cached).

    Returns:
        Configuration dictionary. Callers must not mutate it.
    """
    key = _cache_key()
    cached = _config_cache.get(key)
    if cached is None:
        cached = ConfigManager().load_config(validate=True)
        _config_cache[key] = cached
    return cached


def clear_all_caches() -> None:
    """Drop every cached configuration (useful for testing)."""
    _config_cache.clear()


def is_cached() -> bool:
    """Check whether configuration for the current environment is cached."""
    return _cache_key() in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
