"""Tilecraft configuration system.

Usage:
    from tilecraft.core.config import ConfigManager, get_cached_config
    from tilecraft.core.config.domains import ResolutionConfig

    # Direct config manager usage
    config = ConfigManager(overrides={"resolution": {"strict": False}}).load_config()

    # Domain-specific accessors; built-in defaults unless a mapping is given
    resolution = ResolutionConfig(get_cached_config())
    depth = resolution.max_depth
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import FramingConfig, ResolutionConfig

__all__ = [
    # Core
    "ConfigManager",
    "BaseDomainConfig",
    # Caching
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    # Domain configs
    "FramingConfig",
    "ResolutionConfig",
]
