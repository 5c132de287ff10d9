"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- Optional explicit config mapping (from ConfigManager or get_cached_config)
- Built-in defaults when no mapping is given
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Any, Dict, Mapping, Optional


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize domain config.

        Args:
            config: Full configuration mapping. When None, every accessor
                returns its built-in default; no file or environment
                variable is read.
        """
        self._config: Mapping[str, Any] = config if config is not None else {}

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section.

        Returns:
            The config section dict, or empty dict if section doesn't exist.
        """
        return dict(self._config.get(self._config_section(), {}) or {})


__all__ = ["BaseDomainConfig"]
