"""Domain-specific configuration for template resolution."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig

# Built-in values, mirrored by data/config/defaults.yaml.
DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_PASSES = 16
DEFAULT_STRICT = True


class ResolutionConfig(BaseDomainConfig):
    """Bounds and strictness of ``@{name}`` expansion."""

    def _config_section(self) -> str:
        return "resolution"

    @cached_property
    def max_depth(self) -> int:
        return int(self.section.get("max_depth", DEFAULT_MAX_DEPTH))

    @cached_property
    def max_passes(self) -> int:
        return int(self.section.get("max_passes", DEFAULT_MAX_PASSES))

    @cached_property
    def strict(self) -> bool:
        return bool(self.section.get("strict", DEFAULT_STRICT))


__all__ = ["ResolutionConfig", "DEFAULT_MAX_DEPTH", "DEFAULT_MAX_PASSES", "DEFAULT_STRICT"]
