"""Domain-specific configuration accessors."""
from __future__ import annotations

from .framing import FramingConfig
from .resolution import ResolutionConfig

__all__ = ["FramingConfig", "ResolutionConfig"]
