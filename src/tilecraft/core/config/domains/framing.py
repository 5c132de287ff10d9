"""Domain-specific configuration for framing."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig

DEFAULT_HORIZONTAL_BORDER = "="
DEFAULT_VERTICAL_BORDER = "|"
DEFAULT_FILL = " "


class FramingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "framing"

    @cached_property
    def horizontal_border(self) -> str:
        return str(self.section.get("horizontal_border", DEFAULT_HORIZONTAL_BORDER))

    @cached_property
    def vertical_border(self) -> str:
        return str(self.section.get("vertical_border", DEFAULT_VERTICAL_BORDER))

    @cached_property
    def fill(self) -> str:
        return str(self.section.get("fill", DEFAULT_FILL))


__all__ = ["FramingConfig", "DEFAULT_HORIZONTAL_BORDER", "DEFAULT_VERTICAL_BORDER", "DEFAULT_FILL"]
