"""Geometry, join engine and framing."""
from __future__ import annotations

from .geometry import dimensions, pad_lines
from .join import beside, horizontal_join, vertical_join
from .framing import frame

__all__ = [
    "dimensions",
    "pad_lines",
    "horizontal_join",
    "vertical_join",
    "beside",
    "frame",
]
