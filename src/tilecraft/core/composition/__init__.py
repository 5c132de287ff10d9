"""Template resolution: turn ``@{name}`` templates into tiles."""
from __future__ import annotations

from .report import ResolutionReport
from .resolver import TileResolver, resolve, resolve_and_store

__all__ = [
    "ResolutionReport",
    "TileResolver",
    "resolve",
    "resolve_and_store",
]
