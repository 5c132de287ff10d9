"""
Tilecraft - compose text from named rectangular tiles

Tiles are immutable multi-line text blocks. Store them by name, reference
them from templates with ``@{name}``, and join or frame them while keeping
their rectangular alignment.
"""

from tilecraft.core.composition import (
    ResolutionReport,
    TileResolver,
    resolve,
    resolve_and_store,
)
from tilecraft.core.exceptions import (
    ConfigError,
    ResolutionCycleError,
    TileFormatError,
    TilecraftError,
    UnresolvedReferenceError,
)
from tilecraft.core.layout import (
    beside,
    dimensions,
    frame,
    horizontal_join,
    pad_lines,
    vertical_join,
)
from tilecraft.core.registry import TileRegistry, get_registry, reset_registry
from tilecraft.core.tiles import SequenceArg, TextArg, Tile, TileArg, to_text

__version__ = "1.0.0"
__all__ = [
    "__version__",
    # Tiles
    "Tile",
    "to_text",
    "TextArg",
    "TileArg",
    "SequenceArg",
    # Registry
    "TileRegistry",
    "get_registry",
    "reset_registry",
    # Resolution
    "TileResolver",
    "ResolutionReport",
    "resolve",
    "resolve_and_store",
    # Layout
    "dimensions",
    "pad_lines",
    "horizontal_join",
    "vertical_join",
    "beside",
    "frame",
    # Errors
    "TilecraftError",
    "UnresolvedReferenceError",
    "ResolutionCycleError",
    "TileFormatError",
    "ConfigError",
]
