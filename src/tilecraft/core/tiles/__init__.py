"""Tile value type and format argument variants."""
from __future__ import annotations

from .tile import Tile, split_text, to_text, trim_lines
from .arguments import (
    FormatArg,
    SequenceArg,
    TextArg,
    TileArg,
    render_formatted,
    to_argument,
)

__all__ = [
    "Tile",
    "to_text",
    "split_text",
    "trim_lines",
    "FormatArg",
    "TextArg",
    "TileArg",
    "SequenceArg",
    "to_argument",
    "render_formatted",
]
