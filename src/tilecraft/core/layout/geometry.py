"""Tile geometry helpers."""
from __future__ import annotations

from typing import Optional, Tuple

from ..tiles import Tile


def dimensions(tile: Tile) -> Tuple[int, int]:
    """Return ``(width, height)`` of ``tile``.

    Width is the longest line length in characters (0 for an empty tile),
    height is the line count.
    """
    return tile.width, tile.height


def pad_lines(
    tile: Tile,
    width: Optional[int] = None,
    height: Optional[int] = None,
    fill: str = " ",
) -> Tile:
    """Right-pad ``tile`` to ``width`` and bottom-pad it to ``height``.

    Targets smaller than the tile are ignored; nothing is ever cut.
    """
    if len(fill) != 1:
        raise ValueError("fill must be a single character")
    return tile.padded(width, height, fill)


__all__ = ["dimensions", "pad_lines"]
