"""Draw a rectangular border around a tile.

Example (``frame(Tile.from_text("1    One"), 2, 1)``)::

    ==============
    |            |
    |  1    One  |
    |            |
    ==============
"""
from __future__ import annotations

import logging
from typing import Optional

from ..config.domains import FramingConfig
from ..tiles import Tile
from .geometry import dimensions
from .join import horizontal_join, vertical_join

logger = logging.getLogger(__name__)


def frame(
    tile: Tile,
    width_spacing: int = 0,
    height_spacing: int = 0,
    *,
    horizontal: Optional[str] = None,
    vertical: Optional[str] = None,
    fill: Optional[str] = None,
    config: Optional[FramingConfig] = None,
) -> Tile:
    """Wrap ``tile`` in a border with optional interior spacing.

    Zero spacing inserts no spacer rows or columns at all, so
    ``frame(t, 0, 0)`` has a top line of ``t.width + 2`` border characters
    and side columns exactly ``t.height`` tall.

    Args:
        tile: Content to frame.
        width_spacing: Blank columns added on each side of the content.
        height_spacing: Blank rows added above and below the content.
        horizontal: Top/bottom border character (default ``=``).
        vertical: Left/right border character (default ``|``).
        fill: Spacer character (default blank).
        config: Framing configuration. Built-in defaults apply when None.
    """
    if width_spacing < 0 or height_spacing < 0:
        raise ValueError("frame spacing must be non-negative")

    if horizontal is None or vertical is None or fill is None:
        cfg = config or FramingConfig()
        horizontal = cfg.horizontal_border if horizontal is None else horizontal
        vertical = cfg.vertical_border if vertical is None else vertical
        fill = cfg.fill if fill is None else fill

    # Spacers span the full body so joins never pad them with plain blanks.
    body = tile
    if height_spacing > 0:
        vspacer = Tile.blank(max(tile.width, 1), height_spacing, fill)
        body = vertical_join([vspacer, body, vspacer])
    if width_spacing > 0:
        hspacer = Tile.blank(width_spacing, max(body.height, 1), fill)
        body = horizontal_join([hspacer, body, hspacer])

    width, height = dimensions(body)
    logger.debug("Framing %dx%d body", width, height)

    edge = Tile((horizontal * (width + 2),))
    side = Tile(tuple(vertical for _ in range(height)))
    middle = horizontal_join([side, body, side])
    return vertical_join([edge, middle, edge])


__all__ = ["frame"]
