"""Join engine: combine tiles side by side or stacked.

Both joins return new tiles and leave their inputs untouched. With the same
separator and padding flag they are associative::

    horizontal_join([a, b, c]) == horizontal_join([a, horizontal_join([b, c])])
    vertical_join([a, b, c], True) == vertical_join([vertical_join([a, b], True), c], True)
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..tiles import Tile


def _interleave(tiles: List[Tile], separator: Optional[Tile]) -> List[Tile]:
    sequence: List[Tile] = []
    for idx, tile in enumerate(tiles):
        if idx and separator is not None:
            sequence.append(separator)
        sequence.append(tile)
    return sequence


def horizontal_join(
    tiles: Iterable[Tile],
    separator: Optional[Tile] = None,
    *,
    terminator: Optional[Tile] = None,
) -> Tile:
    """Place tiles side by side.

    Each tile (and the separator) is squared off to its own width, all of
    them are bottom-padded with blank lines to the tallest height, and row
    ``i`` of the result is the concatenation of every row ``i``.

    Args:
        tiles: Tiles to join, left to right. No tiles gives the empty tile.
        separator: Tile inserted between consecutive entries.
        terminator: Tile appended after the last entry.
    """
    entries = list(tiles)
    if not entries:
        return Tile.empty()

    sequence = _interleave(entries, separator)
    if terminator is not None:
        sequence.append(terminator)

    height = max(t.height for t in sequence)
    rows = [""] * height
    for tile in sequence:
        block = tile.padded(tile.width, height)
        rows = [row + part for row, part in zip(rows, block.lines)]
    return Tile(tuple(rows))


def vertical_join(
    tiles: Iterable[Tile],
    pad_to_common_width: bool = False,
    separator: Optional[Tile] = None,
    *,
    terminator: Optional[Tile] = None,
    inline: bool = False,
) -> Tile:
    """Stack tiles top to bottom.

    Args:
        tiles: Tiles to stack. No tiles gives the empty tile.
        pad_to_common_width: Right-pad every line (separator and terminator
            lines included) to the widest input so later borders line up.
        separator: Lines inserted between consecutive tiles. With
            ``inline=True`` it is attached to the right of every tile but the
            last instead.
        terminator: Lines appended after the last tile (attached to its right
            when ``inline=True``).
        inline: Attach separator/terminator beside the tiles instead of
            between them.
    """
    entries = list(tiles)
    if not entries:
        return Tile.empty()

    if inline:
        blocks: List[Tile] = []
        last = len(entries) - 1
        for idx, tile in enumerate(entries):
            suffix = separator if idx < last else terminator
            blocks.append(beside(tile, suffix) if suffix is not None else tile)
    else:
        blocks = _interleave(entries, separator)
        if terminator is not None:
            blocks.append(terminator)

    lines: List[str] = [ln for block in blocks for ln in block.lines]
    if pad_to_common_width:
        width = max(block.width for block in blocks)
        lines = [ln.ljust(width) for ln in lines]
    return Tile(tuple(lines))


def beside(left: Tile, right: Tile) -> Tile:
    """Attach ``right`` to the right of ``left``.

    ``left`` is extended with empty lines when ``right`` is taller. Only the
    rows ``right`` occupies are padded to ``left``'s width, so rows below it
    keep their original length.
    """
    rows = list(left.lines)
    if right.height > len(rows):
        rows.extend([""] * (right.height - len(rows)))
    width = max((len(r) for r in rows), default=0)
    for idx, part in enumerate(right.lines):
        rows[idx] = rows[idx].ljust(width) + part
    return Tile(tuple(rows))


__all__ = ["horizontal_join", "vertical_join", "beside"]
