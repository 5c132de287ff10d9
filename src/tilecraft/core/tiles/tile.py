"""Tile: an immutable rectangular block of text.

A tile is an ordered sequence of lines. Its geometry is derived from those
lines once, on construction:

- ``width``  = length of the longest line (0 for a tile with no lines)
- ``height`` = number of lines

Tiles are values. Every operation returns a new tile and never mutates its
inputs, so a tile can be stored in a registry, referenced from templates and
joined with other tiles freely.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from ..markers import find_references


def split_text(text: str) -> List[str]:
    """Split ``text`` on line breaks, keeping empty lines.

    ``""`` yields ``[""]``: an empty string is one empty line, not zero lines.
    """
    return text.split("\n")


def trim_lines(lines: Sequence[str]) -> List[str]:
    """Normalize indented literal text into a tight block.

    - trailing whitespace is stripped from every line
    - leading and trailing empty lines are dropped
    - the common indentation of the non-empty lines is removed
    """
    stripped = [ln.rstrip() for ln in lines]
    start = 0
    while start < len(stripped) and not stripped[start]:
        start += 1
    end = len(stripped)
    while end > start and not stripped[end - 1]:
        end -= 1
    body = stripped[start:end]

    indents = [len(ln) - len(ln.lstrip()) for ln in body if ln]
    left = min(indents) if indents else 0
    return [ln[left:] for ln in body]


@dataclass(frozen=True)
class Tile:
    """Immutable rectangular text value.

    Lines containing embedded ``\\n`` are split so that ``height`` always
    counts rendered rows.
    """

    lines: Tuple[str, ...] = ()
    width: int = field(init=False, compare=False)
    height: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        source = (self.lines,) if isinstance(self.lines, str) else self.lines
        normalized: List[str] = []
        for ln in source:
            normalized.extend(split_text(str(ln)))
        object.__setattr__(self, "lines", tuple(normalized))
        object.__setattr__(self, "width", max((len(ln) for ln in normalized), default=0))
        object.__setattr__(self, "height", len(normalized))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Tile":
        """Tile with zero lines (width 0, height 0)."""
        return cls(())

    @classmethod
    def from_text(cls, text: str, *, trim: bool = False) -> "Tile":
        """Build a tile by splitting ``text`` on line breaks.

        Args:
            text: Source text, possibly multi-line.
            trim: Apply :func:`trim_lines` (dedent, drop blank edges).
        """
        lines = split_text(text)
        return cls(tuple(trim_lines(lines) if trim else lines))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, trim: bool = False) -> "Tile":
        items = [str(ln) for ln in lines]
        return cls(tuple(trim_lines(items) if trim else items))

    @classmethod
    def blank(cls, width: int, height: int, fill: str = " ") -> "Tile":
        """``height`` lines each made of ``width`` fill characters."""
        if width < 0 or height < 0:
            raise ValueError("blank tile dimensions must be non-negative")
        return cls(tuple(fill * width for _ in range(height)))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.height == 0

    def dimensions(self) -> Tuple[int, int]:
        """Return ``(width, height)``."""
        return self.width, self.height

    def to_text(self) -> str:
        """Render the tile: lines joined with line breaks."""
        return "\n".join(self.lines)

    def flatten(self) -> str:
        """Collapse into one line: each line stripped, joined without separator."""
        return "".join(ln.strip() for ln in self.lines)

    def references(self) -> List[str]:
        """Names of ``@{name}`` markers in the raw lines, in order of appearance."""
        return find_references(self.to_text())

    def has_references(self) -> bool:
        return bool(self.references())

    def padded(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        fill: str = " ",
    ) -> "Tile":
        """Right-pad every line to ``width`` and add blank lines up to ``height``.

        Missing arguments default to the tile's own dimensions, so
        ``tile.padded()`` squares off ragged lines.
        """
        w = self.width if width is None else max(width, self.width)
        h = self.height if height is None else max(height, self.height)
        rows = [ln.ljust(w, fill) for ln in self.lines]
        rows.extend(fill * w for _ in range(h - self.height))
        return Tile(tuple(rows))

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: "Tile") -> "Tile":
        """Side by side: ``a + b`` is ``horizontal_join([a, b])``."""
        if not isinstance(other, Tile):
            return NotImplemented
        from ..layout.join import horizontal_join

        return horizontal_join([self, other])

    def __or__(self, other: "Tile") -> "Tile":
        """Stacked: ``a | b`` is ``vertical_join([a, b])``."""
        if not isinstance(other, Tile):
            return NotImplemented
        from ..layout.join import vertical_join

        return vertical_join([self, other])

    def __str__(self) -> str:
        return self.to_text()

    def __iter__(self):
        return iter(self.lines)


def to_text(tile: Tile) -> str:
    """Render ``tile`` as text (lines rejoined with line breaks)."""
    return tile.to_text()


__all__ = ["Tile", "to_text", "split_text", "trim_lines"]
