"""Named tile store.

``TileRegistry`` maps names to tiles. It is a plain, caller-owned object:
pass it to a :class:`~tilecraft.core.composition.TileResolver` explicitly.
For scripts that prefer an ambient store, :func:`get_registry` returns a
per-thread default instance created on first access. Registries are not
synchronized; share one across threads only under external locking.
"""
from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .tiles import Tile, render_formatted, to_argument

logger = logging.getLogger(__name__)

TileLike = Union[Tile, str, Iterable[str]]


def as_tile(value: TileLike) -> Tile:
    """Coerce strings and string sequences into tiles (verbatim, no trimming)."""
    if isinstance(value, Tile):
        return value
    if isinstance(value, str):
        return Tile.from_text(value)
    return Tile.from_lines(value)


class TileRegistry:
    """Mapping from name to tile.

    Later writes overwrite earlier ones. ``clear`` keeps the key and stores the
    empty tile; only ``remove``/``reset`` make a name absent again.

    Example:
        registry = TileRegistry()
        registry.define("greeting", "hello")
        registry.lookup("greeting")   # Tile(lines=('hello',))
        registry.lookup("missing")    # None
    """

    def __init__(self, tiles: Optional[Mapping[str, TileLike]] = None) -> None:
        self._tiles: Dict[str, Tile] = {}
        for name, value in (tiles or {}).items():
            self.define(name, value)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def define(self, name: str, tile: TileLike) -> Tile:
        """Insert or overwrite ``name``. Returns the stored tile."""
        stored = as_tile(tile)
        self._tiles[name] = stored
        logger.debug("Defined tile %r (%dx%d)", name, stored.width, stored.height)
        return stored

    def define_formatted(self, name: str, pattern: Any, *args: Any, **kwargs: Any) -> Tile:
        """Format arguments into ``pattern`` and store the result under ``name``.

        ``pattern`` may itself be a tile or a sequence of strings, in which
        case its text is stored as-is. With no arguments a string pattern is
        stored verbatim.

        Raises:
            TileFormatError: arguments do not fit the pattern. The registry
                is left unchanged.
        """
        if not isinstance(pattern, str):
            if args or kwargs:
                text = render_formatted(to_argument(pattern).render(), args, kwargs)
            else:
                text = to_argument(pattern).render()
        else:
            text = render_formatted(pattern, args, kwargs)
        return self.define(name, Tile.from_text(text))

    def clear(self, name: str) -> None:
        """Reset ``name`` to the empty tile without removing the key."""
        self._tiles[name] = Tile.empty()
        logger.debug("Cleared tile %r", name)

    def lookup(self, name: str) -> Optional[Tile]:
        """Return the tile stored under ``name``, or None if never defined."""
        return self._tiles.get(name)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def remove(self, name: str) -> None:
        """Delete ``name`` entirely; later lookups report it absent."""
        self._tiles.pop(name, None)

    def reset(self) -> None:
        """Delete every entry."""
        self._tiles.clear()

    def names(self) -> List[str]:
        return sorted(self._tiles)

    def blank_names(self) -> List[str]:
        """Names whose tile has zero lines (cleared or defined empty)."""
        return sorted(name for name, tile in self._tiles.items() if tile.is_empty)

    def snapshot(self) -> Mapping[str, Tile]:
        """Read-only copy of the current entries."""
        return MappingProxyType(dict(self._tiles))

    def __contains__(self, name: object) -> bool:
        return name in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"TileRegistry({len(self._tiles)} tiles)"


_local = threading.local()


def get_registry() -> TileRegistry:
    """Return this thread's default registry, creating it on first access."""
    registry = getattr(_local, "registry", None)
    if registry is None:
        registry = TileRegistry()
        _local.registry = registry
        logger.debug("Created default tile registry for thread %s", threading.current_thread().name)
    return registry


def reset_registry() -> None:
    """Drop this thread's default registry; the next access starts empty."""
    _local.registry = None


__all__ = ["TileRegistry", "TileLike", "as_tile", "get_registry", "reset_registry"]
