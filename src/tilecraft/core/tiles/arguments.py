"""Format arguments for ``TileRegistry.define_formatted``.

Every raw argument is classified into one of three variants, each with a
defined textual rendering:

- ``TextArg``     - scalars; formatted with the pattern's own format spec
- ``TileArg``     - a :class:`Tile`; rendered as its multi-line text
- ``SequenceArg`` - a list/tuple of strings or tiles; items joined with ``\\n``
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple, Union

from ..exceptions import TileFormatError
from .tile import Tile


@dataclass(frozen=True)
class TextArg:
    value: Any

    def render(self) -> str:
        return str(self.value)

    def format_value(self) -> Any:
        # Raw value, so numeric specs like {:>5.2f} keep working.
        return self.value


@dataclass(frozen=True)
class TileArg:
    tile: Tile

    def render(self) -> str:
        return self.tile.to_text()

    def format_value(self) -> Any:
        return self.render()


@dataclass(frozen=True)
class SequenceArg:
    items: Tuple[Union[str, Tile], ...]

    def render(self) -> str:
        return "\n".join(
            item.to_text() if isinstance(item, Tile) else str(item) for item in self.items
        )

    def format_value(self) -> Any:
        return self.render()


FormatArg = Union[TextArg, TileArg, SequenceArg]


def to_argument(value: Any) -> FormatArg:
    """Classify ``value`` into its argument variant.

    Already-classified arguments are returned unchanged.
    """
    if isinstance(value, (TextArg, TileArg, SequenceArg)):
        return value
    if isinstance(value, Tile):
        return TileArg(value)
    if isinstance(value, (list, tuple)):
        return SequenceArg(tuple(value))
    return TextArg(value)


def render_formatted(pattern: str, args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> str:
    """Interpolate arguments into ``pattern`` using ``str.format`` rules.

    With no arguments at all the pattern is returned verbatim, braces
    included.

    Raises:
        TileFormatError: when the arguments do not fit the pattern (missing
            positional or keyword field, unused positional argument, bad
            format spec).
    """
    kwargs = dict(kwargs or {})
    if not args and not kwargs:
        return pattern

    positional = [to_argument(a).format_value() for a in args]
    named: Dict[str, Any] = {k: to_argument(v).format_value() for k, v in kwargs.items()}

    try:
        auto_fields = _count_auto_fields(pattern)
        rendered = pattern.format(*positional, **named)
    except (IndexError, KeyError, ValueError, TypeError, AttributeError) as exc:
        raise TileFormatError(
            f"Arguments do not match format pattern {pattern!r}: {exc}",
            pattern=pattern,
            context={"args": len(positional), "kwargs": sorted(named)},
        ) from exc

    if auto_fields is not None and auto_fields < len(positional):
        raise TileFormatError(
            f"Format pattern {pattern!r} takes {auto_fields} positional "
            f"argument(s) but {len(positional)} were given",
            pattern=pattern,
            context={"expected": auto_fields, "given": len(positional)},
        )
    return rendered


def _count_auto_fields(pattern: str) -> int | None:
    """Number of positional fields the pattern consumes.

    Fields nested in a format spec (``{:>{}}``) count too. Returns None when
    the pattern uses explicit indexes (``{0}``), where reusing or skipping
    arguments is legitimate.
    """
    auto, explicit = _scan_fields(pattern)
    if explicit:
        return None
    return auto


def _scan_fields(pattern: str) -> Tuple[int, bool]:
    auto = 0
    explicit = False
    for _literal, field_name, spec, _conv in string.Formatter().parse(pattern):
        if field_name is None:
            continue
        head = field_name.split(".", 1)[0].split("[", 1)[0]
        if head == "":
            auto += 1
        elif head.isdigit():
            explicit = True
        if spec:
            nested_auto, nested_explicit = _scan_fields(spec)
            auto += nested_auto
            explicit = explicit or nested_explicit
    return auto, explicit


__all__ = [
    "TextArg",
    "TileArg",
    "SequenceArg",
    "FormatArg",
    "to_argument",
    "render_formatted",
]
