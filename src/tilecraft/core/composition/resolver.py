"""Template resolver: expand ``@{name}`` markers into tiles.

Two modes share the same lookup, error and cycle rules:

- **text** (:meth:`TileResolver.resolve`): every marker is replaced by the
  referenced tile's text, markers inside that text are expanded first, and
  the final string is split into lines. Whitespace is never touched.
- **block** (:meth:`TileResolver.resolve_blocks`): each referenced tile is
  laid out as a rectangle to the right of whatever precedes it on the same
  template line, so multi-line tiles sit side by side.

Termination: the names being expanded form an explicit in-progress chain.
Meeting a name already on the chain, nesting deeper than ``max_depth`` or
needing more than ``max_passes`` outer passes raises
:class:`~tilecraft.core.exceptions.ResolutionCycleError`.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Set, Tuple

from ..config.domains import ResolutionConfig
from ..exceptions import ResolutionCycleError, UnresolvedReferenceError
from ..layout.join import beside, vertical_join
from ..markers import MARKER_PATTERN, find_references, has_references
from ..registry import TileRegistry, get_registry
from ..tiles import Tile
from .report import ResolutionReport

logger = logging.getLogger(__name__)

Chain = Tuple[str, ...]
# Expansions are memoized per (name, chain depth) so max_depth is checked
# again whenever a name recurs at a new depth.
CacheKey = Tuple[str, int]


class TileResolver:
    """Resolve templates against a :class:`TileRegistry`.

    Example:
        registry = TileRegistry()
        registry.define("a", "X")
        registry.define("b", "Y")
        TileResolver(registry).resolve("@{a}@{b}").lines   # ('XY',)
    """

    def __init__(
        self,
        registry: Optional[TileRegistry] = None,
        *,
        max_depth: Optional[int] = None,
        max_passes: Optional[int] = None,
        strict: Optional[bool] = None,
        config: Optional[ResolutionConfig] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            registry: Store to read from. Defaults to this thread's registry.
            max_depth: Longest allowed reference chain.
            max_passes: Most outer substitution passes over the template.
            strict: Raise on unknown names (True) or expand them to nothing.
            config: Resolution config supplying values for unset bounds.
                Built-in defaults apply when None; the environment is never
                consulted implicitly.
        """
        self.registry = registry if registry is not None else get_registry()
        if max_depth is None or max_passes is None or strict is None:
            cfg = config or ResolutionConfig()
            max_depth = cfg.max_depth if max_depth is None else max_depth
            max_passes = cfg.max_passes if max_passes is None else max_passes
            strict = cfg.strict if strict is None else strict
        if max_depth < 1 or max_passes < 1:
            raise ValueError("max_depth and max_passes must be at least 1")
        self.max_depth = max_depth
        self.max_passes = max_passes
        self.strict = strict

    # ------------------------------------------------------------------
    # Text mode
    # ------------------------------------------------------------------

    def resolve(self, template: str) -> Tile:
        """Expand every marker in ``template`` and return the result as a tile.

        Raises:
            UnresolvedReferenceError: a name is not in the registry (strict).
            ResolutionCycleError: expansion does not terminate within bounds.
        """
        tile, _ = self.resolve_with_report(template)
        return tile

    def resolve_with_report(self, template: str) -> Tuple[Tile, ResolutionReport]:
        """Like :meth:`resolve`, also returning a :class:`ResolutionReport`."""
        report = ResolutionReport(template=template, mode="text")
        cache: Dict[CacheKey, str] = {}
        text = template
        while has_references(text):
            if report.passes >= self.max_passes:
                raise ResolutionCycleError(
                    f"Template did not settle after {self.max_passes} substitution passes",
                    context={"passes": report.passes, "remaining": find_references(text)},
                )
            report.passes += 1
            logger.debug("Resolution pass %d", report.passes)
            # Markers completed across substitution boundaries are new text,
            # so names are re-read from the registry on every pass.
            cache.clear()
            text = self._expand_text(text, (), report, cache)
        return Tile.from_text(text), report

    def resolve_and_store(self, name: str, template: str) -> Tile:
        """Resolve ``template`` and store the result under ``name``.

        The registry is only written after resolution succeeded.
        """
        tile = self.resolve(template)
        self.registry.define(name, tile)
        return tile

    def _expand_text(
        self,
        text: str,
        chain: Chain,
        report: ResolutionReport,
        cache: Dict[CacheKey, str],
    ) -> str:
        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            key = (name, len(chain))
            if key in cache:
                return cache[key]
            tile = self._lookup(name, chain, report)
            if tile is None:
                return ""
            expanded = self._expand_text(tile.to_text(), chain + (name,), report, cache)
            cache[key] = expanded
            return expanded

        return MARKER_PATTERN.sub(replace, text)

    # ------------------------------------------------------------------
    # Block mode
    # ------------------------------------------------------------------

    def resolve_blocks(self, template: str) -> Tile:
        """Lay out ``template`` with referenced tiles placed as rectangles.

        Each template line is cut into literal text and markers. Pieces are
        attached left to right with :func:`~tilecraft.core.layout.join.beside`,
        then the line blocks are stacked. A line whose pieces are all empty
        tiles contributes no rows.
        """
        tile, _ = self.resolve_blocks_with_report(template)
        return tile

    def resolve_blocks_with_report(self, template: str) -> Tuple[Tile, ResolutionReport]:
        report = ResolutionReport(template=template, mode="block")
        report.passes = 1
        tile = self._layout(template, (), report, {})
        return tile, report

    def _layout(
        self,
        text: str,
        chain: Chain,
        report: ResolutionReport,
        cache: Dict[CacheKey, Tile],
    ) -> Tile:
        blocks: List[Tile] = []
        for line in text.split("\n"):
            pieces: List[Tile] = []
            pos = 0
            for match in MARKER_PATTERN.finditer(line):
                if match.start() > pos:
                    pieces.append(Tile((line[pos:match.start()],)))
                pos = match.end()
                name = match.group(1)
                key = (name, len(chain))
                if key not in cache:
                    tile = self._lookup(name, chain, report)
                    if tile is None or tile.is_empty:
                        cache[key] = Tile.empty()
                    else:
                        cache[key] = self._layout(tile.to_text(), chain + (name,), report, cache)
                pieces.append(cache[key])
            if pos < len(line):
                pieces.append(Tile((line[pos:],)))

            if not pieces:
                blocks.append(Tile(("",)))
                continue
            row = pieces[0]
            for piece in pieces[1:]:
                row = beside(row, piece)
            blocks.append(row)
        return vertical_join(blocks)

    # ------------------------------------------------------------------
    # Lookup with cycle guard
    # ------------------------------------------------------------------

    def _lookup(self, name: str, chain: Chain, report: ResolutionReport) -> Optional[Tile]:
        if name in chain:
            cycle = chain[chain.index(name):] + (name,)
            logger.debug("Reference cycle: %s", " -> ".join(cycle))
            raise ResolutionCycleError(chain=cycle)
        if len(chain) >= self.max_depth:
            raise ResolutionCycleError(
                f"Reference chain exceeds max depth {self.max_depth}",
                chain=chain + (name,),
                context={"max_depth": self.max_depth},
            )
        tile = self.registry.lookup(name)
        if tile is None:
            if self.strict:
                raise UnresolvedReferenceError(name, context={"chain": list(chain)})
            logger.warning("Tile %r is not defined; expanding to nothing", name)
            report.record_missing(name)
            return None
        report.record_reference(name, depth=len(chain) + 1)
        return tile

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def references(self, template: str) -> List[str]:
        """Defined names reachable from ``template``, in discovery order."""
        found, _ = self._walk(template)
        return found

    def missing_references(self, template: str) -> List[str]:
        """Names reachable from ``template`` that are not in the registry."""
        _, missing = self._walk(template)
        return missing

    def blank_references(self, template: str) -> List[str]:
        """Reachable names whose tile is empty (cleared or defined empty)."""
        found, _ = self._walk(template)
        blanks: List[str] = []
        for name in found:
            tile = self.registry.lookup(name)
            if tile is not None and tile.is_empty:
                blanks.append(name)
        return blanks

    def _walk(self, template: str) -> Tuple[List[str], List[str]]:
        found: List[str] = []
        missing: List[str] = []
        visited: Set[str] = set()
        pending = list(reversed(find_references(template)))
        while pending:
            name = pending.pop()
            if name in visited:
                continue
            visited.add(name)
            tile = self.registry.lookup(name)
            if tile is None:
                missing.append(name)
                continue
            found.append(name)
            pending.extend(reversed(tile.references()))
        return found, missing


def resolve(template: str, registry: Optional[TileRegistry] = None) -> Tile:
    """Resolve ``template`` against ``registry`` (default: this thread's)."""
    return TileResolver(registry).resolve(template)


def resolve_and_store(name: str, template: str, registry: Optional[TileRegistry] = None) -> Tile:
    """Resolve ``template`` and store the result under ``name``."""
    return TileResolver(registry).resolve_and_store(name, template)


__all__ = ["TileResolver", "resolve", "resolve_and_store"]
