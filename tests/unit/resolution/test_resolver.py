"""Tests for TileResolver (text mode).

Covers substitution, transitive expansion, error propagation and the cycle
guard.
"""
from __future__ import annotations

import pytest

from tilecraft.core.composition import TileResolver, resolve, resolve_and_store
from tilecraft.core.exceptions import ResolutionCycleError, UnresolvedReferenceError
from tilecraft.core.registry import TileRegistry, get_registry
from tilecraft.core.tiles import Tile


class TestSubstitution:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain",
            "  leading and trailing  ",
            "multi\n  line\n\n",
            "looks like @{ but is not",
            "@{bad-name} @{} {{x}} @name",
        ],
    )
    def test_marker_free_text_is_identity(self, resolver: TileResolver, text: str) -> None:
        assert resolver.resolve(text).to_text() == text

    def test_adjacent_markers(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("a", "X")
        registry.define("b", "Y")

        tile = resolver.resolve("@{a}@{b}")

        assert tile.lines == ("XY",)

    def test_multiline_tile_is_inserted_as_text(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("body", "line 1\nline 2")

        tile = resolver.resolve("<@{body}>")

        assert tile.lines == ("<line 1", "line 2>")
        assert tile.dimensions() == (7, 2)

    def test_whitespace_is_preserved(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("pad", "  x  ")

        assert resolver.resolve("[@{pad}]\n").to_text() == "[  x  ]\n"

    def test_empty_tile_expands_to_nothing(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("t", "content")
        registry.clear("t")

        assert resolver.resolve("a@{t}b").lines == ("ab",)

    def test_width_is_longest_resulting_line(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("rows", "a\nlonger line\nb")

        tile = resolver.resolve("@{rows}")

        assert tile.dimensions() == (11, 3)


class TestTransitiveExpansion:
    def test_nested_references_expand(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("one", ";")
        for prev, name in [("one", "two"), ("two", "three"), ("three", "four")]:
            registry.define(name, "@{" + prev + "}")

        assert resolver.resolve("<@{four}>").lines == ("<;>",)

    def test_templates_read_current_values(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("row", "@{left}|@{right}")
        registry.define("left", "a")
        registry.define("right", "b")
        assert resolver.resolve("@{row}").lines == ("a|b",)

        registry.define("left", "reused")
        assert resolver.resolve("@{row}").lines == ("reused|b",)

    def test_resolved_tile_can_be_reused(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("x", "X")
        resolver.resolve_and_store("pair", "@{x}@{x}")

        assert registry.lookup("pair") == Tile(("XX",))
        assert resolver.resolve("[@{pair}]").lines == ("[XX]",)

    def test_diamond_references_are_not_cycles(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("leaf", "o")
        registry.define("left", "@{leaf}")
        registry.define("right", "@{leaf}")
        registry.define("top", "@{left}-@{right}")

        assert resolver.resolve("@{top}@{leaf}").lines == ("o-oo",)

    def test_marker_completed_across_boundary_expands_next_pass(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("open", "@{")
        registry.define("target", "found")

        tile, report = resolver.resolve_with_report("@{open}target}")

        assert tile.lines == ("found",)
        assert report.passes == 2


class TestErrors:
    def test_unresolved_reference(self, registry: TileRegistry, resolver: TileResolver) -> None:
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolver.resolve("hello @{missing}")

        assert exc_info.value.name == "missing"
        assert exc_info.value.context["name"] == "missing"
        assert "@{missing}" in str(exc_info.value)
        assert isinstance(exc_info.value, KeyError)

    def test_unresolved_nested_reference(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("outer", "@{inner}")

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolver.resolve("@{outer}")

        assert exc_info.value.name == "inner"
        assert exc_info.value.context["chain"] == ["outer"]

    def test_failed_resolution_leaves_registry_unmodified(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("kept", "old")
        before = dict(registry.snapshot())

        with pytest.raises(UnresolvedReferenceError):
            resolver.resolve_and_store("kept", "@{missing}")
        with pytest.raises(UnresolvedReferenceError):
            resolver.resolve_and_store("new", "@{missing}")

        assert dict(registry.snapshot()) == before
        assert registry.lookup("new") is None

    def test_self_reference_is_a_cycle(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("a", "@{a}")

        with pytest.raises(ResolutionCycleError) as exc_info:
            resolver.resolve("@{a}")

        assert exc_info.value.chain == ("a", "a")

    def test_self_reference_with_fanout_is_a_cycle(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("a", "-@{a}@{a}-")

        with pytest.raises(ResolutionCycleError):
            resolver.resolve("@{a}")

    def test_mutual_reference_is_a_cycle(self, registry: TileRegistry, resolver: TileResolver) -> None:
        registry.define("first", "@{second}")
        registry.define("second", "x @{third}")
        registry.define("third", "@{first}")

        with pytest.raises(ResolutionCycleError) as exc_info:
            resolver.resolve("start @{first}")

        assert exc_info.value.chain == ("first", "second", "third", "first")
        assert "first -> second -> third -> first" in str(exc_info.value)

    def test_cycle_introduced_later_is_detected(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("g1", "@{g1_1}@{g1_2}")
        registry.define("g2", "@{g2_1}\n@{g2_2}")
        registry.clear("g1_1")
        registry.clear("g1_2")
        registry.clear("g2_1")
        registry.clear("g2_2")
        assert resolver.resolve(">@{g1} - @{g2}<").to_text() == "> - \n<"

        registry.define("g2_2", "@{g1}")
        registry.define("g1_2", "@{g2_2}")

        with pytest.raises(ResolutionCycleError):
            resolver.resolve(">@{g1} - @{g2}<")

    def test_max_depth_bounds_long_chains(self, registry: TileRegistry) -> None:
        registry.define("n0", "end")
        for i in range(1, 6):
            registry.define(f"n{i}", "@{n" + str(i - 1) + "}")

        assert TileResolver(registry, max_depth=6).resolve("@{n5}").lines == ("end",)
        with pytest.raises(ResolutionCycleError) as exc_info:
            TileResolver(registry, max_depth=5).resolve("@{n5}")
        assert exc_info.value.context["max_depth"] == 5

    def test_max_passes_bounds_boundary_markers(self, registry: TileRegistry) -> None:
        # Each pass rebuilds the same marker from two halves.
        registry.define("open", "@{")
        registry.define("loop", "@{open}loop}")

        with pytest.raises(ResolutionCycleError) as exc_info:
            TileResolver(registry, max_passes=3).resolve("@{loop}")

        assert exc_info.value.context["passes"] == 3

    def test_max_depth_applies_to_reused_expansions(self, registry: TileRegistry) -> None:
        registry.define("x", "@{y}")
        registry.define("y", "@{z}")
        registry.define("z", "end")
        registry.define("w", "@{v}")
        registry.define("v", "@{x}")
        resolver = TileResolver(registry, max_depth=3)

        assert resolver.resolve("@{x}").lines == ("end",)
        # x was already expanded at the top level; under w -> v it sits deeper.
        with pytest.raises(ResolutionCycleError) as exc_info:
            resolver.resolve("@{x}@{w}")
        assert exc_info.value.context["max_depth"] == 3

        with pytest.raises(ResolutionCycleError):
            resolver.resolve_blocks("@{x}@{w}")

    def test_invalid_bounds_rejected(self, registry: TileRegistry) -> None:
        with pytest.raises(ValueError):
            TileResolver(registry, max_depth=0)


class TestNonStrictMode:
    def test_missing_names_expand_to_nothing(self, registry: TileRegistry) -> None:
        resolver = TileResolver(registry, strict=False)
        registry.define("known", "K")

        tile, report = resolver.resolve_with_report("@{known}[@{unknown}]")

        assert tile.lines == ("K[]",)
        assert report.references_missing == ["unknown"]
        assert report.references_resolved == ["known"]
        assert report.has_issues

    def test_non_strict_from_config(self, registry: TileRegistry) -> None:
        from tilecraft.core.config import ConfigManager, ResolutionConfig

        cfg = ResolutionConfig(ConfigManager({"resolution": {"strict": False}}).load_config())
        resolver = TileResolver(registry, config=cfg)

        assert resolver.strict is False
        assert resolver.resolve("a@{gone}b").lines == ("ab",)

    def test_environment_does_not_change_defaults(
        self, registry: TileRegistry, monkeypatch
    ) -> None:
        monkeypatch.setenv("TILECRAFT_RESOLUTION__STRICT", "false")
        monkeypatch.setenv("TILECRAFT_DEBUG", "1")

        resolver = TileResolver(registry)

        assert resolver.strict is True
        with pytest.raises(UnresolvedReferenceError):
            resolver.resolve("a@{missing}b")
        with pytest.raises(UnresolvedReferenceError):
            resolve("a@{missing}b")

    def test_non_strict_still_detects_cycles(self, registry: TileRegistry) -> None:
        registry.define("a", "@{a}")

        with pytest.raises(ResolutionCycleError):
            TileResolver(registry, strict=False).resolve("@{a}")


class TestReport:
    def test_report_tracks_references_and_depth(
        self, registry: TileRegistry, resolver: TileResolver
    ) -> None:
        registry.define("leaf", "x")
        registry.define("mid", "@{leaf}")

        _, report = resolver.resolve_with_report("@{mid}@{leaf}")

        assert report.mode == "text"
        assert report.references_resolved == ["mid", "leaf"]
        assert report.max_depth_reached == 2
        assert report.passes == 1
        assert report.to_dict()["references_missing"] == []

    def test_marker_free_template_takes_no_passes(self, resolver: TileResolver) -> None:
        _, report = resolver.resolve_with_report("nothing here")

        assert report.passes == 0
        assert not report.has_issues


class TestModuleFunctions:
    def test_resolve_uses_thread_default_registry(self) -> None:
        get_registry().define("name", "world")

        assert resolve("hello @{name}").lines == ("hello world",)

    def test_resolve_and_store_with_explicit_registry(self, registry: TileRegistry) -> None:
        registry.define("a", "A")

        tile = resolve_and_store("copy", "@{a}@{a}", registry)

        assert tile == Tile(("AA",))
        assert registry.lookup("copy") == tile
        assert get_registry().lookup("copy") is None
