from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class TilecraftError(Exception):
    """Base exception for tilecraft."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UnresolvedReferenceError(TilecraftError, KeyError):
    """Raised when a template references a name that is not in the registry."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx.setdefault("name", name)
        message = f"Unresolved tile reference: @{{{name}}}"
        TilecraftError.__init__(self, message, context=ctx)
        KeyError.__init__(self, message)
        self.name = name

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class ResolutionCycleError(TilecraftError, RuntimeError):
    """Raised when template expansion does not terminate within its bounds."""

    def __init__(
        self,
        message: str = "",
        *,
        chain: Iterable[str] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.chain = tuple(chain)
        ctx = dict(context or {})
        ctx.setdefault("chain", list(self.chain))
        if not message:
            message = "Tile reference cycle detected"
            if self.chain:
                message += ": " + " -> ".join(self.chain)
        TilecraftError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class TileFormatError(TilecraftError, ValueError):
    """Raised when arguments do not match a format pattern."""

    def __init__(
        self,
        message: str = "",
        *,
        pattern: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("pattern", pattern)
        TilecraftError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.pattern = pattern


class ConfigError(TilecraftError, ValueError):
    """Raised when tilecraft configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TilecraftError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "TilecraftError",
    "UnresolvedReferenceError",
    "ResolutionCycleError",
    "TileFormatError",
    "ConfigError",
]
