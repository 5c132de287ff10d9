"""Template marker syntax: ``@{identifier}``.

An identifier is a run of ASCII letters, digits and underscores. Anything
else that merely looks like a marker (``@{``, ``@{a-b}``, ``@{}``) is literal
text and passes through resolution untouched.
"""
from __future__ import annotations

import re
from typing import List

# Pattern for tile references: @{name}
MARKER_PATTERN = re.compile(r"@\{([A-Za-z0-9_]+)\}")


def find_references(text: str) -> List[str]:
    """Return referenced names in order of first appearance (no duplicates)."""
    seen: List[str] = []
    for match in MARKER_PATTERN.finditer(text):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen


def references_by_line(text: str) -> List[List[str]]:
    """Return the names referenced on each line, duplicates kept.

    Example:
        >>> references_by_line("@{a} @{b}\\nplain\\n@{a}")
        [['a', 'b'], [], ['a']]
    """
    return [MARKER_PATTERN.findall(line) for line in text.split("\n")]


def has_references(text: str) -> bool:
    return MARKER_PATTERN.search(text) is not None


def marker(name: str) -> str:
    """Build the marker text for ``name``."""
    return "@{" + name + "}"


__all__ = [
    "MARKER_PATTERN",
    "find_references",
    "references_by_line",
    "has_references",
    "marker",
]
