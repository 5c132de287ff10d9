"""Resolution reporting dataclass.

Provides a structured record of what a resolution call touched.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ResolutionReport:
    """Report from a single resolution call.

    Contains:
    - Names expanded (in first-use order)
    - Names that were missing (non-strict mode only)
    - Number of outer substitution passes
    - Deepest nesting reached along any reference chain
    """

    template: str
    mode: str = "text"
    references_resolved: List[str] = field(default_factory=list)
    references_missing: List[str] = field(default_factory=list)
    passes: int = 0
    max_depth_reached: int = 0

    @property
    def has_issues(self) -> bool:
        return bool(self.references_missing)

    def record_reference(self, name: str, depth: int) -> None:
        """Record that ``name`` was expanded at nesting ``depth``."""
        if name not in self.references_resolved:
            self.references_resolved.append(name)
        self.max_depth_reached = max(self.max_depth_reached, depth)

    def record_missing(self, name: str) -> None:
        if name not in self.references_missing:
            self.references_missing.append(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            "template": self.template,
            "mode": self.mode,
            "references_resolved": list(self.references_resolved),
            "references_missing": list(self.references_missing),
            "passes": self.passes,
            "max_depth_reached": self.max_depth_reached,
        }


__all__ = ["ResolutionReport"]
