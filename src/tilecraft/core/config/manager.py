"""
Tilecraft configuration management (bundled YAML defaults + overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from jsonschema import Draft202012Validator

from tilecraft.core.exceptions import ConfigError
from tilecraft.core.utils.merge import deep_merge
from tilecraft.data import read_yaml

# Module logger
logger = logging.getLogger(__name__)

ENV_PREFIX = "TILECRAFT_"


class ConfigManager:
    """Load, merge, and validate tilecraft configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: TILECRAFT_<SECTION>__<KEY>
    2. Caller overrides passed to the constructor
    3. Bundled defaults: tilecraft.data/config/defaults.yaml
    """

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None) -> None:
        self.overrides: Dict[str, Any] = copy.deepcopy(dict(overrides or {}))

    def load_defaults(self) -> Dict[str, Any]:
        # Deep copy: read_yaml results are cached and shared.
        return copy.deepcopy(read_yaml("config", "defaults.yaml"))

    def load_schema(self) -> Dict[str, Any]:
        return dict(read_yaml("schemas", "config.yaml"))

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        # Border and fill characters may legitimately be a single space.
        return value if value.strip() == "" else value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_", 1)
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": ENV_PREFIX + raw},
            )
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = cur[part] = {}
            if not isinstance(nxt, dict):
                raise ConfigError(
                    f"Path traverses non-dict config value at '{part}'",
                    context={"path": ".".join(path)},
                )
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying env override %s=%r", ".".join(path), typed_value)
            self._set_nested(cfg, path, typed_value)

    def validate(self, cfg: Dict[str, Any]) -> None:
        """Validate ``cfg`` against the bundled JSON schema.

        Raises:
            ConfigError: listing every schema violation found.
        """
        validator = Draft202012Validator(self.load_schema())
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if not errors:
            return
        messages = []
        for err in errors:
            where = ".".join(str(p) for p in err.path) or "<root>"
            messages.append(f"{where}: {err.message}")
        raise ConfigError(
            "Invalid tilecraft configuration:\n  " + "\n  ".join(messages),
            context={"errors": messages},
        )

    def load_config(self, *, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration.

        Args:
            validate: Check the merged result against the bundled schema.
        """
        cfg = deep_merge(self.load_defaults(), self.overrides)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX"]
