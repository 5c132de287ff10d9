import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'tilecraft'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from tilecraft.core.config import clear_all_caches
from tilecraft.core.registry import TileRegistry, reset_registry
from tilecraft.core.composition import TileResolver
from tilecraft.data import clear_caches as clear_data_caches


@pytest.fixture(autouse=True)
def _reset_tilecraft_state(monkeypatch):
    """Ensure caches, env overrides and the thread default registry are fresh."""
    for key in list(os.environ):
        if key.startswith("TILECRAFT_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    clear_data_caches()
    reset_registry()
    yield
    clear_all_caches()
    reset_registry()


@pytest.fixture
def registry() -> TileRegistry:
    return TileRegistry()


@pytest.fixture
def resolver(registry: TileRegistry) -> TileResolver:
    return TileResolver(registry, max_depth=64, max_passes=16, strict=True)
