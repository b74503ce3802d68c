"""
Kernel test configuration.

Kernel tests are pure or use an in-memory registry; async tests run on
function-scoped loops.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from itinera.kernel.loader import LayoutLoader
from itinera.kernel.mock_stream import EXAMPLES_DIR
from itinera.kernel.registry import LayoutRegistry


@pytest.fixture
def registry() -> LayoutRegistry:
    return LayoutRegistry()


@pytest.fixture
def loader(registry: LayoutRegistry) -> LayoutLoader:
    """Loader over the real template table with a fresh registry."""
    return LayoutLoader(registry)


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture
def trip_json(examples_dir: Path) -> str:
    return (examples_dir / "trip-plan.json").read_text(encoding="utf-8")


@pytest.fixture
def park_json(examples_dir: Path) -> str:
    return (examples_dir / "park-plan.json").read_text(encoding="utf-8")
