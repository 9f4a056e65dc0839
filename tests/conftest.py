from __future__ import annotations

from pathlib import Path

import pytest

from doclint.registry import SchemaRegistry, default_registry
from tests._fixtures.docs_builder import DocsBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsBuilder:
    """Provide a reusable docs builder rooted at the pytest tmp_path."""
    return DocsBuilder(tmp_path)


@pytest.fixture
def registry() -> SchemaRegistry:
    return default_registry()
