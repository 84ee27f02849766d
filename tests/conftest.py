from __future__ import annotations

from pathlib import Path

import pytest

from componentlab.store import ComponentStore
from tests._fixtures.store_builder import StoreBuilder


@pytest.fixture
def store_builder(tmp_path: Path) -> StoreBuilder:
    """Provide a builder rooted at the pytest tmp_path."""
    return StoreBuilder(tmp_path)


@pytest.fixture
def store(store_builder: StoreBuilder) -> ComponentStore:
    return store_builder.store()
