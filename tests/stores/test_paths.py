"""Tests for componentlab.stores.paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from componentlab.errors import InvalidComponentError
from componentlab.stores import StorePaths


def test_ensure_root_creates_missing_parents(tmp_path: Path) -> None:
    paths = StorePaths(tmp_path / "a" / "b" / "store")

    assert paths.ensure_root().is_dir()
    # Second call on an existing directory is a no-op.
    assert paths.ensure_root() == tmp_path / "a" / "b" / "store"


def test_entry_path_is_sharded_by_framework(tmp_path: Path) -> None:
    paths = StorePaths(tmp_path)

    assert paths.shard_path("React") == tmp_path / "React"
    assert paths.entry_path("React", "card") == tmp_path / "React" / "card"
    assert StorePaths.meta_path(tmp_path / "React" / "card").name == "meta.json"


@pytest.mark.parametrize("segment", ["", "..", "a/b", "a\\b"])
def test_entry_path_rejects_unsafe_segments(tmp_path: Path, segment: str) -> None:
    with pytest.raises(InvalidComponentError):
        StorePaths(tmp_path).entry_path("React", segment)
