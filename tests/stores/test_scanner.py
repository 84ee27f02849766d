"""Tests for componentlab.stores.scanner."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from componentlab.errors import ComponentNotFoundError
from componentlab.stores import EntryScanner, StorePaths, read_meta, reconcile
from tests._fixtures.store_builder import StoreBuilder


def _scanner(builder: StoreBuilder) -> EntryScanner:
    return EntryScanner(StorePaths(builder.root))


def test_read_meta_requires_parseable_metadata_with_id(store_builder: StoreBuilder) -> None:
    valid = store_builder.entry("React", "card")
    missing = store_builder.raw_entry("React", "nometa", {"index.js": "1"})
    corrupt = store_builder.raw_entry("React", "corrupt", {"meta.json": "{not json"})
    no_id = store_builder.raw_entry("React", "noid", {"meta.json": '{"name": "x"}'})
    not_object = store_builder.raw_entry("React", "list", {"meta.json": "[1, 2]"})

    assert read_meta(valid) is not None
    for path in (missing, corrupt, no_id, not_object):
        assert read_meta(path) is None


def test_scan_separates_orphans_without_deleting(store_builder: StoreBuilder) -> None:
    store_builder.entry("React", "card")
    store_builder.entry("Vue", "modal")
    orphan = store_builder.raw_entry("HTML", "broken", {"index.html": "<p>x</p>"})

    result = _scanner(store_builder).scan()

    assert sorted(entry.meta.id for entry in result.entries) == ["card", "modal"]
    assert {entry.shard for entry in result.entries} == {"React", "Vue"}
    assert result.orphans == [orphan]
    assert orphan.exists()


def test_scan_ignores_stray_files(store_builder: StoreBuilder) -> None:
    store_builder.entry("React", "card")
    (store_builder.root / "README.txt").write_text("notes", encoding="utf-8")
    (store_builder.root / "React" / ".DS_Store").write_text("", encoding="utf-8")

    result = _scanner(store_builder).scan()

    assert [entry.meta.id for entry in result.entries] == ["card"]
    assert result.orphans == []


def test_scan_returns_empty_when_root_unusable(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    result = EntryScanner(StorePaths(blocker)).scan()

    assert result.entries == []
    assert result.orphans == []


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="permissions are not enforced for root"
)
def test_scan_skips_unreadable_shard(store_builder: StoreBuilder) -> None:
    store_builder.entry("React", "card")
    store_builder.entry("Vue", "modal")
    locked = store_builder.root / "Vue"
    locked.chmod(0)
    try:
        result = _scanner(store_builder).scan()
    finally:
        locked.chmod(0o755)

    assert [entry.meta.id for entry in result.entries] == ["card"]


def test_find_matches_metadata_id_not_directory(store_builder: StoreBuilder) -> None:
    store_builder.entry("React", "somewhere", meta={"id": "card", "name": "Card"})

    entry = _scanner(store_builder).find("card")

    assert entry.path.name == "somewhere"
    assert entry.shard == "React"
    with pytest.raises(ComponentNotFoundError):
        _scanner(store_builder).find("somewhere")


def test_find_skips_orphans_without_cleanup(store_builder: StoreBuilder) -> None:
    orphan = store_builder.raw_entry("React", "card", {"meta.json": "oops"})

    with pytest.raises(ComponentNotFoundError):
        _scanner(store_builder).find("card")
    assert orphan.exists()


def test_find_for_removal_falls_back_to_directory_name(store_builder: StoreBuilder) -> None:
    orphan = store_builder.raw_entry("Vue", "card", {"meta.json": "oops"})

    assert _scanner(store_builder).find_for_removal("card") == orphan


def test_find_for_removal_prefers_metadata_match(store_builder: StoreBuilder) -> None:
    store_builder.raw_entry("HTML", "card", {"meta.json": "oops"})
    valid = store_builder.entry("React", "other", meta={"id": "card"})

    assert _scanner(store_builder).find_for_removal("card") == valid


def test_reconcile_removes_orphans(store_builder: StoreBuilder) -> None:
    orphan = store_builder.raw_entry("React", "broken", {"nested/file.js": "x"})

    removed = reconcile([orphan])

    assert removed == [orphan]
    assert not orphan.exists()


def test_reconcile_can_leave_orphans_in_place(store_builder: StoreBuilder) -> None:
    orphan = store_builder.raw_entry("React", "broken")

    assert reconcile([orphan], heal=False) == []
    assert orphan.exists()
