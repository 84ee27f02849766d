"""Tests for componentlab.search."""

from __future__ import annotations

from pathlib import Path

from componentlab.models import ComponentMeta, StoreEntry
from componentlab.search import filter_components


def _entry(component_id: str, **fields: object) -> StoreEntry:
    meta = ComponentMeta(id=component_id, name=component_id.title(), **fields)  # type: ignore[arg-type]
    return StoreEntry(meta=meta, path=Path("/store") / meta.framework / component_id, shard=meta.framework)


def test_query_matches_name_description_and_tags_case_insensitively() -> None:
    entries = [
        _entry("navbar", description="Top navigation"),
        _entry("card", tags=["Layout"]),
        _entry("modal"),
    ]

    assert [e.meta.id for e in filter_components(entries, query="NAV")] == ["navbar"]
    assert [e.meta.id for e in filter_components(entries, query="layout")] == ["card"]
    assert [e.meta.id for e in filter_components(entries, query="  ")] == ["navbar", "card", "modal"]


def test_facets_must_all_match() -> None:
    entries = [
        _entry("card", framework="React", platform="Web", tags=["ui", "layout"]),
        _entry("tile", framework="Flutter", platform="Mobile", tags=["ui"]),
    ]

    assert [e.meta.id for e in filter_components(entries, framework="flutter")] == ["tile"]
    assert [e.meta.id for e in filter_components(entries, platform="Web")] == ["card"]
    assert [e.meta.id for e in filter_components(entries, tags=["ui"])] == ["card", "tile"]
    assert filter_components(entries, framework="React", platform="Mobile") == []
