"""Text search and facet filtering over listed components."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import StoreEntry, canonical_framework


def filter_components(
    entries: Iterable[StoreEntry],
    *,
    query: Optional[str] = None,
    framework: Optional[str] = None,
    platform: Optional[str] = None,
    tags: Sequence[str] = (),
) -> List[StoreEntry]:
    """Return entries matching every given criterion.

    ``query`` is a case-insensitive substring of the name, description or any
    tag. ``framework`` and ``platform`` must match exactly (framework spelling
    is canonicalised first) and every tag in ``tags`` must be present.
    """
    needle = query.strip().lower() if query else ""
    wanted_framework = canonical_framework(framework) if framework else ""
    wanted_tags = [tag for tag in tags if tag]

    results: List[StoreEntry] = []
    for entry in entries:
        meta = entry.meta
        if needle and not (
            needle in meta.name.lower()
            or needle in meta.description.lower()
            or any(needle in tag.lower() for tag in meta.tags)
        ):
            continue
        if wanted_framework and meta.framework != wanted_framework:
            continue
        if platform and meta.platform != platform:
            continue
        if wanted_tags and not all(tag in meta.tags for tag in wanted_tags):
            continue
        results.append(entry)
    return results


__all__ = ["filter_components"]
