"""Two-level walk over the store: framework shards, then entry directories."""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from ..errors import ComponentNotFoundError
from ..logging import get_logger
from ..models import ComponentMeta, StoreEntry
from .paths import StorePaths

_LOGGER = get_logger("scanner")


def read_meta(entry_path: Path) -> Optional[ComponentMeta]:
    """Return the parsed metadata of ``entry_path`` or None when it is unusable.

    Metadata is usable when ``meta.json`` exists, parses as a JSON object and
    carries a non-empty string ``id``.
    """
    meta_path = StorePaths.meta_path(entry_path)
    try:
        payload = json.loads(meta_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    component_id = payload.get("id")
    if not isinstance(component_id, str) or not component_id:
        return None
    return ComponentMeta.from_dict(payload)


@dataclass
class ScanResult:
    """Outcome of a side-effect free walk."""

    entries: List[StoreEntry] = field(default_factory=list)
    orphans: List[Path] = field(default_factory=list)


class EntryScanner:
    """Discovers store entries and separates them from orphaned directories."""

    def __init__(self, paths: StorePaths) -> None:
        self._paths = paths

    def scan(self) -> ScanResult:
        """Walk every shard and classify each entry directory. Never deletes."""
        result = ScanResult()
        for shard_dir, entry_dir in self._iter_entry_dirs():
            meta = read_meta(entry_dir)
            if meta is None:
                result.orphans.append(entry_dir)
                continue
            result.entries.append(StoreEntry(meta=meta, path=entry_dir, shard=shard_dir.name))
        return result

    def find(self, component_id: str) -> StoreEntry:
        """Return the first entry whose metadata id equals ``component_id``."""
        for shard_dir, entry_dir in self._iter_entry_dirs():
            meta = read_meta(entry_dir)
            if meta is None:
                continue
            if meta.id == component_id:
                return StoreEntry(meta=meta, path=entry_dir, shard=shard_dir.name)
        raise ComponentNotFoundError(component_id)

    def find_for_removal(self, component_id: str) -> Path:
        """Locate the directory to delete for ``component_id``.

        A matching metadata id wins; otherwise an orphaned directory named
        ``component_id`` is returned so broken entries can still be removed.
        """
        fallback: Optional[Path] = None
        for _, entry_dir in self._iter_entry_dirs():
            meta = read_meta(entry_dir)
            if meta is not None:
                if meta.id == component_id:
                    return entry_dir
                continue
            if fallback is None and entry_dir.name == component_id:
                fallback = entry_dir
        if fallback is not None:
            _LOGGER.debug("Removing %s by directory name (metadata unreadable)", fallback)
            return fallback
        raise ComponentNotFoundError(component_id)

    def _iter_entry_dirs(self) -> Iterator[tuple[Path, Path]]:
        for shard_dir in self._iter_shards():
            try:
                children = sorted(shard_dir.iterdir())
            except OSError as exc:
                _LOGGER.warning("Cannot read framework directory %s: %s", shard_dir, exc)
                continue
            for entry_dir in children:
                try:
                    if not entry_dir.is_dir():
                        continue
                except OSError as exc:
                    _LOGGER.warning("Cannot inspect %s: %s", entry_dir, exc)
                    continue
                yield shard_dir, entry_dir

    def _iter_shards(self) -> Iterator[Path]:
        root = self._paths.root
        try:
            self._paths.ensure_root()
            children = sorted(root.iterdir())
        except OSError as exc:
            _LOGGER.error("Cannot read component store at %s: %s", root, exc)
            return
        for child in children:
            try:
                if child.is_dir():
                    yield child
            except OSError as exc:
                _LOGGER.warning("Cannot inspect %s: %s", child, exc)


def reconcile(orphans: Sequence[Path], *, heal: bool = True) -> List[Path]:
    """Delete orphaned entry directories and return the ones actually removed."""
    removed: List[Path] = []
    for orphan in orphans:
        if not heal:
            _LOGGER.warning("Invalid component directory left in place: %s", orphan)
            continue
        _LOGGER.warning("Invalid component directory detected: %s, cleaning up", orphan)
        try:
            shutil.rmtree(orphan)
        except FileNotFoundError:
            removed.append(orphan)
        except OSError as exc:
            _LOGGER.warning("Unable to clean up %s: %s", orphan, exc)
        else:
            removed.append(orphan)
    return removed


__all__ = ["EntryScanner", "ScanResult", "read_meta", "reconcile"]
