"""Single entry point for listing, loading, saving, deleting and importing components."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .config import COLLISION_POLICIES, ComponentLabConfig, ImportConfig
from .errors import ComponentConflictError, InvalidComponentError
from .exporter import read_export, write_export
from .importers import ImportClassifier
from .logging import get_logger
from .models import (
    ComponentMeta,
    ComponentRecord,
    ImportRequest,
    StoreEntry,
    derive_id,
    utc_timestamp,
)
from .search import filter_components
from .stores import EntryScanner, MetadataRepository, StorePaths, reconcile

_LOGGER = get_logger("store")

_ROOT_LOCKS: Dict[str, threading.RLock] = {}
_ROOT_LOCKS_GUARD = threading.Lock()


def _lock_for(root: Path) -> threading.RLock:
    key = str(root.expanduser().resolve())
    with _ROOT_LOCKS_GUARD:
        lock = _ROOT_LOCKS.get(key)
        if lock is None:
            lock = _ROOT_LOCKS[key] = threading.RLock()
        return lock


@dataclass
class SaveResult:
    """Where a component was written plus the refreshed listing."""

    path: Path
    meta: ComponentMeta
    entries: List[StoreEntry] = field(default_factory=list)


class ComponentStore:
    """Filesystem-backed component library.

    Every call re-reads the disk; nothing is cached between calls. All
    operations on one store root are serialised by a shared re-entrant lock.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        collision_policy: str = "reject",
        heal_orphans: bool = True,
        import_config: ImportConfig | None = None,
    ) -> None:
        if collision_policy not in COLLISION_POLICIES:
            raise ValueError(f"Unknown collision policy: {collision_policy}")
        self.paths = StorePaths(root)
        self.collision_policy = collision_policy
        self.heal_orphans = heal_orphans
        self.import_config = import_config or ImportConfig()
        self._scanner = EntryScanner(self.paths)
        self._repository = MetadataRepository(self.paths)
        self._classifier = ImportClassifier(self.import_config)
        self._lock = _lock_for(self.paths.root)

    @classmethod
    def from_config(cls, config: ComponentLabConfig) -> "ComponentStore":
        return cls(
            config.store.root,
            collision_policy=config.store.collision_policy,
            heal_orphans=config.store.heal_orphans,
            import_config=config.importing,
        )

    @property
    def root(self) -> Path:
        return self.paths.root

    def list(self) -> List[StoreEntry]:
        """Return every valid entry; orphaned directories are cleaned up on the way."""
        with self._lock:
            result = self._scanner.scan()
            if result.orphans:
                reconcile(result.orphans, heal=self.heal_orphans)
            _LOGGER.debug("Listed %d components under %s", len(result.entries), self.root)
            return result.entries

    def get(self, component_id: str) -> ComponentRecord:
        with self._lock:
            entry = self._scanner.find(component_id)
            return self._repository.load(entry)

    def save(self, meta: ComponentMeta, source_files: Mapping[str, str]) -> SaveResult:
        """Upsert ``meta`` with exactly ``source_files`` and return the refreshed listing.

        An explicit ``meta.id`` always targets that entry. When the id is
        empty it is derived from the name and the collision policy applies.
        """
        with self._lock:
            meta = replace(meta, tags=list(meta.tags), extra=dict(meta.extra))
            if not meta.name.strip():
                raise InvalidComponentError("Component name must not be empty")
            if not source_files:
                raise InvalidComponentError("A component needs at least one source file")
            if not meta.id:
                meta.id = self._resolve_collision(derive_id(meta.name), meta.name)
                if not meta.id:
                    raise InvalidComponentError(
                        f"Component name {meta.name!r} does not contain any letters or digits"
                    )
            path = self._write(meta, source_files)
            return SaveResult(path=path, meta=meta, entries=self.list())

    def delete(self, component_id: str) -> None:
        with self._lock:
            target = self._scanner.find_for_removal(component_id)
            self._repository.remove(target)
            _LOGGER.info("Deleted component %s", component_id)

    def import_component(self, request: ImportRequest) -> ComponentMeta:
        """Classify ``request`` and store the result under its derived id."""
        with self._lock:
            classified = self._classifier.classify(request)
            meta = classified.meta
            meta.id = self._resolve_collision(meta.id, meta.name)
            self._write(meta, classified.source_files)
            _LOGGER.info("Imported %s as %s/%s", request.kind, meta.framework, meta.id)
            return meta

    def search(
        self,
        query: Optional[str] = None,
        *,
        framework: Optional[str] = None,
        platform: Optional[str] = None,
        tags: Sequence[str] = (),
    ) -> List[StoreEntry]:
        return filter_components(
            self.list(), query=query, framework=framework, platform=platform, tags=tags
        )

    def export_component(self, component_id: str, destination: Path | str) -> Path:
        record = self.get(component_id)
        path = write_export(record, Path(destination))
        _LOGGER.info("Exported %s to %s", component_id, path)
        return path

    def import_export(self, path: Path | str) -> SaveResult:
        """Store the component held in an export document written by ``export_component``."""
        meta, files = read_export(Path(path))
        return self.save(meta, files)

    # ------------------------------------------------------------------
    # Internal helpers

    def _write(self, meta: ComponentMeta, source_files: Mapping[str, str]) -> Path:
        existing = [entry for entry in self._scanner.scan().entries if entry.meta.id == meta.id]
        now = utc_timestamp()
        if not meta.created:
            meta.created = next((e.meta.created for e in existing if e.meta.created), now)
        meta.updated = now

        path = self._repository.persist(meta, source_files)
        for entry in existing:
            if entry.path != path:
                # Framework changed: drop the copy left in the previous shard.
                self._repository.remove(entry.path)
        return path

    def _resolve_collision(self, component_id: str, name: str) -> str:
        if not component_id:
            return component_id
        owners = {
            entry.meta.id: entry.meta.name for entry in self._scanner.scan().entries
        }
        owner = owners.get(component_id)
        if owner is None or owner == name or self.collision_policy == "overwrite":
            return component_id
        if self.collision_policy == "reject":
            raise ComponentConflictError(component_id, owner, name)

        suffix = 2
        while True:
            candidate = f"{component_id}{suffix}"
            owner = owners.get(candidate)
            if owner is None or owner == name:
                _LOGGER.info("Id %s is taken; storing '%s' as %s", component_id, name, candidate)
                return candidate
            suffix += 1


__all__ = ["ComponentStore", "SaveResult"]
