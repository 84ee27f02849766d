"""Reads and writes a single component directory."""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path, PurePosixPath
from typing import Dict, Mapping

from ..errors import ComponentNotFoundError, InvalidComponentError
from ..logging import get_logger
from ..models import ComponentMeta, ComponentRecord, StoreEntry
from .paths import META_FILENAME, StorePaths
from .scanner import read_meta

_LOGGER = get_logger("repository")

UNREADABLE_FILE_MARKER = "// Error reading file {name}"


class MetadataRepository:
    """Loads, persists and removes the files of one store entry."""

    def __init__(self, paths: StorePaths) -> None:
        self._paths = paths

    def load(self, entry: StoreEntry) -> ComponentRecord:
        meta = read_meta(entry.path)
        if meta is None:
            raise ComponentNotFoundError(entry.meta.id)

        source_files: Dict[str, str] = {}
        for name in meta.source_files:
            try:
                source_files[name] = (entry.path / name).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                _LOGGER.warning("Unable to read %s of %s: %s", name, meta.id, exc)
                source_files[name] = UNREADABLE_FILE_MARKER.format(name=name)
        return ComponentRecord(
            meta=meta, path=entry.path, shard=entry.shard, source_files=source_files
        )

    def persist(self, meta: ComponentMeta, source_files: Mapping[str, str]) -> Path:
        """Write ``source_files`` then ``meta.json``; the directory ends up holding exactly these."""
        files = {_check_file_name(name): content for name, content in source_files.items()}
        names = list(files)
        if meta.main_file:
            meta.main_file = _check_file_name(meta.main_file)
            if meta.main_file not in files:
                raise InvalidComponentError(
                    f"Main file {meta.main_file!r} is not one of the source files of {meta.id}"
                )
        entry_path = self._paths.entry_path(meta.framework, meta.id)
        entry_path.mkdir(parents=True, exist_ok=True)

        for name in names:
            target = entry_path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(files[name], encoding="utf-8")

        _prune_stale_files(entry_path, set(names))

        meta.source_files = names
        _write_json_atomic(StorePaths.meta_path(entry_path), meta.to_dict())
        _LOGGER.debug("Persisted %s (%d files) to %s", meta.id, len(names), entry_path)
        return entry_path

    def remove(self, entry_path: Path) -> None:
        if not entry_path.exists():
            return
        shutil.rmtree(entry_path)
        _LOGGER.debug("Removed %s", entry_path)


def _check_file_name(name: str) -> str:
    pure = PurePosixPath(name.replace("\\", "/"))
    if (
        not name
        or pure.is_absolute()
        or any(part in {"", ".", ".."} for part in pure.parts)
        or pure.as_posix() == META_FILENAME
    ):
        raise InvalidComponentError(f"Invalid source file name: {name!r}")
    return pure.as_posix()


def _prune_stale_files(entry_path: Path, keep: set[str]) -> None:
    # Deepest paths first so emptied subdirectories can be removed after their files.
    for path in sorted(entry_path.rglob("*"), key=lambda item: len(item.parts), reverse=True):
        relative = path.relative_to(entry_path).as_posix()
        if path.is_dir():
            if not any(path.iterdir()):
                path.rmdir()
            continue
        if relative == META_FILENAME or relative in keep:
            continue
        path.unlink()


def _write_json_atomic(path: Path, payload: Dict[str, object]) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp_path, path)


__all__ = ["MetadataRepository", "UNREADABLE_FILE_MARKER"]
