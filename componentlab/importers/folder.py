"""Read folders and loose files from disk into import records."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Sequence

from ..config import DEFAULT_IMPORT_EXTENSIONS, DEFAULT_SKIP_DIRS
from ..logging import get_logger
from ..models import FolderPayload, ImportFile
from ..stores.paths import META_FILENAME
from .rules import is_main_candidate

_LOGGER = get_logger("importers.folder")


def read_folder(
    folder: Path | str,
    *,
    extensions: Sequence[str] = DEFAULT_IMPORT_EXTENSIONS,
    skip_dirs: Sequence[str] = DEFAULT_SKIP_DIRS,
) -> FolderPayload:
    """Collect source files below ``folder`` with POSIX names relative to it."""
    root = Path(folder).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Folder not found: {folder}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {folder}")

    allowed = {ext.lower() for ext in extensions}
    skipped = set(skip_dirs)
    files: List[ImportFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in skipped)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            path = current_dir / filename
            if path.suffix.lower() not in allowed:
                continue
            if current_dir == root and filename == META_FILENAME:
                _LOGGER.warning("Skipping %s: the name is reserved for component metadata", path)
                continue
            record = _read_file(path, path.relative_to(root).as_posix())
            if record is not None:
                files.append(record)

    return FolderPayload(name=root.name, files=files)


def read_files(paths: Iterable[Path | str]) -> List[ImportFile]:
    """Read independently selected files, named by their base name."""
    files: List[ImportFile] = []
    for raw in paths:
        path = Path(raw).expanduser()
        record = _read_file(path, path.name)
        if record is not None:
            files.append(record)
    return files


def _read_file(path: Path, name: str) -> ImportFile | None:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.warning("Skipping unreadable file %s: %s", path, exc)
        return None
    record = ImportFile(name=name, content=content)
    record.is_main = is_main_candidate(record)
    return record


__all__ = ["read_files", "read_folder"]
