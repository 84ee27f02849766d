"""Single-component export documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Tuple

from .errors import InvalidComponentError
from .models import ComponentMeta, ComponentRecord, utc_timestamp

EXPORT_FORMAT = "componentlab.component"
EXPORT_VERSION = 1


def build_export(record: ComponentRecord) -> Dict[str, Any]:
    return {
        "format": EXPORT_FORMAT,
        "version": EXPORT_VERSION,
        "exported": utc_timestamp(),
        "meta": record.meta.to_dict(),
        "source_files": dict(record.source_files),
    }


def write_export(record: ComponentRecord, destination: Path) -> Path:
    """Write ``record`` as a JSON export document and return its path."""
    destination = destination.expanduser()
    if destination.is_dir():
        destination = destination / f"{record.meta.id}.json"
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(
        json.dumps(build_export(record), indent=2, ensure_ascii=False), encoding="utf-8"
    )
    return destination


def read_export(path: Path) -> Tuple[ComponentMeta, Dict[str, str]]:
    """Parse an export document back into metadata and source files."""
    try:
        payload = json.loads(path.expanduser().read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidComponentError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or payload.get("format") != EXPORT_FORMAT:
        raise InvalidComponentError(f"{path} is not a componentlab export")
    if payload.get("version") != EXPORT_VERSION:
        raise InvalidComponentError(
            f"Unsupported export version {payload.get('version')!r} in {path}"
        )

    meta_data = payload.get("meta")
    files = payload.get("source_files")
    if not isinstance(meta_data, dict) or not isinstance(files, dict):
        raise InvalidComponentError(f"{path} is missing metadata or source files")
    if not all(isinstance(key, str) and isinstance(value, str) for key, value in files.items()):
        raise InvalidComponentError(f"{path} contains non-text source files")
    return ComponentMeta.from_dict(meta_data), dict(files)


__all__ = ["EXPORT_FORMAT", "EXPORT_VERSION", "build_export", "read_export", "write_export"]
