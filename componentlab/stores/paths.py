"""Path resolution for the sharded component store."""

from __future__ import annotations

from pathlib import Path

from ..errors import InvalidComponentError

META_FILENAME = "meta.json"


class StorePaths:
    """Computes ``<root>/<framework>/<id>`` locations for store entries."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()

    def ensure_root(self) -> Path:
        """Create the store root (and parents) when missing and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def shard_path(self, framework: str) -> Path:
        return self.root / _segment(framework, "framework")

    def entry_path(self, framework: str, component_id: str) -> Path:
        return self.shard_path(framework) / _segment(component_id, "id")

    @staticmethod
    def meta_path(entry_path: Path) -> Path:
        return entry_path / META_FILENAME


def _segment(value: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned or cleaned in {".", ".."} or "/" in cleaned or "\\" in cleaned:
        raise InvalidComponentError(f"Invalid component {label} for storage path: {value!r}")
    return cleaned


__all__ = ["META_FILENAME", "StorePaths"]
