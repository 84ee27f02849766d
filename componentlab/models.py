"""Core data models shared across componentlab components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

KNOWN_FRAMEWORKS = (
    "React",
    "React Native",
    "Vue",
    "Angular",
    "Svelte",
    "Flutter",
    "HTML",
    "CSS",
    "JavaScript",
    "TypeScript",
    "Web Components",
    "Swift",
    "Kotlin",
    "Dart",
)

PREVIEWABLE_FRAMEWORKS = frozenset({"React", "Vue", "HTML", "JavaScript"})

DEFAULT_VERSION = "1.0.0"

_FRAMEWORK_BY_KEY = {name.lower(): name for name in KNOWN_FRAMEWORKS}
_ID_STRIP = re.compile(r"[^a-z0-9]")


def derive_id(name: str) -> str:
    """Lowercase ``name`` and drop every character outside ``[a-z0-9]``."""
    return _ID_STRIP.sub("", name.lower())


def canonical_framework(name: str | None) -> str:
    """Return the known spelling of ``name``; unknown names are kept verbatim."""
    if not name:
        return ""
    cleaned = name.strip()
    return _FRAMEWORK_BY_KEY.get(cleaned.lower(), cleaned)


def is_previewable(framework: str | None) -> bool:
    return canonical_framework(framework) in PREVIEWABLE_FRAMEWORKS


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def unique_tags(tags: Sequence[str] | None) -> List[str]:
    """Strip tags and drop empties and repeats, keeping first-seen order."""
    seen: set[str] = set()
    result: List[str] = []
    for tag in tags or ():
        cleaned = str(tag).strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        result.append(cleaned)
    return result


_META_FIELDS = (
    "id",
    "name",
    "description",
    "framework",
    "platform",
    "language",
    "version",
    "author",
    "tags",
    "created",
    "updated",
    "source_files",
    "main_file",
    "external_styles",
    "partial_import",
    "snippet",
    "previewable",
)


@dataclass
class ComponentMeta:
    """Canonical metadata record persisted as ``meta.json``."""

    id: str
    name: str
    description: str = ""
    framework: str = "HTML"
    platform: str = "Web"
    language: str = ""
    version: str = DEFAULT_VERSION
    author: str = ""
    tags: List[str] = field(default_factory=list)
    created: str = ""
    updated: str = ""
    source_files: List[str] = field(default_factory=list)
    main_file: str = ""
    external_styles: List[str] = field(default_factory=list)
    partial_import: bool = False
    snippet: bool = False
    previewable: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.framework = canonical_framework(self.framework)
        self.tags = unique_tags(self.tags)
        self.previewable = is_previewable(self.framework)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        for name in _META_FIELDS:
            value = getattr(self, name)
            data[name] = list(value) if isinstance(value, list) else value
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ComponentMeta":
        """Build a record from a ``meta.json`` mapping, tolerating missing fields."""
        extra = {key: value for key, value in payload.items() if key not in _META_FIELDS}
        name = _text(payload.get("name")) or _text(payload.get("id"))
        return cls(
            id=_text(payload.get("id")),
            name=name,
            description=_text(payload.get("description")),
            framework=_text(payload.get("framework")) or "HTML",
            platform=_text(payload.get("platform")),
            language=_text(payload.get("language")),
            version=_text(payload.get("version")) or DEFAULT_VERSION,
            author=_text(payload.get("author")),
            tags=_text_list(payload.get("tags")),
            created=_text(payload.get("created")),
            updated=_text(payload.get("updated")),
            source_files=_text_list(payload.get("source_files")),
            main_file=_text(payload.get("main_file")),
            external_styles=_text_list(payload.get("external_styles")),
            partial_import=bool(payload.get("partial_import", False)),
            snippet=bool(payload.get("snippet", False)),
            extra=extra,
        )


@dataclass
class StoreEntry:
    """A located component: its metadata plus where it lives on disk."""

    meta: ComponentMeta
    path: Path
    shard: str


@dataclass
class ComponentRecord:
    """Metadata together with the loaded source file contents."""

    meta: ComponentMeta
    path: Path
    shard: str
    source_files: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = self.meta.to_dict()
        data["path"] = str(self.path)
        data["sourceFiles"] = dict(self.source_files)
        return data


@dataclass
class ImportFile:
    """One input file offered to the import classifier."""

    name: str
    content: str
    is_main: bool = False


@dataclass
class ImportOverrides:
    """User-supplied values that take precedence over detection."""

    name: Optional[str] = None
    description: Optional[str] = None
    framework: Optional[str] = None
    platform: Optional[str] = None
    language: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    main_file: Optional[str] = None
    external_styles: List[str] = field(default_factory=list)


@dataclass
class FolderPayload:
    name: str
    files: List[ImportFile]


@dataclass
class SnippetPayload:
    code: str
    language: Optional[str] = None


@dataclass
class ImportRequest:
    """Raw import input: ``kind`` selects how ``payload`` is interpreted.

    ``folder`` expects a :class:`FolderPayload`, ``files`` a list of
    :class:`ImportFile` and ``snippet`` a :class:`SnippetPayload`.
    """

    kind: str
    payload: Any
    overrides: ImportOverrides = field(default_factory=ImportOverrides)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ComponentMeta",
    "ComponentRecord",
    "FolderPayload",
    "ImportFile",
    "ImportOverrides",
    "ImportRequest",
    "KNOWN_FRAMEWORKS",
    "PREVIEWABLE_FRAMEWORKS",
    "SnippetPayload",
    "StoreEntry",
    "canonical_framework",
    "derive_id",
    "is_previewable",
    "unique_tags",
    "utc_timestamp",
]
