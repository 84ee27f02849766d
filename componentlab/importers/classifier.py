"""Turns raw folder, file-list or snippet input into a storable component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping

from ..config import ImportConfig
from ..errors import InvalidComponentError, UnsupportedImportKindError
from ..logging import get_logger
from ..models import (
    DEFAULT_VERSION,
    ComponentMeta,
    FolderPayload,
    ImportFile,
    ImportOverrides,
    ImportRequest,
    SnippetPayload,
    canonical_framework,
    derive_id,
    utc_timestamp,
)
from .rules import (
    detect_framework,
    detect_language,
    detect_main_file,
    snippet_extension,
    snippet_framework,
    snippet_language,
)

_LOGGER = get_logger("importers.classifier")

IMPORT_KINDS = ("folder", "files", "snippet")


@dataclass
class ClassifiedImport:
    """Normalised metadata plus the file mapping ready for persistence."""

    meta: ComponentMeta
    source_files: Dict[str, str] = field(default_factory=dict)


@dataclass
class _Draft:
    name: str
    files: List[ImportFile]
    framework: str
    language: str
    main_file: str
    partial_import: bool = False
    snippet: bool = False


class ImportClassifier:
    """Infers framework, language and main file for an import request."""

    def __init__(self, config: ImportConfig | None = None) -> None:
        self._config = config or ImportConfig()
        self._handlers: Dict[str, Callable[[Any, ImportOverrides], _Draft]] = {
            "folder": self._draft_folder,
            "files": self._draft_files,
            "snippet": self._draft_snippet,
        }

    def classify(self, request: ImportRequest) -> ClassifiedImport:
        handler = self._handlers.get(request.kind)
        if handler is None:
            raise UnsupportedImportKindError(request.kind)

        overrides = request.overrides or ImportOverrides()
        draft = handler(request.payload, overrides)
        if not draft.files:
            raise InvalidComponentError(f"Nothing to import: no files in {request.kind} input")

        name = (overrides.name or draft.name).strip()
        component_id = derive_id(name)
        if not component_id:
            raise InvalidComponentError(
                f"Component name {name!r} does not contain any letters or digits"
            )

        source_files = {_posix_name(file.name): file.content for file in draft.files}
        main_file = _posix_name(overrides.main_file or draft.main_file)
        if main_file and main_file not in source_files:
            raise InvalidComponentError(f"Main file {main_file!r} is not part of the import")

        framework = canonical_framework(overrides.framework) or draft.framework
        now = utc_timestamp()
        meta = ComponentMeta(
            id=component_id,
            name=name,
            description=overrides.description or "",
            framework=framework,
            platform=overrides.platform or self._config.default_platform,
            language=overrides.language or draft.language,
            version=overrides.version or DEFAULT_VERSION,
            author=overrides.author or "",
            tags=list(overrides.tags),
            created=now,
            updated=now,
            source_files=list(source_files),
            main_file=main_file,
            external_styles=list(overrides.external_styles),
            partial_import=draft.partial_import,
            snippet=draft.snippet,
        )
        _LOGGER.debug(
            "Classified %s import '%s' as %s (main file %s)",
            request.kind,
            meta.name,
            meta.framework,
            meta.main_file or "-",
        )
        return ClassifiedImport(meta=meta, source_files=source_files)

    # ------------------------------------------------------------------
    # Per-kind drafts

    def _draft_folder(self, payload: Any, overrides: ImportOverrides) -> _Draft:
        folder = _coerce_folder(payload)
        return self._draft_from_files(folder.name, folder.files, overrides)

    def _draft_files(self, payload: Any, overrides: ImportOverrides) -> _Draft:
        if not isinstance(payload, (list, tuple)):
            raise InvalidComponentError("A files import expects a list of files")
        files = [_coerce_file(item) for item in payload]
        draft = self._draft_from_files("imported-component", files, overrides)
        draft.partial_import = True
        return draft

    def _draft_snippet(self, payload: Any, overrides: ImportOverrides) -> _Draft:
        snippet = _coerce_snippet(payload)
        name = (overrides.name or "snippet").strip()
        file_name = f"{name}.{snippet_extension(snippet.language)}"
        return _Draft(
            name=name,
            files=[ImportFile(name=file_name, content=snippet.code, is_main=True)],
            framework=snippet_framework(snippet.language),
            language=snippet_language(snippet.language),
            main_file=file_name,
            snippet=True,
        )

    def _draft_from_files(
        self, default_name: str, files: List[ImportFile], overrides: ImportOverrides
    ) -> _Draft:
        framework = canonical_framework(overrides.framework) or detect_framework(files)
        return _Draft(
            name=default_name,
            files=files,
            framework=framework,
            language=detect_language(framework, files),
            main_file=detect_main_file(files),
        )


def _posix_name(name: str) -> str:
    return name.replace("\\", "/")


def _coerce_file(item: Any) -> ImportFile:
    if isinstance(item, ImportFile):
        return item
    if isinstance(item, Mapping):
        name = item.get("name")
        content = item.get("content", "")
        if not isinstance(name, str) or not isinstance(content, str):
            raise InvalidComponentError("Import files need a string name and content")
        is_main = bool(item.get("is_main", item.get("isMainFile", False)))
        return ImportFile(name=name, content=content, is_main=is_main)
    raise InvalidComponentError(f"Unsupported import file record: {item!r}")


def _coerce_folder(payload: Any) -> FolderPayload:
    if isinstance(payload, FolderPayload):
        return payload
    if isinstance(payload, Mapping):
        name = payload.get("name")
        files = payload.get("files")
        if isinstance(name, str) and isinstance(files, (list, tuple)):
            return FolderPayload(name=name, files=[_coerce_file(item) for item in files])
    raise InvalidComponentError("A folder import expects a name and a list of files")


def _coerce_snippet(payload: Any) -> SnippetPayload:
    if isinstance(payload, SnippetPayload):
        return payload
    if isinstance(payload, Mapping):
        code = payload.get("code")
        language = payload.get("language")
        if isinstance(code, str) and (language is None or isinstance(language, str)):
            return SnippetPayload(code=code, language=language)
    raise InvalidComponentError("A snippet import expects code and an optional language")


__all__ = ["ClassifiedImport", "IMPORT_KINDS", "ImportClassifier"]
