"""Ordered detection rules used while classifying imported files.

Every table is evaluated top to bottom and the first matching rule wins, so
the order of the tuples below is the precedence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, FrozenSet, Optional, Sequence

from ..models import ImportFile, canonical_framework

DEFAULT_FRAMEWORK = "HTML"
DEFAULT_SNIPPET_FRAMEWORK = "JavaScript"
DEFAULT_SNIPPET_EXTENSION = "js"

_REACT_IMPORT = re.compile(r"import\s+React|from\s+['\"]react['\"]")


@dataclass(frozen=True)
class FileSet:
    """Extension and content view of the input files that rules inspect."""

    extensions: FrozenSet[str]
    content: str

    @classmethod
    def from_files(cls, files: Sequence[ImportFile]) -> "FileSet":
        extensions = frozenset(PurePosixPath(file.name).suffix.lower() for file in files)
        content = "\n".join(file.content or "" for file in files)
        return cls(extensions=extensions, content=content)

    def has(self, *extensions: str) -> bool:
        return any(ext in self.extensions for ext in extensions)


@dataclass(frozen=True)
class FrameworkRule:
    framework: str
    matches: Callable[[FileSet], bool]


FRAMEWORK_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule("React", lambda fs: fs.has(".jsx", ".tsx") or bool(_REACT_IMPORT.search(fs.content))),
    FrameworkRule("Vue", lambda fs: fs.has(".vue") or "<template>" in fs.content),
    FrameworkRule("Angular", lambda fs: "@Component" in fs.content or "angular" in fs.content),
    FrameworkRule("Svelte", lambda fs: fs.has(".svelte")),
    FrameworkRule("Flutter", lambda fs: fs.has(".dart")),
    FrameworkRule("HTML", lambda fs: fs.has(".html")),
    FrameworkRule("JavaScript", lambda fs: fs.has(".js", ".ts")),
)


def detect_framework(files: Sequence[ImportFile]) -> str:
    file_set = FileSet.from_files(files)
    for rule in FRAMEWORK_RULES:
        if rule.matches(file_set):
            return rule.framework
    return DEFAULT_FRAMEWORK


_MAIN_FILE_PREFIXES = ("index.", "main.")


def is_main_candidate(file: ImportFile) -> bool:
    base = PurePosixPath(file.name).name.lower()
    return base.startswith(_MAIN_FILE_PREFIXES) or file.is_main


def detect_main_file(files: Sequence[ImportFile]) -> str:
    """First ``index.*``/``main.*``/flagged file, else the first file, else ''."""
    for file in files:
        if is_main_candidate(file):
            return file.name
    return files[0].name if files else ""


@dataclass(frozen=True)
class LanguageRule:
    language: str
    matches: Callable[[str, FileSet], bool]


LANGUAGE_RULES: tuple[LanguageRule, ...] = (
    LanguageRule("TSX", lambda fw, fs: fw == "React" and fs.has(".tsx")),
    LanguageRule("JSX", lambda fw, fs: fw in {"React", "React Native"}),
    LanguageRule("Vue", lambda fw, fs: fw == "Vue"),
    LanguageRule("Dart", lambda fw, fs: fw in {"Flutter", "Dart"}),
    LanguageRule("TypeScript", lambda fw, fs: fw == "Angular" or fs.has(".ts")),
    LanguageRule("Svelte", lambda fw, fs: fw == "Svelte"),
    LanguageRule("HTML", lambda fw, fs: fw == "HTML"),
    LanguageRule("CSS", lambda fw, fs: fw == "CSS"),
    LanguageRule("Swift", lambda fw, fs: fw == "Swift"),
    LanguageRule("Kotlin", lambda fw, fs: fw == "Kotlin"),
)


def detect_language(framework: str, files: Sequence[ImportFile]) -> str:
    file_set = FileSet.from_files(files)
    canonical = canonical_framework(framework)
    for rule in LANGUAGE_RULES:
        if rule.matches(canonical, file_set):
            return rule.language
    return "JavaScript"


# Snippet language tag -> (file extension, display language)
SNIPPET_LANGUAGES: dict[str, tuple[str, str]] = {
    "javascript": ("js", "JavaScript"),
    "typescript": ("ts", "TypeScript"),
    "react": ("jsx", "JSX"),
    "vue": ("vue", "Vue"),
    "html": ("html", "HTML"),
    "css": ("css", "CSS"),
    "dart": ("dart", "Dart"),
    "swift": ("swift", "Swift"),
    "kotlin": ("kt", "Kotlin"),
}


def snippet_extension(language: Optional[str]) -> str:
    entry = SNIPPET_LANGUAGES.get((language or "").strip().lower())
    return entry[0] if entry else DEFAULT_SNIPPET_EXTENSION


def snippet_language(language: Optional[str]) -> str:
    if not language or not language.strip():
        return "JavaScript"
    entry = SNIPPET_LANGUAGES.get(language.strip().lower())
    return entry[1] if entry else language.strip()


def snippet_framework(language: Optional[str]) -> str:
    if not language or not language.strip():
        return DEFAULT_SNIPPET_FRAMEWORK
    return canonical_framework(language)


__all__ = [
    "FRAMEWORK_RULES",
    "FileSet",
    "FrameworkRule",
    "LANGUAGE_RULES",
    "LanguageRule",
    "SNIPPET_LANGUAGES",
    "detect_framework",
    "detect_language",
    "detect_main_file",
    "is_main_candidate",
    "snippet_extension",
    "snippet_framework",
    "snippet_language",
]
