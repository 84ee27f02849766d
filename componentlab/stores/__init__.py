"""On-disk component store: path layout, scanning and per-entry persistence."""

from .paths import META_FILENAME, StorePaths
from .repository import UNREADABLE_FILE_MARKER, MetadataRepository
from .scanner import EntryScanner, ScanResult, read_meta, reconcile

__all__ = [
    "EntryScanner",
    "META_FILENAME",
    "MetadataRepository",
    "ScanResult",
    "StorePaths",
    "UNREADABLE_FILE_MARKER",
    "read_meta",
    "reconcile",
]
