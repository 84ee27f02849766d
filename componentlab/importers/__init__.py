"""Import classification: detection rules, disk readers and the classifier."""

from .classifier import IMPORT_KINDS, ClassifiedImport, ImportClassifier
from .folder import read_files, read_folder
from .rules import detect_framework, detect_language, detect_main_file

__all__ = [
    "ClassifiedImport",
    "IMPORT_KINDS",
    "ImportClassifier",
    "detect_framework",
    "detect_language",
    "detect_main_file",
    "read_files",
    "read_folder",
]
