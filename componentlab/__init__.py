"""Local component library: sharded on-disk store plus import classification."""

from .errors import (
    ComponentConflictError,
    ComponentNotFoundError,
    InvalidComponentError,
    StoreError,
    UnsupportedImportKindError,
)
from .models import ComponentMeta, ComponentRecord, ImportFile, ImportOverrides, ImportRequest
from .store import ComponentStore

__all__ = [
    "ComponentConflictError",
    "ComponentMeta",
    "ComponentNotFoundError",
    "ComponentRecord",
    "ComponentStore",
    "ImportFile",
    "ImportOverrides",
    "ImportRequest",
    "InvalidComponentError",
    "StoreError",
    "UnsupportedImportKindError",
]
