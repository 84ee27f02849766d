"""Exception types raised by the component store."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base class for failures surfaced by store operations."""


class ComponentNotFoundError(StoreError, LookupError):
    """Raised when no stored component matches the requested id."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component not found: {component_id}")
        self.component_id = component_id


class UnsupportedImportKindError(StoreError, ValueError):
    """Raised for an import kind other than folder, files or snippet."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unsupported import kind: {kind!r}")
        self.kind = kind


class ComponentConflictError(StoreError):
    """Raised when a different component already owns the derived id."""

    def __init__(self, component_id: str, existing_name: str, new_name: str) -> None:
        super().__init__(
            f"Component id '{component_id}' is already used by '{existing_name}' "
            f"(cannot store '{new_name}')"
        )
        self.component_id = component_id
        self.existing_name = existing_name
        self.new_name = new_name


class InvalidComponentError(StoreError, ValueError):
    """Raised when metadata or file names cannot be stored safely."""


__all__ = [
    "ComponentConflictError",
    "ComponentNotFoundError",
    "InvalidComponentError",
    "StoreError",
    "UnsupportedImportKindError",
]
