"""Configuration loading for componentlab (.componentlab.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".componentlab.yml"

COLLISION_POLICIES = ("reject", "suffix", "overwrite")

DEFAULT_IMPORT_EXTENSIONS = (
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".html",
    ".css",
    ".scss",
    ".sass",
    ".dart",
    ".swift",
    ".kt",
    ".md",
    ".json",
    ".vue",
    ".svelte",
)

DEFAULT_SKIP_DIRS = ("node_modules", ".git", "dist", "build")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class StoreConfig:
    """Where components live and how the store resolves conflicts."""

    root: Path
    collision_policy: str = "reject"
    heal_orphans: bool = True


@dataclass
class ImportConfig:
    """Defaults applied while classifying imported input."""

    default_platform: str = "Web"
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_IMPORT_EXTENSIONS))
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))


@dataclass
class ServiceConfig:
    """Bind address for the local HTTP service."""

    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class ComponentLabConfig:
    """Represents the settings defined in .componentlab.yml."""

    root: Path
    store: StoreConfig
    importing: ImportConfig = field(default_factory=ImportConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def default_config(root: Path | None = None) -> ComponentLabConfig:
    """Return defaults anchored at ``root`` (the current directory when omitted)."""
    base = (root or Path.cwd()).expanduser().resolve()
    return ComponentLabConfig(root=base, store=StoreConfig(root=base / "my_components"))


def load_config(config_path: Path) -> ComponentLabConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = default_config(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    store_data = _as_dict(data.get("store"))
    if store_data:
        root_str = _as_str(store_data.get("root"))
        if root_str:
            store_root = Path(root_str).expanduser()
            config.store.root = store_root if store_root.is_absolute() else root / store_root
        policy = _as_str(store_data.get("collision_policy"))
        if policy is not None:
            policy = policy.strip().lower()
            if policy not in COLLISION_POLICIES:
                allowed = ", ".join(COLLISION_POLICIES)
                raise ConfigError(
                    f"store.collision_policy must be one of {allowed}, got '{policy}'"
                )
            config.store.collision_policy = policy
        heal = _as_bool(store_data.get("heal_orphans"))
        if heal is not None:
            config.store.heal_orphans = heal

    import_data = _as_dict(data.get("import"))
    if import_data:
        platform = _as_str(import_data.get("default_platform"))
        if platform:
            config.importing.default_platform = platform
        if "extensions" in import_data:
            config.importing.extensions = [
                _normalise_extension(ext) for ext in _as_str_list(import_data.get("extensions"))
            ]
        if "skip_dirs" in import_data:
            config.importing.skip_dirs = _as_str_list(import_data.get("skip_dirs"))

    service_data = _as_dict(data.get("service"))
    if service_data:
        host = _as_str(service_data.get("host"))
        if host:
            config.service.host = host
        port = _as_int(service_data.get("port"))
        if port is not None:
            config.service.port = port

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "COLLISION_POLICIES",
    "ComponentLabConfig",
    "ConfigError",
    "ImportConfig",
    "ServiceConfig",
    "StoreConfig",
    "default_config",
    "load_config",
]
