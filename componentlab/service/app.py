"""FastAPI application exposing the component store to local clients."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ComponentLabConfig, load_config
from ..errors import (
    ComponentConflictError,
    ComponentNotFoundError,
    InvalidComponentError,
    UnsupportedImportKindError,
)
from ..models import ComponentMeta, ImportOverrides, ImportRequest
from ..store import ComponentStore

_T = TypeVar("_T")


class ImportOverridesModel(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    framework: Optional[str] = None
    platform: Optional[str] = None
    language: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    main_file: Optional[str] = None
    external_styles: List[str] = Field(default_factory=list)


class ImportRequestModel(BaseModel):
    kind: str
    payload: Any = None
    config: ImportOverridesModel = Field(default_factory=ImportOverridesModel)


class SaveRequest(BaseModel):
    meta: Dict[str, Any]
    source_files: Dict[str, str]


class SaveResponse(BaseModel):
    path: str
    meta: Dict[str, Any]


class ComponentResponse(BaseModel):
    meta: Dict[str, Any]
    path: str
    shard: str
    source_files: Dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str


def _default_store() -> ComponentStore:
    return ComponentStore.from_config(load_config(Path.cwd()))


async def _run_blocking(func: Callable[[], _T]) -> _T:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def create_app(store_factory: Callable[[], ComponentStore] = _default_store) -> FastAPI:
    """Create the FastAPI application exposing component store operations."""

    app = FastAPI(title="ComponentLab Service", version="1.0.0")

    async def get_store() -> ComponentStore:
        return store_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/components")
    async def list_components(
        query: Optional[str] = None,
        framework: Optional[str] = None,
        platform: Optional[str] = None,
        store: ComponentStore = Depends(get_store),
    ) -> List[Dict[str, Any]]:
        entries = await _run_blocking(
            lambda: store.search(query, framework=framework, platform=platform)
        )
        return [
            {**entry.meta.to_dict(), "path": str(entry.path), "shard": entry.shard}
            for entry in entries
        ]

    @app.get("/components/{component_id}", response_model=ComponentResponse)
    async def get_component(
        component_id: str, store: ComponentStore = Depends(get_store)
    ) -> ComponentResponse:
        record = await _run_blocking(lambda: store.get(component_id))
        return ComponentResponse(
            meta=record.meta.to_dict(),
            path=str(record.path),
            shard=record.shard,
            source_files=record.source_files,
        )

    @app.put("/components", response_model=SaveResponse)
    async def save_component(
        payload: SaveRequest, store: ComponentStore = Depends(get_store)
    ) -> SaveResponse:
        meta = ComponentMeta.from_dict(payload.meta)
        result = await _run_blocking(lambda: store.save(meta, payload.source_files))
        return SaveResponse(path=str(result.path), meta=result.meta.to_dict())

    @app.delete("/components/{component_id}")
    async def delete_component(
        component_id: str, store: ComponentStore = Depends(get_store)
    ) -> Dict[str, bool]:
        await _run_blocking(lambda: store.delete(component_id))
        return {"success": True}

    @app.post("/components/import")
    async def import_component(
        payload: ImportRequestModel, store: ComponentStore = Depends(get_store)
    ) -> Dict[str, Any]:
        request = ImportRequest(
            kind=payload.kind,
            payload=payload.payload,
            overrides=ImportOverrides(**payload.config.model_dump()),
        )
        meta = await _run_blocking(lambda: store.import_component(request))
        return {"success": True, "component": meta.to_dict()}

    @app.exception_handler(ComponentNotFoundError)
    async def not_found_handler(_: Any, exc: ComponentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ComponentConflictError)
    async def conflict_handler(_: Any, exc: ComponentConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedImportKindError)
    async def unsupported_kind_handler(_: Any, exc: UnsupportedImportKindError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(InvalidComponentError)
    async def invalid_handler(_: Any, exc: InvalidComponentError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    config: ComponentLabConfig, host: str = "127.0.0.1", port: int = 8765
) -> None:  # pragma: no cover - integration path
    app = create_app(lambda: ComponentStore.from_config(config))
    uvicorn.run(app, host=host, port=port)
