"""Listening and reading part routers."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from exam_builder.api.deps import get_manager, get_store, prefill_param
from exam_builder.composition import CompositionManager
from exam_builder.config import settings
from exam_builder.core.prefill import ParentRef
from exam_builder.core.security import require_builder
from exam_builder.db.models.enums import EntityKind, PartKind
from exam_builder.db.models.user import User
from exam_builder.store import EntityStore
from . import schemas, services

PREFILL_ALIASES = {
    PartKind.LISTENING: "listeningId",
    PartKind.READING: "readingId",
}


def build_router(part_kind: PartKind) -> APIRouter:
    router = APIRouter()
    label = f"{part_kind.value.capitalize()} part"
    parent_prefill = prefill_param(PREFILL_ALIASES[part_kind], EntityKind(part_kind.value))

    @router.post("/", response_model=schemas.PartOut, status_code=201, summary=f"Create {label}")
    def create_part(
        part: schemas.PartCreate,
        parent: Optional[ParentRef] = Depends(parent_prefill),
        manager: CompositionManager = Depends(get_manager),
        current_user: User = Depends(require_builder)
    ):
        return services.create_part(manager, part_kind, part, parent)

    @router.get("/", response_model=list[schemas.PartOut], summary=f"List {label}s")
    def read_parts(
        linked: Optional[bool] = None,
        limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1),
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.get_parts(store, part_kind, linked, limit)

    @router.get("/{part_id}", response_model=schemas.PartOut, summary=f"Read {label}")
    def read_part(
        part_id: str,
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.get_part(store, part_kind, part_id)

    @router.put("/{part_id}", response_model=schemas.PartOut, summary=f"Update {label}")
    def update_part(
        part_id: str,
        part: schemas.PartUpdate,
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.update_part(store, part_kind, part_id, part)

    @router.delete("/{part_id}", summary=f"Delete {label}")
    def delete_part(
        part_id: str,
        manager: CompositionManager = Depends(get_manager),
        current_user: User = Depends(require_builder)
    ):
        services.delete_part(manager, part_kind, part_id)
        return {"message": f"{label} deleted"}

    return router
