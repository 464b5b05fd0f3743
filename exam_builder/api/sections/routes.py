"""Listening, reading and writing section routers, one per kind."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from exam_builder.api.deps import get_manager, get_store, prefill_param
from exam_builder.api.parts.schemas import PartOut
from exam_builder.api.writing_tasks.schemas import WritingTaskOut
from exam_builder.composition import CompositionManager
from exam_builder.config import settings
from exam_builder.core.prefill import ParentRef
from exam_builder.core.security import require_builder
from exam_builder.db.models.enums import EntityKind, SectionKind
from exam_builder.db.models.user import User
from exam_builder.store import EntityStore
from . import schemas, services


def build_router(section_kind: SectionKind) -> APIRouter:
    router = APIRouter()
    kind = EntityKind(section_kind.value)
    label = section_kind.value.capitalize()

    if section_kind == SectionKind.WRITING:
        children_path, child_model = "/{section_id}/linked-tasks", WritingTaskOut
    else:
        children_path, child_model = "/{section_id}/linked-parts", PartOut

    @router.post("/", response_model=schemas.SectionOut, status_code=201,
                 summary=f"Create {label}")
    def create_section(
        section: schemas.SectionCreate,
        parent: Optional[ParentRef] = Depends(prefill_param("testId", EntityKind.TEST)),
        manager: CompositionManager = Depends(get_manager),
        current_user: User = Depends(require_builder)
    ):
        return services.create_section(manager, kind, section, parent)

    @router.get("/", response_model=list[schemas.SectionOut], summary=f"List {label}s")
    def read_sections(
        linked: Optional[bool] = None,
        limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1),
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.get_sections(store, kind, linked, limit)

    @router.get("/{section_id}", response_model=schemas.SectionOut, summary=f"Read {label}")
    def read_section(
        section_id: str,
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.get_section(store, kind, section_id)

    @router.get(children_path, response_model=list[child_model], summary=f"{label} children in order")
    def read_children(
        section_id: str,
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.get_children(store, kind, section_id)

    @router.put("/{section_id}", response_model=schemas.SectionOut, summary=f"Update {label}")
    def update_section(
        section_id: str,
        section: schemas.SectionUpdate,
        store: EntityStore = Depends(get_store),
        current_user: User = Depends(require_builder)
    ):
        return services.update_section(store, kind, section_id, section)

    @router.delete("/{section_id}", summary=f"Delete {label}")
    def delete_section(
        section_id: str,
        manager: CompositionManager = Depends(get_manager),
        current_user: User = Depends(require_builder)
    ):
        services.delete_section(manager, kind, section_id)
        return {"message": f"{label} deleted"}

    return router
